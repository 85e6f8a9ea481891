#!/usr/bin/env python3
"""
Command Line Client

Connects to the chat server, sends one command and closes the connection,
all under an overall deadline.

Usage:
    simplex-client message alice "Hello, World!"
    simplex-client --url ws://localhost:3333 message "#team" "Standup in 5"
    simplex-client name alice-laptop

Environment:
    SIMPLEX_URL             WebSocket URL (default ws://localhost:3333)
    SIMPLEX_TIMEOUT         Deadline in seconds (default 60)
    SIMPLEX_CORR_ID_PREFIX  Correlation id prefix (default simplex-client)
    LOG_LEVEL               Logging level (default INFO)
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional, Sequence

from .exceptions import CloseFailure, SimplexClientError
from .protocol import DEFAULT_CORR_ID_PREFIX
from .service import SimplexClient

logger = logging.getLogger(__name__)

DEFAULT_URL = "ws://localhost:3333"
DEFAULT_TIMEOUT = 60.0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from the environment."""
    parser = argparse.ArgumentParser(
        prog="simplex-client",
        description="Send a command to a chat server over WebSocket",
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("SIMPLEX_URL", DEFAULT_URL),
        help="WebSocket URL of the chat server",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=os.environ.get("SIMPLEX_TIMEOUT", str(DEFAULT_TIMEOUT)),
        help="Overall deadline in seconds",
    )
    parser.add_argument(
        "--prefix",
        default=os.environ.get(
            "SIMPLEX_CORR_ID_PREFIX", DEFAULT_CORR_ID_PREFIX
        ),
        help="Prefix for correlation ids",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    message = commands.add_parser("message", help="Send a message")
    message.add_argument(
        "recipient", help="@contact, #group, or a bare contact name"
    )
    message.add_argument("text", help="Message text")

    name = commands.add_parser("name", help="Change the display name")
    name.add_argument("name", help="New display name")

    return parser


async def run(client: SimplexClient, args: argparse.Namespace) -> None:
    """
    Connect, send the requested command and close the connection.

    When the command fails, a failure to close afterwards is logged so
    the command's own error is the one reported.
    """
    await client.connect()
    try:
        if args.command == "message":
            await client.send_message(args.recipient, args.text)
        elif args.command == "name":
            await client.change_display_name(args.name)
    except BaseException:
        try:
            await client.close()
        except CloseFailure as e:
            logger.warning(f"Close after failed command also failed: {e}")
        raise
    await client.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the command line client."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    client = SimplexClient(args.url, corr_id_prefix=args.prefix)

    try:
        asyncio.run(asyncio.wait_for(run(client, args), args.timeout))
    except SimplexClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except asyncio.TimeoutError:
        print(
            f"Error: timed out after {args.timeout:g}s", file=sys.stderr
        )
        return 1
    except KeyboardInterrupt:
        print("\nExiting...")
        return 130

    logger.info("Command sent successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
