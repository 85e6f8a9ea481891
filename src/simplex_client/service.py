"""
Client Service for the Chat Server

This module provides SimplexClient, which owns a single WebSocket
connection to the chat server and writes command envelopes to it.

Architecture:
    - One connection per client, opened lazily on the first send
    - Supports dependency injection for the network layer (for testability)
    - Async/await pattern for non-blocking I/O operations

Connection states:
    no connection --connect--> connected --close--> no connection

A failed connect leaves the client without a connection. A failed send or
close leaves the connection in place so the caller can retry or close.

The client is meant to be driven by one task at a time; it does no
locking of its own. Timeouts and cancellation come from the caller
(asyncio.wait_for, asyncio.timeout) and CancelledError is never wrapped.
"""

import logging
from typing import Callable, Optional

import websockets
from websockets.asyncio.client import ClientConnection

from .exceptions import CloseFailure, ConnectFailure, SendFailure
from .membership import MembershipOracle, UnknownMembership
from .protocol import (
    DEFAULT_CORR_ID_PREFIX,
    SimplexRequest,
    build_display_name_request,
    build_message_request,
)

logger = logging.getLogger(__name__)

# Normal closure, RFC 6455 section 7.4.1
CLOSE_NORMAL = 1000
DEFAULT_CLOSE_REASON = "simplex client closed"


class SimplexClient:
    """
    Client for sending commands to the chat server.

    Attributes:
        url: WebSocket URL of the chat server (e.g., ws://localhost:3333)
        corr_id_prefix: Prefix for generated correlation ids
        membership: Oracle consulted when a recipient has no sigil
        websocket: Active WebSocket connection (None if not connected)
    """

    def __init__(
        self,
        url: str,
        corr_id_prefix: str = DEFAULT_CORR_ID_PREFIX,
        membership: Optional[MembershipOracle] = None,
        websocket_factory: Optional[Callable] = None,
        close_reason: str = DEFAULT_CLOSE_REASON,
    ):
        """
        Initialize the client.

        Args:
            url: WebSocket URL of the chat server
            corr_id_prefix: Prefix for generated correlation ids
            membership: Optional membership oracle
            websocket_factory: Optional factory for creating WebSocket
                             connections (for dependency injection/testing)
            close_reason: Reason text sent with the close frame
        """
        self.url = url
        self.corr_id_prefix = corr_id_prefix
        self.membership = membership or UnknownMembership()
        self.close_reason = close_reason
        self.websocket: Optional[ClientConnection] = None
        self._websocket_factory = websocket_factory or websockets.connect

        logger.debug(f"SimplexClient initialized for {url}")

    @property
    def is_connected(self) -> bool:
        """Check if a connection is currently held."""
        return self.websocket is not None

    async def connect(self) -> None:
        """
        Open the WebSocket connection unless one is already held.

        Raises:
            ConnectFailure: If the connection cannot be opened
        """
        if self.websocket is not None:
            return

        logger.info(f"Connecting to {self.url}...")
        try:
            self.websocket = await self._websocket_factory(self.url)
        except Exception as e:
            logger.error(f"Failed to connect to {self.url}: {e}")
            raise ConnectFailure(
                f"failed to connect to websocket: {e}"
            ) from e
        logger.info("Connected to chat server")

    async def close(self) -> None:
        """
        Close the WebSocket connection with a normal closure.

        The connection handle is only released once the close handshake
        succeeds, so a failed close can be retried.

        Raises:
            CloseFailure: If the close handshake fails
        """
        if self.websocket is None:
            return

        try:
            await self.websocket.close(
                code=CLOSE_NORMAL, reason=self.close_reason
            )
        except Exception as e:
            logger.error(f"Failed to close connection: {e}")
            raise CloseFailure(f"failed to close websocket: {e}") from e

        self.websocket = None
        logger.info("Disconnected from chat server")

    async def send(self, request: SimplexRequest) -> None:
        """
        Write a request envelope as a single text frame.

        Connects first if no connection is held.

        Args:
            request: Envelope to send

        Raises:
            ConnectFailure: If the lazy connect fails
            SendFailure: If writing the frame fails
        """
        await self.connect()

        logger.debug(f"Sending {request.corr_id}: {request.cmd}")
        try:
            await self.websocket.send(request.to_json())
        except Exception as e:
            logger.error(f"Failed to send {request.corr_id}: {e}")
            raise SendFailure(f"failed to send message: {e}") from e

    async def send_message(self, recipient: str, message: str) -> None:
        """
        Send a message to a contact or group.

        Args:
            recipient: "@contact", "#group", or a bare name (direct target)
            message: Message text
        """
        logger.info(f"Sending message to {recipient}")
        request = build_message_request(
            recipient,
            message,
            prefix=self.corr_id_prefix,
            membership=self.membership,
        )
        await self.send(request)

    async def change_display_name(self, name: str) -> None:
        """Change the display name of the user profile."""
        logger.info(f"Changing display name to {name}")
        await self.send(
            build_display_name_request(name, prefix=self.corr_id_prefix)
        )

    def is_group_member(self, group: str) -> Optional[bool]:
        """Ask the membership oracle whether the user is in ``group``."""
        return self.membership.is_group_member(group)

    def is_contact(self, contact: str) -> Optional[bool]:
        """Ask the membership oracle whether ``contact`` is known."""
        return self.membership.is_contact(contact)

    async def __aenter__(self) -> "SimplexClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
