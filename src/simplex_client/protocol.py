"""
Protocol Messages for the Chat Server

This module builds the command envelopes sent to the chat server over
WebSocket.

Message Format:
    Every frame is a JSON object with exactly two fields:
    {
        "corrId": "simplex-client-00421337",
        "cmd": "@alice Hello"
    }

Command grammar:
    @<contact> <message>    direct message
    #<group> <message>      group message
    /p <name>               change display name
"""

import json
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .membership import MembershipOracle

DEFAULT_CORR_ID_PREFIX = "simplex-client"

DIRECT_SIGIL = "@"
GROUP_SIGIL = "#"

# Upper bound (exclusive) of the numeric correlation id suffix
_CORR_ID_RANGE = 10_000_000


def new_correlation_id(prefix: str = DEFAULT_CORR_ID_PREFIX) -> str:
    """
    Generate a correlation id such as ``simplex-client-00421337``.

    Ids are random, not unique. Replies are never matched against them,
    so a collision is harmless.
    """
    return f"{prefix}-{random.randrange(_CORR_ID_RANGE):08d}"


@dataclass
class SimplexRequest:
    """
    Command envelope sent to the chat server.

    Attributes:
        corr_id: Correlation id the server echoes back in its reply
        cmd: Command line in the server's command grammar
    """

    corr_id: str
    cmd: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"corrId": self.corr_id, "cmd": self.cmd}

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())


def build_request(
    command: str, prefix: str = DEFAULT_CORR_ID_PREFIX
) -> SimplexRequest:
    """
    Wrap a command in an envelope with a fresh correlation id.

    The command is passed through verbatim; the server is the authority
    on its grammar.
    """
    return SimplexRequest(corr_id=new_correlation_id(prefix), cmd=command)


def prepare_recipient(
    recipient: str, membership: Optional[MembershipOracle] = None
) -> Tuple[str, str]:
    """
    Split a recipient reference into its sigil and bare name.

    Exactly one leading ``@`` or ``#`` is stripped and returned as the
    sigil. An untagged recipient is addressed as a group only when the
    membership oracle positively says so; otherwise it is a direct
    target.

    Args:
        recipient: Recipient reference, e.g. "@alice", "#team" or "alice"
        membership: Optional oracle consulted for untagged recipients

    Returns:
        Tuple of (sigil, name)
    """
    if recipient.startswith(DIRECT_SIGIL):
        return DIRECT_SIGIL, recipient[len(DIRECT_SIGIL):]
    if recipient.startswith(GROUP_SIGIL):
        return GROUP_SIGIL, recipient[len(GROUP_SIGIL):]

    if membership is not None and membership.is_group_member(recipient):
        return GROUP_SIGIL, recipient
    return DIRECT_SIGIL, recipient


def build_message_request(
    recipient: str,
    message: str,
    prefix: str = DEFAULT_CORR_ID_PREFIX,
    membership: Optional[MembershipOracle] = None,
) -> SimplexRequest:
    """Build the envelope sending ``message`` to a contact or group."""
    sigil, name = prepare_recipient(recipient, membership)
    return build_request(f"{sigil}{name} {message}", prefix)


def build_display_name_request(
    name: str, prefix: str = DEFAULT_CORR_ID_PREFIX
) -> SimplexRequest:
    """Build the envelope changing the user's display name."""
    return build_request(f"/p {name}", prefix)
