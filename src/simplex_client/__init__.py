"""
SimpleX Chat Client Package

This package provides a minimal WebSocket client for a chat server: it
builds command envelopes (direct and group messages, display name
changes) and writes them over a lazily opened connection.
"""

from .exceptions import (
    SimplexClientError,
    ConnectFailure,
    SendFailure,
    CloseFailure,
)
from .membership import MembershipOracle, UnknownMembership
from .protocol import (
    DEFAULT_CORR_ID_PREFIX,
    SimplexRequest,
    new_correlation_id,
    build_request,
    prepare_recipient,
    build_message_request,
    build_display_name_request,
)
from .service import SimplexClient

__all__ = [
    # Client
    "SimplexClient",
    # Errors
    "SimplexClientError",
    "ConnectFailure",
    "SendFailure",
    "CloseFailure",
    # Membership
    "MembershipOracle",
    "UnknownMembership",
    # Request builders
    "DEFAULT_CORR_ID_PREFIX",
    "SimplexRequest",
    "new_correlation_id",
    "build_request",
    "prepare_recipient",
    "build_message_request",
    "build_display_name_request",
]
