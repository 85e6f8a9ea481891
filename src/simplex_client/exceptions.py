"""
Client Exceptions

Every failure raised by SimplexClient derives from the builtin
ConnectionError, so callers that already handle ConnectionError keep
working. The underlying transport error is chained as ``__cause__``.
"""

from typing import Optional


class SimplexClientError(ConnectionError):
    """
    Base class for client failures.

    Attributes:
        operation: Short tag naming the operation that failed
                   ("connect", "send" or "close")
    """

    operation = "client"

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        if operation is not None:
            self.operation = operation


class ConnectFailure(SimplexClientError):
    """The WebSocket connection could not be opened."""

    operation = "connect"


class SendFailure(SimplexClientError):
    """Writing a frame failed on a connection believed to be open."""

    operation = "send"


class CloseFailure(SimplexClientError):
    """The close handshake failed; the connection handle is kept."""

    operation = "close"
