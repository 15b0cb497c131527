"""Session lifecycle types."""

from enum import Enum


class SessionState(Enum):
    """Lifecycle of a ``ConnectionSession``.

    IDLE -> CONNECTING -> CONNECTED -> CLOSING -> CLOSED, with
    CONNECTING -> CLOSED when the connection cannot be made.
    """

    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CLOSING = "closing"
    CLOSED = "closed"


class SessionEnd(Enum):
    """Why a session's read loop terminated.

    This is the only failure information a session exposes; a connection
    manager can use it to decide whether to reconnect.
    """

    CANCELLED = "cancelled"
    END_OF_STREAM = "end_of_stream"
    READ_ERROR = "read_error"
    CONNECT_FAILED = "connect_failed"
