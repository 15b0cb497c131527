"""Connection sessions and the byte sources they read from."""

from gpslink.link.session import CONNECT_TIMEOUT, READ_SIZE, ConnectionSession
from gpslink.link.sources import ByteSource, SerialByteSource, SocketByteSource
from gpslink.link.types import SessionEnd, SessionState

__all__ = [
    "CONNECT_TIMEOUT",
    "READ_SIZE",
    "ByteSource",
    "ConnectionSession",
    "SerialByteSource",
    "SessionEnd",
    "SessionState",
    "SocketByteSource",
]
