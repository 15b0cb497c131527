"""gpslink: real-time position fixes from a serial-over-radio NMEA stream."""

from gpslink.fix import Fix, FixExtractor
from gpslink.link import (
    ConnectionSession,
    SerialByteSource,
    SessionEnd,
    SessionState,
    SocketByteSource,
)
from gpslink.nmea import (
    ChecksumMismatchError,
    FixQuality,
    SentenceParseError,
    parse_sentence,
    validate_checksum,
)
from gpslink.stream import FrameReassembler

__all__ = [
    "ChecksumMismatchError",
    "ConnectionSession",
    "Fix",
    "FixExtractor",
    "FixQuality",
    "FrameReassembler",
    "SentenceParseError",
    "SerialByteSource",
    "SessionEnd",
    "SessionState",
    "SocketByteSource",
    "parse_sentence",
    "validate_checksum",
]
