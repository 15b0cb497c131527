"""Exceptions raised while decoding NMEA frames.

All of them derive from ``SentenceParseError`` (itself a ``ValueError``) so
that a read loop can skip a bad frame with a single ``except`` clause.
"""

__all__ = [
    "ChecksumMismatchError",
    "MalformedSentenceError",
    "SentenceParseError",
]


class SentenceParseError(ValueError):
    """A frame could not be decoded into a sentence."""

    def __init__(self, message: str, frame: str) -> None:
        super().__init__(message)
        self.frame = frame


class MalformedSentenceError(SentenceParseError):
    """The frame is structurally invalid (no start delimiter, bad checksum text, ...)."""


class ChecksumMismatchError(SentenceParseError):
    """The frame's checksum does not match its content."""

    def __init__(self, frame: str, expected: int, actual: int) -> None:
        super().__init__(
            f"checksum mismatch: expected {expected:02X}, got {actual:02X}",
            frame,
        )
        self.expected = expected
        self.actual = actual
