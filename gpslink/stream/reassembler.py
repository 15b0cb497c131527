"""Reassembly of delimited NMEA frames from arbitrary byte chunks.

A serial-over-radio link delivers bytes with no regard for sentence
boundaries: a single read may hold half a sentence, several sentences, or a
sentence whose ``\\r\\n`` is split across two reads. ``FrameReassembler``
accumulates decoded text and hands out only complete frames.

Framing strategy:
    Each ``feed`` appends the chunk, then looks for the *last* delimiter in
    the buffer. Everything up to it is complete and is split into frames;
    everything after it is a possible partial sentence and stays buffered.
    Because raw input is appended before searching, a delimiter split across
    chunks is found on the following call.

Memory bound:
    A remote end that never sends a delimiter would grow the buffer forever.
    While the buffer holds ``MAX_BUFFER_LENGTH`` characters or more, its
    oldest ``TRUNCATE_LENGTH`` characters are dropped.
"""

import codecs
import logging

from gpslink.nmea.codec import SENTENCE_DELIMITER

__all__ = ["MAX_BUFFER_LENGTH", "TRUNCATE_LENGTH", "FrameReassembler"]

logger = logging.getLogger(__name__)

MAX_BUFFER_LENGTH = 65535
TRUNCATE_LENGTH = 32767

_PADDING = "\0"


class FrameReassembler:
    """Turns a sequence of byte chunks into complete, delimiter-free frames.

    The instance exclusively owns its buffer; one reassembler serves one
    stream. Not thread safe.

    Example:
        >>> reassembler = FrameReassembler()
        >>> reassembler.feed(b"$GPGGA,1234")
        []
        >>> reassembler.feed(b"56*00\\r\\n$GPG")
        ['$GPGGA,123456*00']
        >>> reassembler.buffer
        '$GPG'

    Args:
        delimiter: End-of-sentence marker (default ``"\\r\\n"``).
        max_length: Buffer length that triggers truncation.
        truncate_length: Characters dropped from the front per truncation.
    """

    def __init__(
        self,
        delimiter: str = SENTENCE_DELIMITER,
        max_length: int = MAX_BUFFER_LENGTH,
        truncate_length: int = TRUNCATE_LENGTH,
    ) -> None:
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        if not 0 < truncate_length <= max_length:
            raise ValueError("truncate_length must be in (0, max_length]")
        self._delimiter = delimiter
        self._max_length = max_length
        self._truncate_length = truncate_length
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")
        self._buffer = ""

    @property
    def buffer(self) -> str:
        """The unconsumed text retained for the next ``feed``."""
        return self._buffer

    def reset(self) -> None:
        """Discard buffered text and any partially decoded character."""
        self._decoder.reset()
        self._buffer = ""

    def _split_frames(self, head: str) -> list[str]:
        frames = []
        for frame in head.split(self._delimiter):
            frame = frame.strip(_PADDING)
            if frame:
                frames.append(frame)
        return frames

    def _enforce_limit(self) -> None:
        while len(self._buffer) >= self._max_length:
            self._buffer = self._buffer[self._truncate_length :]
            logger.warning(
                "Reassembly buffer reached %d characters without a delimiter; "
                "dropped the oldest %d",
                self._max_length,
                self._truncate_length,
            )

    def feed(self, chunk: bytes) -> list[str]:
        """Append a chunk and return every frame it completed, in order.

        Args:
            chunk: Raw bytes from one transport read. May be empty.

        Returns:
            Complete frames with the delimiter and NUL padding removed.
            Empty frames (consecutive delimiters) are skipped.
        """
        self._buffer += self._decoder.decode(chunk)

        last = self._buffer.rfind(self._delimiter)
        if last == -1:
            self._enforce_limit()
            return []

        split_at = last + len(self._delimiter)
        head = self._buffer[:split_at]
        self._buffer = self._buffer[split_at:]
        self._enforce_limit()

        return self._split_frames(head)
