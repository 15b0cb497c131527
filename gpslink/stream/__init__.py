"""Frame reassembly for unstructured byte streams."""

from gpslink.stream.reassembler import (
    MAX_BUFFER_LENGTH,
    TRUNCATE_LENGTH,
    FrameReassembler,
)

__all__ = ["MAX_BUFFER_LENGTH", "TRUNCATE_LENGTH", "FrameReassembler"]
