"""Tests for delimiter-based frame reassembly."""

import pytest

from gpslink import FrameReassembler
from gpslink.stream import MAX_BUFFER_LENGTH, TRUNCATE_LENGTH

GGA = "$GPGGA,123456,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*4D"
VTG = "$GPVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*25"
GGA_LINE = (GGA + "\r\n").encode()
VTG_LINE = (VTG + "\r\n").encode()


def _feed_all(reassembler: FrameReassembler, chunks: list[bytes]) -> list[str]:
    frames = []
    for chunk in chunks:
        frames.extend(reassembler.feed(chunk))
    return frames


class TestSingleFrame:
    def test_one_chunk_yields_one_frame(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(GGA_LINE) == [GGA]
        assert reassembler.buffer == ""

    @pytest.mark.parametrize("offset", [1, 7, 30, len(GGA_LINE) - 2, len(GGA_LINE) - 1])
    def test_split_at_any_offset_yields_same_frame(self, offset):
        reassembler = FrameReassembler()
        assert reassembler.feed(GGA_LINE[:offset]) == []
        assert reassembler.feed(GGA_LINE[offset:]) == [GGA]

    def test_delimiter_split_across_chunks(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(GGA_LINE[:-1]) == []
        assert reassembler.buffer == GGA + "\r"
        assert reassembler.feed(b"\n") == [GGA]

    def test_byte_by_byte(self):
        reassembler = FrameReassembler()
        chunks = [GGA_LINE[i : i + 1] for i in range(len(GGA_LINE))]
        assert _feed_all(reassembler, chunks) == [GGA]


class TestMultipleFrames:
    def test_multiple_frames_in_one_chunk_keep_order(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(GGA_LINE + VTG_LINE + GGA_LINE) == [GGA, VTG, GGA]

    def test_partial_tail_is_retained(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(GGA_LINE + VTG_LINE[:10]) == [GGA]
        assert reassembler.buffer == VTG[:10]
        assert reassembler.feed(VTG_LINE[10:]) == [VTG]

    def test_arbitrary_chunking_preserves_frames(self):
        stream = GGA_LINE + VTG_LINE + GGA_LINE + VTG_LINE
        for size in (3, 17, 64, 100):
            reassembler = FrameReassembler()
            chunks = [stream[i : i + size] for i in range(0, len(stream), size)]
            assert _feed_all(reassembler, chunks) == [GGA, VTG, GGA, VTG]


class TestEmptyAndPadding:
    def test_delimiter_only_chunk(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(b"\r\n") == []
        assert reassembler.buffer == ""

    def test_consecutive_delimiters_are_discarded(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(b"\r\n\r\n" + GGA_LINE + b"\r\n") == [GGA]

    def test_null_padding_is_stripped(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(b"\0\0" + GGA_LINE + b"\0\0\0") == [GGA]
        assert reassembler.buffer == "\0\0\0"

    def test_empty_chunk(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(b"") == []


class TestDecoding:
    def test_multibyte_character_split_across_chunks(self):
        reassembler = FrameReassembler()
        line = "$PTEXT,°C\r\n".encode()
        split = line.index(b"\xb0")
        assert reassembler.feed(line[:split]) == []
        assert reassembler.feed(line[split:]) == ["$PTEXT,°C"]

    def test_invalid_bytes_are_ignored(self):
        reassembler = FrameReassembler()
        assert reassembler.feed(b"\xff\xfe" + GGA_LINE) == [GGA]


class TestOverflow:
    def test_buffer_truncated_at_cap(self):
        reassembler = FrameReassembler()
        reassembler.feed(b"x" * (MAX_BUFFER_LENGTH - 1))
        assert len(reassembler.buffer) == MAX_BUFFER_LENGTH - 1
        reassembler.feed(b"y")
        assert len(reassembler.buffer) == MAX_BUFFER_LENGTH - TRUNCATE_LENGTH
        assert reassembler.buffer.endswith("y")

    def test_buffer_never_grows_unbounded(self):
        reassembler = FrameReassembler()
        chunk = b"z" * 16384
        for _ in range(50):
            reassembler.feed(chunk)
            assert len(reassembler.buffer) < MAX_BUFFER_LENGTH

    def test_oversized_chunk_is_bounded(self):
        reassembler = FrameReassembler()
        reassembler.feed(b"z" * (MAX_BUFFER_LENGTH * 3))
        assert len(reassembler.buffer) < MAX_BUFFER_LENGTH

    def test_frames_still_found_after_truncation(self):
        reassembler = FrameReassembler()
        reassembler.feed(b"z" * MAX_BUFFER_LENGTH)
        frames = reassembler.feed(b"\r\n" + GGA_LINE)
        assert frames[-1] == GGA
        assert set(frames[0]) == {"z"}
        assert reassembler.buffer == ""

    def test_custom_limits(self):
        reassembler = FrameReassembler(max_length=10, truncate_length=4)
        reassembler.feed(b"0123456789")
        assert reassembler.buffer == "456789"

    def test_invalid_limits_rejected(self):
        with pytest.raises(ValueError):
            FrameReassembler(max_length=10, truncate_length=11)
        with pytest.raises(ValueError):
            FrameReassembler(delimiter="")


class TestReset:
    def test_reset_clears_buffer(self):
        reassembler = FrameReassembler()
        reassembler.feed(GGA_LINE[:20])
        reassembler.reset()
        assert reassembler.buffer == ""
        assert reassembler.feed(GGA_LINE) == [GGA]
