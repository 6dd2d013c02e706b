"""Tests for SegmentReader."""

import shutil
from io import BytesIO

import pytest

from textshred.inspect import section_readers
from textshred.io.segment import SegmentReader
from textshred.planning.sections import Section


class TrickleSource:
    """Source returning at most ``limit`` bytes per read, counting calls."""

    def __init__(self, data: bytes, limit: int):
        self.data = data
        self.size = len(data)
        self.path = "<memory>"
        self.limit = limit
        self.calls = 0

    def read_at(self, buffer, offset: int) -> int:
        self.calls += 1
        chunk = self.data[offset : offset + min(len(buffer), self.limit)]
        buffer[: len(chunk)] = chunk
        return len(chunk)


class TestSegmentReader:
    """Test cases for SegmentReader."""

    def test_reads_exactly_the_section(self, write_source) -> None:
        source = write_source(b"aaa\nbbb\nccc\n")
        reader = SegmentReader(source, Section(4, 8))

        assert reader.read() == b"bbb\n"
        assert reader.remaining == 0
        assert reader.read(10) == b""

    def test_read_calls_capped_at_remaining(self, write_source) -> None:
        source = write_source(b"0123456789")
        reader = SegmentReader(source, Section(2, 7))

        assert reader.read(3) == b"234"
        assert reader.read(100) == b"56"
        assert reader.read(100) == b""

    def test_short_reads_resume_at_cursor(self) -> None:
        source = TrickleSource(b"line one\nline two\n", limit=3)
        reader = SegmentReader(source, Section(0, 18))

        out = BytesIO()
        shutil.copyfileobj(reader, out, 64)

        assert out.getvalue() == b"line one\nline two\n"
        assert source.calls >= 6

    def test_truncated_source_raises_eof(self) -> None:
        source = TrickleSource(b"abc", limit=10)
        reader = SegmentReader(source, Section(0, 6))

        assert reader.read(10) == b"abc"
        with pytest.raises(EOFError):
            reader.read(10)

    def test_empty_section(self, write_source) -> None:
        reader = SegmentReader(write_source(b"abc\n"), Section(4, 4))
        assert reader.read() == b""

    def test_readers_are_independent(self, write_source) -> None:
        source = write_source(b"aa\nbb\ncc\n")
        readers = section_readers(source, [Section(0, 3), Section(3, 6), Section(6, 9)])

        assert readers[2].read() == b"cc\n"
        assert readers[0].read() == b"aa\n"
        assert readers[1].read() == b"bb\n"
