"""Tests for boundary planning."""

import pytest

from textshred.exceptions import NoBoundaryFoundError
from textshred.io.source import MappedSource
from textshred.planning.planner import find_cut, plan_by_count, plan_by_size
from textshred.planning.sections import Section


class ShortReadSource:
    """Wraps a source so every read returns at most ``limit`` bytes."""

    def __init__(self, inner: MappedSource, limit: int):
        self._inner = inner
        self.limit = limit
        self.path = inner.path
        self.size = inner.size

    def read_at(self, buffer, offset: int) -> int:
        return self._inner.read_at(memoryview(buffer)[: self.limit], offset)


def assert_aligned(data: bytes, sections: list[Section]) -> None:
    assert sections[0].start == 0
    assert sections[-1].end == len(data)
    for prev, nxt in zip(sections, sections[1:]):
        assert prev.end == nxt.start
        assert data[prev.end - 1 : prev.end] == b"\n"
    assert b"".join(data[s.start : s.end] for s in sections) == data


class TestPlanBySize:
    """Test cases for plan_by_size."""

    def test_size_at_least_file_size_gives_one_section(self, write_source, numbered) -> None:
        data = numbered(10)
        source = write_source(data)
        assert plan_by_size(source, len(data)) == [Section(0, len(data))]
        assert plan_by_size(source, len(data) * 10) == [Section(0, len(data))]

    def test_ten_lines_three_and_a_half_lines_per_section(self, write_source, numbered) -> None:
        data = numbered(10)
        source = write_source(data)

        sections = plan_by_size(source, 14)

        assert sections == [Section(0, 12), Section(12, 24), Section(24, 36), Section(36, 41)]
        assert_aligned(data, sections)
        assert data[36:41] == b"10,j\n"

    def test_final_section_without_trailing_newline(self, write_source, numbered) -> None:
        data = numbered(9) + b"10,j"
        source = write_source(data)

        sections = plan_by_size(source, 14)

        assert sections[-1].end == len(data)
        assert_aligned(data, sections)

    def test_many_sizes_stay_aligned(self, write_source) -> None:
        data = b"".join(b"x" * (i % 17) + b"\n" for i in range(500))
        source = write_source(data)

        for size in (18, 25, 64, 100, 1000, 4095, 5000):
            assert_aligned(data, plan_by_size(source, size))

    def test_lookback_smaller_than_size(self, write_source, numbered) -> None:
        data = numbered(200)
        source = write_source(data)

        sections = plan_by_size(source, 100, lookback=8)

        assert_aligned(data, sections)
        assert all(s.size <= 100 for s in sections)

    def test_no_terminator_in_window_raises(self, write_source) -> None:
        source = write_source(b"x" * 100 + b"\n")
        with pytest.raises(NoBoundaryFoundError) as exc_info:
            plan_by_size(source, 10)
        assert exc_info.value.phase == "plan"

    def test_empty_file_has_no_sections(self, write_source) -> None:
        assert plan_by_size(write_source(b""), 10) == []

    def test_rejects_non_positive_size(self, write_source) -> None:
        with pytest.raises(ValueError):
            plan_by_size(write_source(b"a\n"), 0)


class TestFindCut:
    """Test cases for the lookback primitive."""

    def test_cut_is_just_past_last_terminator(self, write_source) -> None:
        source = write_source(b"ab\ncd\nefgh\n")
        assert find_cut(source, 8, bytearray(8)) == 6

    def test_truncated_read_searches_returned_bytes_only(self, write_source) -> None:
        source = ShortReadSource(write_source(b"ab\ncdefghij\nklm\n"), limit=6)
        assert find_cut(source, 12, bytearray(12)) == 3

    def test_truncated_read_without_terminator_fails(self, write_source) -> None:
        source = ShortReadSource(write_source(b"abcdefghi\n" * 3), limit=4)
        with pytest.raises(NoBoundaryFoundError):
            find_cut(source, 10, bytearray(10))


class TestPlanByCount:
    """Test cases for plan_by_count."""

    def test_count_close_to_target(self, write_source) -> None:
        data = b"".join(f"{i:08d}\n".encode() for i in range(10000))
        source = write_source(data)

        sections = plan_by_count(source, 4, lookback=64)

        assert abs(len(sections) - 4) <= 1
        assert_aligned(data, sections)

    def test_small_file_collapses_to_one_section(self, write_source, numbered) -> None:
        data = numbered(10)
        source = write_source(data)
        assert plan_by_count(source, 3) == [Section(0, len(data))]

    def test_never_more_sections_than_bytes(self, write_source) -> None:
        data = b"\n" * 50
        source = write_source(data)
        sections = plan_by_count(source, 100, lookback=1)
        assert len(sections) <= len(data)
        assert_aligned(data, sections)

    def test_rejects_non_positive_count(self, write_source) -> None:
        with pytest.raises(ValueError):
            plan_by_count(write_source(b"a\n"), 0)
