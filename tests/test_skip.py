"""Tests for leading-line skipping."""

import pytest

from textshred.exceptions import InsufficientDataError
from textshred.planning.planner import plan_by_size
from textshred.planning.sections import Section
from textshred.planning.skip import apply_skip, skip_lines


class TestSkipLines:
    """Test cases for skip_lines."""

    def test_zero_lines_is_offset_zero(self, write_source, numbered) -> None:
        assert skip_lines(write_source(numbered(3)), 0) == 0

    def test_offset_after_kth_terminator(self, write_source, numbered) -> None:
        data = numbered(10)
        source = write_source(data)

        offset = skip_lines(source, 3)

        assert offset == 12
        assert data[offset:].startswith(b"4,d\n")

    def test_too_few_terminators_raises(self, write_source) -> None:
        source = write_source(b"h1\nh2\ntail")
        with pytest.raises(InsufficientDataError) as exc_info:
            skip_lines(source, 3)
        assert exc_info.value.phase == "skip"

    def test_scan_buffer_is_a_hard_limit(self, write_source, numbered) -> None:
        source = write_source(numbered(10))
        # 8 bytes hold only two terminators.
        with pytest.raises(InsufficientDataError):
            skip_lines(source, 3, scan_size=8)
        assert skip_lines(source, 2, scan_size=8) == 8

    def test_negative_count_rejected(self, write_source) -> None:
        with pytest.raises(ValueError):
            skip_lines(write_source(b"a\n"), -1)


class TestApplySkip:
    """Test cases for apply_skip."""

    def test_only_first_section_changes(self, write_source, numbered) -> None:
        data = numbered(10)
        source = write_source(data)
        sections = plan_by_size(source, 14)

        adjusted = apply_skip(sections, skip_lines(source, 1))

        assert adjusted[0] == Section(4, 12)
        assert adjusted[1:] == sections[1:]
        assert sections[0] == Section(0, 12)

    def test_skip_past_first_section_raises(self) -> None:
        with pytest.raises(InsufficientDataError):
            apply_skip([Section(0, 12), Section(12, 24)], 16)

    def test_skip_whole_first_section(self) -> None:
        assert apply_skip([Section(0, 12), Section(12, 24)], 12)[0] == Section(12, 12)
