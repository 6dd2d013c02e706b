"""Tests for inspection helpers."""

from pathlib import Path

import pytest

from textshred.exceptions import NoBoundaryFoundError
from textshred.inspect import first_line_at, first_lines
from textshred.io.source import MappedSource
from textshred.planning.planner import plan_by_size
from textshred.planning.sections import offsets


def test_first_lines_at_section_starts(ten_line_file: Path) -> None:
    with MappedSource(str(ten_line_file)) as source:
        starts = offsets(plan_by_size(source, 14))

    assert first_lines(str(ten_line_file), starts) == ["1,a", "4,d", "7,g", "10,j"]
    assert first_lines(str(ten_line_file), starts, kind="file") == ["1,a", "4,d", "7,g", "10,j"]


def test_first_line_needs_terminator(write_source) -> None:
    source = write_source(b"abc\nno-newline")
    assert first_line_at(source, 0) == "abc"
    with pytest.raises(NoBoundaryFoundError):
        first_line_at(source, 4)
