# textshred/inspect.py
"""
Inspection helpers: peek at lines at arbitrary offsets and get section readers
without writing any files.
"""
from __future__ import annotations

from typing import List

from textshred.exceptions import NoBoundaryFoundError
from textshred.io.segment import SegmentReader
from textshred.io.source import ByteSource, open_source
from textshred.planning.sections import Section

PAGE_SIZE = 4096


def first_line_at(source: ByteSource, offset: int, limit: int = PAGE_SIZE) -> str:
    """Return the line starting at ``offset`` without its terminator."""
    buf = bytearray(limit)
    n = source.read_at(buf, offset)
    i = buf.find(b"\n", 0, n)
    if i < 0:
        raise NoBoundaryFoundError(f"no line end within {limit} bytes of offset {offset}")
    return buf[:i].decode("utf-8", errors="replace")


def first_lines(path: str, offsets: List[int], kind: str = "mmap") -> List[str]:
    """First line at each of ``offsets`` in the file at ``path``."""
    with open_source(path, kind) as source:
        return [first_line_at(source, offset) for offset in offsets]


def section_readers(source: ByteSource, sections: List[Section]) -> List[SegmentReader]:
    """One independent reader per section, all sharing ``source``.

    The caller keeps ``source`` open until every reader is consumed.
    """
    return [SegmentReader(source, section) for section in sections]
