# textshred/planning/skip.py
"""
Leading-line skipping for the first planned section.
"""

from __future__ import annotations

from typing import List

from textshred.config import DEFAULT_SKIP_SCAN_SIZE
from textshred.exceptions import InsufficientDataError
from textshred.io.source import ByteSource
from textshred.planning.sections import Section


def skip_lines(source: ByteSource, count: int, scan_size: int = DEFAULT_SKIP_SCAN_SIZE) -> int:
    """Return the offset just after the ``count``-th line terminator.

    Only the first ``scan_size`` bytes are scanned; the limit is never extended.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if count == 0:
        return 0

    buf = bytearray(scan_size)
    n = source.read_at(buf, 0)
    pos = 0
    for found in range(count):
        idx = buf.find(b"\n", pos, n)
        if idx < 0:
            raise InsufficientDataError(
                f"asked to skip {count} lines but only {found} terminators "
                f"exist in the first {n} bytes of {source.path!r}"
            )
        pos = idx + 1
    return pos


def apply_skip(sections: List[Section], offset: int) -> List[Section]:
    """Return ``sections`` with the first one starting at ``offset``."""
    if not sections or offset == 0:
        return list(sections)
    first = sections[0]
    if offset > first.end:
        raise InsufficientDataError(
            f"skip offset {offset} lies beyond the first section end {first.end}"
        )
    return [Section(offset, first.end), *sections[1:]]
