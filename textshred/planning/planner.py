# textshred/planning/planner.py
"""
Boundary planner: cut a source into line-aligned sections.

Each cut starts from an ideal offset (``offset + size``) and is snapped back to
the nearest preceding ``\\n`` found inside a fixed lookback window, so planning
touches one window per section instead of scanning the whole file.
"""

from __future__ import annotations

from typing import List

from loguru import logger

from textshred.config import DEFAULT_LOOKBACK
from textshred.exceptions import NoBoundaryFoundError
from textshred.io.source import ByteSource
from textshred.planning.sections import Section

TERMINATOR = b"\n"


def find_cut(source: ByteSource, ideal: int, buffer: bytearray) -> int:
    """Return the end offset (just past a terminator) of the section ending near ``ideal``.

    The window ``[ideal - len(buffer), ideal)`` is read and searched backward.
    Only bytes the source actually returned are searched, so a truncated read
    can never produce a cut in the middle of a line.
    """
    window = len(buffer)
    base = ideal - window
    n = source.read_at(buffer, base)
    idx = buffer.rfind(TERMINATOR, 0, n)
    if idx < 0:
        raise NoBoundaryFoundError(
            f"no line terminator in [{base}, {base + n}) of {source.path!r}; "
            f"target size is too small for the line lengths"
        )
    return base + idx + 1


def plan_by_size(source: ByteSource, size: int, lookback: int = DEFAULT_LOOKBACK) -> List[Section]:
    """Plan sections of roughly ``size`` bytes, each ending after a line terminator.

    Args:
        source: Open byte source.
        size: Target section size in bytes.
        lookback: Upper bound of the backward search window.

    Returns:
        Contiguous sections covering ``[0, source.size)``.
    """
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    fsize = source.size
    if fsize == 0:
        return []
    if size >= fsize:
        return [Section(0, fsize)]

    buffer = bytearray(min(lookback, size))
    sections: List[Section] = []
    offset = 0
    while offset < fsize:
        ideal = offset + size
        end = fsize if ideal >= fsize else find_cut(source, ideal, buffer)
        section = Section(offset, end)
        sections.append(section)
        logger.debug(
            "From {start:016d}:{end:012d} ({size:16d})",
            start=section.start,
            end=section.end,
            size=section.size,
        )
        offset = end
    return sections


def plan_by_count(source: ByteSource, count: int, lookback: int = DEFAULT_LOOKBACK) -> List[Section]:
    """Plan approximately ``count`` sections.

    The per-section size is ``size // count`` padded by one lookback window;
    every cut is snapped independently, so the result is close to, not exactly,
    ``count`` sections.
    """
    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")
    size = source.size // count + lookback
    return plan_by_size(source, size, lookback)
