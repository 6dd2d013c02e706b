# textshred/planning/sections.py
"""
Section model shared by the planner, skipper and pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Section:
    """Half-open byte range ``[start, end)`` of the source destined for one chunk."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid section [{self.start}, {self.end})")

    @property
    def size(self) -> int:
        return self.end - self.start


def offsets(sections: list[Section]) -> list[int]:
    """Start offsets of ``sections`` in order."""
    return [s.start for s in sections]
