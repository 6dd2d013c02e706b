# textshred/extraction/report.py
"""
Per-section outcomes and the aggregate extraction report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from textshred.planning.sections import Section

WRITTEN = "written"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass
class SectionOutcome:
    """What happened to one planned section."""

    index: int
    section: Section
    filename: str
    status: str
    bytes_written: int = 0
    error: str = ""


@dataclass
class ExtractionReport:
    """Aggregate of every section's outcome, in planning order."""

    dest_dir: str
    workers: int
    outcomes: List[SectionOutcome] = field(default_factory=list)
    peak_in_flight: int = 0
    cancelled: bool = False

    def _with_status(self, status: str) -> List[SectionOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def written(self) -> List[SectionOutcome]:
        return self._with_status(WRITTEN)

    @property
    def failed(self) -> List[SectionOutcome]:
        return self._with_status(FAILED)

    @property
    def skipped(self) -> List[SectionOutcome]:
        return self._with_status(SKIPPED)

    @property
    def bytes_written(self) -> int:
        return sum(o.bytes_written for o in self.outcomes)

    @property
    def ok(self) -> bool:
        return not self.failed and not self.skipped
