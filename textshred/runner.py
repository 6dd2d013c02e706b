# textshred/runner.py
"""
Run orchestration: open → plan → skip → extract, timing each phase.
"""
from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from loguru import logger

from textshred.config import ShredConfig
from textshred.exceptions import DirectoryCreationError
from textshred.extraction.pipeline import ExtractionPipeline
from textshred.extraction.report import ExtractionReport
from textshred.io.source import ByteSource, LocalFileSource
from textshred.observability import Timer
from textshred.planning.planner import plan_by_count, plan_by_size
from textshred.planning.sections import Section
from textshred.planning.skip import apply_skip, skip_lines


@dataclass
class RunReport:
    """Plan, extraction outcome and phase timings of one run."""

    source: str
    file_size: int
    mode: str
    target: int
    skip_lines: int
    sections: List[Section] = field(default_factory=list)
    extraction: Optional[ExtractionReport] = None
    timings_ms: Dict[str, float] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.extraction.ok if self.extraction is not None else True


def plan_sections(source: ByteSource, config: ShredConfig) -> List[Section]:
    """Plan sections for ``config`` and apply its leading-line skip."""
    if config.size is not None:
        sections = plan_by_size(source, config.size, config.lookback)
    else:
        sections = plan_by_count(source, config.count, config.lookback)
    if config.skip_lines:
        offset = skip_lines(source, config.skip_lines, config.skip_scan_size)
        logger.debug("Skipping {n} lines: first chunk starts at {offset}", n=config.skip_lines, offset=offset)
        sections = apply_skip(sections, offset)
    return sections


def ensure_directory(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(f"cannot create {path!r}: {e}") from e


def _new_report(config: ShredConfig, file_size: int) -> RunReport:
    return RunReport(
        source=config.source,
        file_size=file_size,
        mode=config.mode,
        target=config.size if config.size is not None else config.count,
        skip_lines=config.skip_lines,
    )


def plan(config: ShredConfig) -> RunReport:
    """Plan only; nothing is written."""
    with LocalFileSource(config.source, config.source_kind).open() as source:
        report = _new_report(config, source.size)
        with Timer("plan") as t_plan:
            report.sections = plan_sections(source, config)
        report.timings_ms["plan"] = t_plan.duration_ms
    return report


def shred(config: ShredConfig, cancel_event: Optional[threading.Event] = None) -> RunReport:
    """Split ``config.source`` into line-aligned chunk files under ``config.dest_dir``.

    Fatal errors (open, mkdir, plan, skip) propagate before any chunk is
    written. Per-section write failures are recorded in the report.
    """
    logger.info(
        "Starting: file={file}, mode={mode}, workers={workers}, source={kind}",
        file=os.path.basename(config.source),
        mode=config.mode,
        workers=config.workers,
        kind=config.source_kind,
    )
    with LocalFileSource(config.source, config.source_kind).open() as source:
        report = _new_report(config, source.size)

        with Timer("plan") as t_plan:
            report.sections = plan_sections(source, config)
        report.timings_ms["plan"] = t_plan.duration_ms
        logger.info(
            "Planned {n} sections in {ms:.2f}ms", n=len(report.sections), ms=t_plan.duration_ms
        )

        ensure_directory(config.dest_dir)

        pipeline = ExtractionPipeline(
            source,
            config.dest_dir,
            ext=config.extension,
            prefix=config.prefix,
            workers=config.workers,
            write_buffer_size=config.write_buffer_size,
            cancel_event=cancel_event,
        )
        with Timer("extract") as t_extract:
            report.extraction = pipeline.run(report.sections)
        report.timings_ms["extract"] = t_extract.duration_ms

    extraction = report.extraction
    logger.info(
        "Extraction done: {written} written, {failed} failed, {skipped} skipped in {ms:.2f}ms",
        written=len(extraction.written),
        failed=len(extraction.failed),
        skipped=len(extraction.skipped),
        ms=t_extract.duration_ms,
    )
    return report
