# textshred/reporting/console.py
"""
Console reporting functions for plans and runs.
"""
from __future__ import annotations

from typing import List

from rich import box
from rich.console import Console
from rich.table import Table

from textshred.extraction.report import ExtractionReport, SectionOutcome
from textshred.runner import RunReport

console = Console()

STATUS_STYLES = {
    "written": "[green]WRITTEN[/green]",
    "failed": "[bold red]FAILED[/bold red]",
    "skipped": "[yellow]SKIPPED[/yellow]",
}


def render_summary(rep: RunReport) -> None:
    """Render a high-level summary table."""
    t = Table(title="TextShred Summary", box=box.SIMPLE_HEAVY)
    t.add_column("Field", style="bold")
    t.add_column("Value")
    t.add_row("Source", rep.source)
    t.add_row("Size (bytes)", str(rep.file_size))
    t.add_row("Mode", f"{rep.mode} = {rep.target}")
    t.add_row("Skipped lines", str(rep.skip_lines))
    t.add_row("Sections", str(len(rep.sections)))
    for phase, ms in rep.timings_ms.items():
        t.add_row(f"{phase} (ms)", f"{ms:.2f}")
    if rep.extraction is not None:
        t.add_row("Destination", rep.extraction.dest_dir)
        t.add_row("Workers", str(rep.extraction.workers))
        t.add_row("Peak in flight", str(rep.extraction.peak_in_flight))
        t.add_row("Bytes written", str(rep.extraction.bytes_written))
    console.print(t)


def render_plan(rep: RunReport) -> None:
    """Render the planned sections with their byte ranges."""
    table = Table(title="Planned Sections", box=box.ROUNDED, title_style="bold magenta")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Size", justify="right", style="green")
    for index, s in enumerate(rep.sections):
        table.add_row(str(index), str(s.start), str(s.end), str(s.size))
    console.print(table)


def _render_outcomes(title: str, outcomes: List[SectionOutcome]) -> None:
    table = Table(title=title, box=box.ROUNDED, title_style="bold magenta")
    table.add_column("Status", justify="center", width=9)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("File", style="white")
    table.add_column("Bytes", justify="right")
    table.add_column("Error", style="red")
    for o in outcomes:
        table.add_row(
            STATUS_STYLES.get(o.status, o.status),
            str(o.index),
            o.filename,
            str(o.bytes_written),
            o.error,
        )
    console.print(table)


def render_extraction(rep: ExtractionReport, *, verbose: bool = False) -> None:
    """Render chunk outcomes; only problems unless ``verbose``."""
    if verbose:
        _render_outcomes("Chunks", rep.outcomes)
        return
    problems = rep.failed + rep.skipped
    if problems:
        _render_outcomes("Chunks Not Written", problems)
