# textshred/cli.py
"""
cli.py

Rich console CLI:
- split:   cut a line-oriented file into line-aligned chunk files.
- plan:    print the planned sections without writing anything.
- group:   split a CSV into one file per run of equal leading keys.
- version: show the package version.
"""
from __future__ import annotations

import argparse
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from textshred import __version__
from textshred.config import (
    DEFAULT_PREFIX,
    SOURCE_KINDS,
    ShredConfig,
    default_source_kind,
    default_workers,
)
from textshred.exceptions import TextShredError
from textshred.grouping import group_by_key
from textshred.logging import configure_logging
from textshred.reporting.console import render_extraction, render_plan, render_summary
from textshred.reporting.json_reporter import write_json
from textshred.runner import plan, shred

console = Console()

_UNITS = {"K": 1 << 10, "M": 1 << 20, "G": 1 << 30}

# Exit status for fatal errors and for a run interrupted before all sections were submitted.
EXIT_FATAL = 2
EXIT_CANCELLED = 130


def parse_size(text: str) -> int:
    """Parse a byte count with an optional K/M/G suffix (``64M``)."""
    text = text.strip().upper().removesuffix("B")
    mult = 1
    if text and text[-1] in _UNITS:
        mult = _UNITS[text[-1]]
        text = text[:-1]
    try:
        value = int(text) * mult
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError("size must be positive")
    return value


def _add_planning_args(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("source", help="Path to the line-oriented source file")
    mode = sp.add_mutually_exclusive_group(required=True)
    mode.add_argument("--size", type=parse_size, help="Target chunk size in bytes (K/M/G suffixes)")
    mode.add_argument("--count", type=int, help="Target number of chunks")
    sp.add_argument("--skip", type=int, default=0, help="Leading lines to drop from the first chunk")
    sp.add_argument(
        "--source-kind",
        choices=SOURCE_KINDS,
        default=default_source_kind(),
        help="Read the source through mmap (default) or positional file reads",
    )
    _add_logging_args(sp)


def _add_logging_args(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("--debug", action="store_true", help="Enable per-section debug logging")
    sp.add_argument(
        "--verbose", action="store_true", help="Log run progress and list every chunk written"
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="textshred",
        description="Split large line-oriented files into line-aligned chunks, in parallel.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sub = p.add_subparsers(dest="cmd", title="Available Commands", metavar="<command>")

    sp_split = sub.add_parser("split", help="Write line-aligned chunks of a file")
    _add_planning_args(sp_split)
    sp_split.add_argument("dest", help="Destination directory (created if missing)")
    sp_split.add_argument(
        "--workers", type=int, default=default_workers(), help="Concurrent chunk writers"
    )
    sp_split.add_argument("--prefix", default=DEFAULT_PREFIX, help="Chunk filename prefix")
    sp_split.add_argument("--json-out", type=str, default=None, help="Write JSON run report to this path")

    sp_plan = sub.add_parser("plan", help="Show planned sections without writing")
    _add_planning_args(sp_plan)

    sp_group = sub.add_parser("group", help="Split a CSV into one file per leading key")
    sp_group.add_argument("source", help="CSV file sorted by its leading numeric key")
    sp_group.add_argument("dest", help="Destination directory (created if missing)")
    _add_logging_args(sp_group)

    sub.add_parser("version", help="Show the version of textshred")

    return p


def _config_from_args(args: argparse.Namespace, dest: str = "") -> ShredConfig:
    extra = {}
    if args.cmd == "split":
        extra = {"workers": args.workers, "prefix": args.prefix}
    return ShredConfig(
        source=args.source,
        dest_dir=dest,
        size=args.size,
        count=args.count,
        skip_lines=args.skip,
        source_kind=args.source_kind,
        **extra,
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return 0

    if args.cmd == "version":
        console.print(f"TextShred Version {__version__}")
        return 0

    configure_logging(debug=args.debug, verbose=args.verbose)

    try:
        if args.cmd == "group":
            files = group_by_key(args.source, args.dest)
            console.print(f"[dim]Wrote {len(files)} group files → {args.dest}[/dim]")
            return 0

        if args.cmd == "plan":
            rep = plan(_config_from_args(args))
            render_summary(rep)
            render_plan(rep)
            return 0

        rep = shred(_config_from_args(args, args.dest))
    except TextShredError as e:
        console.print(f"[red]{e.phase} failed:[/red] {escape(str(e))}")
        return EXIT_FATAL

    extraction = rep.extraction
    console.print(
        Panel(
            f"[bold]Result:[/bold] {'[green]OK[/green]' if rep.ok else '[yellow]INCOMPLETE[/yellow]'}",
            style="bold cyan",
        )
    )
    render_summary(rep)
    render_extraction(extraction, verbose=args.verbose)

    if args.json_out:
        write_json(rep, args.json_out)
        console.print(f"[dim]Wrote JSON report → {args.json_out}[/dim]")

    # Section write failures are warnings; only an interrupted run changes the status.
    return EXIT_CANCELLED if extraction.cancelled else 0
