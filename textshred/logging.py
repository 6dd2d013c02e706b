# textshred/logging.py
"""
Loguru setup for the threaded extraction pipeline.

Every record carries the worker thread name and the ``section`` index bound by
the pipeline (``-`` outside a section copy), so a warning about one chunk can
be traced back to the ``carve`` worker that produced it.
"""
from __future__ import annotations

import sys

from loguru import logger

FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "| <level>{level: <8}</level> "
    "| {thread.name} section={extra[section]} "
    "<cyan>{module}</cyan>:<cyan>{line}</cyan> "
    "- <level>{message}</level>"
)


def level_for(*, debug: bool = False, verbose: bool = False) -> str:
    """Map CLI flags to a level: per-section traces with ``--debug``,
    run progress with ``--verbose``, otherwise only warnings."""
    if debug:
        return "DEBUG"
    return "INFO" if verbose else "WARNING"


def configure_logging(*, debug: bool = False, verbose: bool = False) -> None:
    """Replace loguru's sinks with one stderr sink at the level the flags select."""
    logger.remove()
    logger.configure(extra={"section": "-"})
    logger.add(
        sys.stderr,
        level=level_for(debug=debug, verbose=verbose),
        format=FORMAT,
        enqueue=True,
        backtrace=debug,
        diagnose=debug,
    )
