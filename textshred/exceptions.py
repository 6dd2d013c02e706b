# textshred/exceptions.py
"""
Error hierarchy.

Every fatal error carries the ``phase`` it aborted so the CLI can say which
step of the run failed. ``SectionWriteError`` is the only non-fatal kind: the
pipeline records it against one section and keeps going.
"""
from __future__ import annotations


class TextShredError(Exception):
    """Base class for all textshred errors."""

    phase: str = "run"


class ConfigError(TextShredError):
    """Raised when a run configuration is invalid."""

    phase = "config"


class OpenError(TextShredError):
    """Raised when the source file cannot be opened or mapped."""

    phase = "open"


class DirectoryCreationError(TextShredError):
    """Raised when the destination directory cannot be created."""

    phase = "mkdir"


class NoBoundaryFoundError(TextShredError):
    """Raised when no line terminator exists inside a lookback window."""

    phase = "plan"


class InsufficientDataError(TextShredError):
    """Raised when the skip scan buffer holds fewer lines than requested."""

    phase = "skip"


class SectionWriteError(TextShredError):
    """Raised when one section's output file cannot be written."""

    phase = "extract"

    def __init__(self, filename: str, cause: BaseException):
        super().__init__(f"error carving to file {filename!r}: {cause}")
        self.filename = filename
        self.cause = cause


class KeyParseError(TextShredError):
    """Raised when a line has no parseable leading key."""

    phase = "group"


__all__ = [
    "TextShredError",
    "ConfigError",
    "OpenError",
    "DirectoryCreationError",
    "NoBoundaryFoundError",
    "InsufficientDataError",
    "SectionWriteError",
    "KeyParseError",
]
