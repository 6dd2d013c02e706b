# textshred/config.py
"""
Run configuration.

All tunables for one run live on a single frozen ``ShredConfig`` that is
passed into the planner and pipeline; nothing is kept in module globals.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from textshred.exceptions import ConfigError

# Environment variable to override the default byte source.
SOURCE_KIND_ENV = "TEXTSHRED_SOURCE"

SOURCE_KINDS = ("mmap", "file")

# Backward search window used to snap a cut to a line terminator.
DEFAULT_LOOKBACK = 4096

# How far into the file a leading-line skip may look.
DEFAULT_SKIP_SCAN_SIZE = 64 * 1024

# 16MB write buffer per chunk file to amortize syscalls.
DEFAULT_WRITE_BUFFER_SIZE = 16 * 1024 * 1024

DEFAULT_PREFIX = "part"


def default_workers() -> int:
    """Available parallelism of the host."""
    return os.cpu_count() or 1


def default_source_kind() -> str:
    """Source kind from the environment, ``mmap`` when unset."""
    kind = os.environ.get(SOURCE_KIND_ENV, "").lower()
    return kind if kind in SOURCE_KINDS else "mmap"


@dataclass(frozen=True)
class ShredConfig:
    """Everything needed to plan and extract one source file.

    Attributes:
        source: Path to the line-oriented input file.
        dest_dir: Directory receiving the chunk files.
        size: Target chunk size in bytes (exclusive with ``count``).
        count: Target number of chunks (exclusive with ``size``).
        skip_lines: Leading lines dropped from the first chunk.
        workers: Maximum number of concurrent section copies.
        prefix: Chunk filename prefix.
        source_kind: ``"mmap"`` or ``"file"``.
    """

    source: str
    dest_dir: str
    size: Optional[int] = None
    count: Optional[int] = None
    skip_lines: int = 0
    workers: int = field(default_factory=default_workers)
    prefix: str = DEFAULT_PREFIX
    source_kind: str = field(default_factory=default_source_kind)
    write_buffer_size: int = DEFAULT_WRITE_BUFFER_SIZE
    lookback: int = DEFAULT_LOOKBACK
    skip_scan_size: int = DEFAULT_SKIP_SCAN_SIZE

    def __post_init__(self) -> None:
        if (self.size is None) == (self.count is None):
            raise ConfigError("exactly one of size or count must be given")
        if self.size is not None and self.size <= 0:
            raise ConfigError(f"size must be positive, got {self.size}")
        if self.count is not None and self.count <= 0:
            raise ConfigError(f"count must be positive, got {self.count}")
        if self.skip_lines < 0:
            raise ConfigError(f"skip_lines must be >= 0, got {self.skip_lines}")
        if self.workers <= 0:
            raise ConfigError(f"workers must be positive, got {self.workers}")
        if self.source_kind not in SOURCE_KINDS:
            raise ConfigError(
                f"source_kind must be one of {', '.join(SOURCE_KINDS)}, got {self.source_kind!r}"
            )
        if not self.prefix:
            raise ConfigError("prefix must not be empty")
        for name in ("write_buffer_size", "lookback", "skip_scan_size"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")

    @property
    def mode(self) -> str:
        """Planning mode, ``"size"`` or ``"count"``."""
        return "size" if self.size is not None else "count"

    @property
    def extension(self) -> str:
        """Source file extension including the dot, preserved on every chunk."""
        return os.path.splitext(self.source)[1]
