# textshred/__init__.py
"""
textshred
=========

Split large line-oriented files into line-aligned chunks using a shared
read-only mmap view, a lookback boundary planner, and a bounded pool of
concurrent writers.
"""
from __future__ import annotations

from importlib.metadata import version as _pkg_version

__all__ = ["__version__"]

try:
    # Read version dynamically from installed package metadata
    __version__: str = _pkg_version("textshred")
except Exception:  # pragma: no cover - fallback for development environments
    __version__ = "0.0.0-dev"
