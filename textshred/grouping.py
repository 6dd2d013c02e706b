# textshred/grouping.py
"""
Sequential group-by on a CSV's leading numeric key.

Lines are read in order and a new ``group-<key>.csv`` file is started every
time the key changes, so input sorted by key yields one file per key.
"""
from __future__ import annotations

import os
from typing import BinaryIO, List, Optional

from loguru import logger

from textshred.exceptions import KeyParseError, OpenError
from textshred.runner import ensure_directory

GROUP_TEMPLATE = "group-{key:06d}.csv"


def key_value(line: bytes) -> int:
    """Leading comma-separated field as a non-negative integer.

    The field is parsed as a float and truncated, so ``-3.7`` keys to ``3``.
    """
    i = line.find(b",")
    if i < 0:
        raise KeyParseError(f"no key for line: {line!r}")
    try:
        return abs(int(float(line[:i])))
    except (ValueError, OverflowError) as e:
        raise KeyParseError(f"invalid key in line: {line!r}") from e


def group_by_key(source_path: str, dest_dir: str) -> List[str]:
    """Split ``source_path`` into one file per run of equal leading keys.

    Input must be sorted by key: a key that reappears after a different one
    reopens its file in ``"wb"`` mode, truncating the earlier group.

    Returns:
        Paths of the files written, in the order they were started.
    """
    try:
        handle = open(source_path, "rb")  # noqa: SIM115
    except OSError as e:
        raise OpenError(f"cannot open {source_path!r}: {e}") from e
    written: List[str] = []
    out: Optional[BinaryIO] = None
    last: Optional[int] = None
    try:
        with handle:
            ensure_directory(dest_dir)
            for raw in handle:
                line = raw.rstrip(b"\r\n")
                key = key_value(line)
                if key != last:
                    if out is not None:
                        out.close()
                    path = os.path.join(dest_dir, GROUP_TEMPLATE.format(key=key))
                    out = open(path, "wb")  # noqa: SIM115
                    written.append(path)
                    last = key
                out.write(line + b"\n")
    finally:
        if out is not None:
            out.close()
    logger.info("Grouped {source} into {n} files", source=source_path, n=len(written))
    return written
