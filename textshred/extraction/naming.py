# textshred/extraction/naming.py
"""
Deterministic chunk filenames.

``<dir>/<prefix>-<index:04d>-<start:012d>-<end:012d><ext>``: each chunk is
addressable by its planning index and byte range, so completion order of the
writers does not matter.
"""
from __future__ import annotations

import os

from textshred.planning.sections import Section

FILE_TEMPLATE = "{prefix}-{index:04d}-{start:012d}-{end:012d}{ext}"


def chunk_filename(dest_dir: str, prefix: str, index: int, section: Section, ext: str) -> str:
    name = FILE_TEMPLATE.format(
        prefix=prefix, index=index, start=section.start, end=section.end, ext=ext
    )
    return os.path.join(dest_dir, name)
