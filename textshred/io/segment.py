# textshred/io/segment.py
"""
Bounded sequential reader over one section of a byte source.
"""

from __future__ import annotations

import io

from textshred.io.source import ByteSource
from textshred.planning.sections import Section


class SegmentReader(io.RawIOBase):
    """Exposes exactly the bytes of ``section`` and then reports end of stream.

    Reads are forwarded to ``source.read_at`` at a private cursor. A short read
    only advances the cursor by what was returned; the next call resumes there.
    """

    def __init__(self, source: ByteSource, section: Section):
        super().__init__()
        self._source = source
        self.section = section
        self._offset = section.start
        self._remaining = section.size

    @property
    def remaining(self) -> int:
        return self._remaining

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if self._remaining <= 0:
            return 0
        view = memoryview(b).cast("B")
        if len(view) > self._remaining:
            view = view[: self._remaining]
        n = self._source.read_at(view, self._offset)
        if n == 0:
            raise EOFError(
                f"source ended at {self._offset} with {self._remaining} bytes of "
                f"section [{self.section.start}, {self.section.end}) unread"
            )
        self._offset += n
        self._remaining -= n
        return n
