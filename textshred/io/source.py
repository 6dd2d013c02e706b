# textshred/io/source.py
"""
Random-access byte sources.

``MappedSource`` is the zero-copy default (mmap + memoryview); ``FileSource``
reads through positional ``pread`` calls. Both keep no shared cursor, so one
instance can serve concurrent ``read_at`` calls from every worker thread.
"""

from __future__ import annotations

import mmap
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Type

from textshred.exceptions import OpenError


class ByteSource(ABC):
    """Read-only, byte-addressable view of one file."""

    path: str
    size: int

    @abstractmethod
    def open(self) -> "ByteSource":
        """Open the underlying file. Raises OpenError on failure."""
        raise NotImplementedError

    @abstractmethod
    def read_at(self, buffer: bytearray | memoryview, offset: int) -> int:
        """Copy bytes starting at ``offset`` into ``buffer``.

        Returns the number of bytes copied, which is short only at end of file.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __len__(self) -> int:
        return self.size

    def __enter__(self) -> "ByteSource":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _span(self, buffer: bytearray | memoryview, offset: int) -> int:
        if offset < 0:
            raise ValueError(f"negative offset {offset}")
        return max(0, min(len(buffer), self.size - offset))


class MappedSource(ByteSource):
    """Wraps an mmapped file and serves reads from a memoryview."""

    __slots__ = ("_fd", "_m", "_mv", "size", "path")

    def __init__(self, path: str):
        self.path = path
        self._fd: Optional[int] = None
        self._m: Optional[mmap.mmap] = None
        self._mv: Optional[memoryview] = None
        self.size: int = 0

    def open(self) -> "MappedSource":
        if self._fd is not None:
            return self
        try:
            self._fd = os.open(self.path, os.O_RDONLY)
            self.size = os.fstat(self._fd).st_size
            # mmap refuses zero-length files; an empty source simply has no view.
            if self.size:
                self._m = mmap.mmap(self._fd, self.size, access=mmap.ACCESS_READ)
                self._mv = memoryview(self._m)
        except (OSError, ValueError) as e:
            self.close()
            raise OpenError(f"cannot map {self.path!r}: {e}") from e
        return self

    def close(self) -> None:
        if self._mv is not None:
            self._mv.release()
            self._mv = None
        if self._m is not None:
            self._m.close()
            self._m = None
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    @property
    def view(self) -> memoryview:
        """Zero-copy memoryview over the file bytes."""
        if self._fd is None:
            raise RuntimeError("MappedSource is not open")
        if self._mv is None:
            return memoryview(b"")
        return self._mv

    def read_at(self, buffer: bytearray | memoryview, offset: int) -> int:
        n = self._span(buffer, offset)
        if n:
            buffer[:n] = self.view[offset : offset + n]
        return n


class FileSource(ByteSource):
    """Plain descriptor source using positional reads."""

    __slots__ = ("_fd", "size", "path")

    def __init__(self, path: str):
        self.path = path
        self._fd: Optional[int] = None
        self.size: int = 0

    def open(self) -> "FileSource":
        if self._fd is not None:
            return self
        try:
            self._fd = os.open(self.path, os.O_RDONLY)
            self.size = os.fstat(self._fd).st_size
        except OSError as e:
            self.close()
            raise OpenError(f"cannot open {self.path!r}: {e}") from e
        return self

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def read_at(self, buffer: bytearray | memoryview, offset: int) -> int:
        if self._fd is None:
            raise RuntimeError("FileSource is not open")
        n = self._span(buffer, offset)
        if not n:
            return 0
        data = os.pread(self._fd, n, offset)
        buffer[: len(data)] = data
        return len(data)


SOURCES: Dict[str, Type[ByteSource]] = {
    "mmap": MappedSource,
    "file": FileSource,
}


def open_source(path: str, kind: str = "mmap") -> ByteSource:
    """Open ``path`` with the byte source registered under ``kind``."""
    try:
        cls = SOURCES[kind]
    except KeyError:
        raise ValueError(f"unknown source kind {kind!r}") from None
    return cls(path).open()


@dataclass
class LocalFileSource:
    """Local file source descriptor.

    Attributes:
        path: Path to the local file.
        kind: Which byte source to open it with.
    """

    path: str
    kind: str = "mmap"

    def open(self) -> ByteSource:
        """Open the file read-only with the configured source kind."""
        return open_source(self.path, self.kind)
