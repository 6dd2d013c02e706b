"""Shared fixtures."""

from pathlib import Path

import pytest
from loguru import logger

from textshred.io.source import MappedSource


def numbered_lines(n: int) -> bytes:
    """``1,a`` .. ``n,<letter>`` each followed by a newline."""
    return b"".join(f"{i},{chr(ord('a') + (i - 1) % 26)}\n".encode() for i in range(1, n + 1))


@pytest.fixture
def ten_line_file(tmp_path: Path) -> Path:
    path = tmp_path / "ten.csv"
    path.write_bytes(numbered_lines(10))
    return path


@pytest.fixture
def write_source(tmp_path: Path):
    """Write ``data`` to a file and return an open MappedSource over it."""
    opened = []

    def _make(data: bytes, name: str = "src.txt") -> MappedSource:
        path = tmp_path / name
        path.write_bytes(data)
        source = MappedSource(str(path)).open()
        opened.append(source)
        return source

    yield _make
    for source in opened:
        source.close()


@pytest.fixture
def numbered():
    return numbered_lines


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks a test configured so they never outlive its captured streams."""
    yield
    logger.complete()
    logger.remove()
