# textshred/extraction/pipeline.py
"""
Bounded-concurrency extraction of planned sections into chunk files.

The submitting thread takes one permit per section before handing the copy to
a thread pool; the copy's done-callback gives the permit back whether it
succeeded or failed. Every planned section ends up with exactly one outcome:
written, failed, or skipped (never submitted because the run was cancelled).
"""
from __future__ import annotations

import io
import shutil
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from loguru import logger

from textshred.config import DEFAULT_PREFIX, DEFAULT_WRITE_BUFFER_SIZE
from textshred.exceptions import SectionWriteError
from textshred.extraction.naming import chunk_filename
from textshred.extraction.permits import PermitPool
from textshred.extraction.report import (
    FAILED,
    SKIPPED,
    WRITTEN,
    ExtractionReport,
    SectionOutcome,
)
from textshred.io.segment import SegmentReader
from textshred.io.source import ByteSource
from textshred.planning.sections import Section

# 1MB read granularity when streaming a section into its write buffer.
COPY_CHUNK_SIZE = 1024 * 1024


def carve(reader: io.RawIOBase, filename: str, buffer_size: int = DEFAULT_WRITE_BUFFER_SIZE) -> None:
    """Create ``filename`` and stream everything from ``reader`` into it.

    Raises:
        SectionWriteError: the file could not be created, written or closed,
            or the reader ran dry before its section end.
    """
    try:
        with reader, open(filename, "wb", buffering=buffer_size) as out:
            shutil.copyfileobj(reader, out, COPY_CHUNK_SIZE)
            out.flush()
    except (OSError, EOFError) as e:
        raise SectionWriteError(filename, e) from e


class ExtractionPipeline:
    """Writes each section of a shared source to its own file, at most ``workers`` at a time."""

    def __init__(
        self,
        source: ByteSource,
        dest_dir: str,
        *,
        ext: str = "",
        prefix: str = DEFAULT_PREFIX,
        workers: int = 1,
        write_buffer_size: int = DEFAULT_WRITE_BUFFER_SIZE,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.source = source
        self.dest_dir = dest_dir
        self.ext = ext
        self.prefix = prefix
        self.workers = workers
        self.write_buffer_size = write_buffer_size
        self.cancel_event = cancel_event or threading.Event()
        self.permits = PermitPool(workers)

    def filename_for(self, index: int, section: Section) -> str:
        return chunk_filename(self.dest_dir, self.prefix, index, section, self.ext)

    def _copy_section(self, index: int, section: Section, filename: str) -> SectionOutcome:
        reader = SegmentReader(self.source, section)
        log = logger.bind(section=index)
        try:
            carve(reader, filename, self.write_buffer_size)
        except SectionWriteError as e:
            log.warning("{error}", error=e)
            return SectionOutcome(
                index, section, filename, FAILED, section.size - reader.remaining, str(e.cause)
            )
        except Exception as e:
            log.warning(
                "unexpected error carving to file {file!r}: {error!r}", file=filename, error=e
            )
            return SectionOutcome(
                index, section, filename, FAILED, section.size - reader.remaining, repr(e)
            )
        log.debug("Wrote {file} ({size} bytes)", file=filename, size=section.size)
        return SectionOutcome(index, section, filename, WRITTEN, section.size)

    def _release(self, _future: Future) -> None:
        self.permits.release()

    def run(self, sections: List[Section]) -> ExtractionReport:
        """Extract every section and block until all submitted copies finish."""
        report = ExtractionReport(dest_dir=self.dest_dir, workers=self.workers)
        outcomes: List[Optional[SectionOutcome]] = [None] * len(sections)
        futures: List[Future] = []
        logger.info(
            "Chunking with {workers} threads for {n} sections",
            workers=self.workers,
            n=len(sections),
        )

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="carve") as executor:
            submitted = 0
            try:
                for index, section in enumerate(sections):
                    if not self.permits.acquire(self.cancel_event):
                        break
                    future = executor.submit(
                        self._copy_section, index, section, self.filename_for(index, section)
                    )
                    future.add_done_callback(self._release)
                    futures.append(future)
                    submitted += 1
            except KeyboardInterrupt:
                logger.warning("Interrupted; waiting for in-flight sections to finish")
                self.cancel_event.set()

            if submitted < len(sections):
                report.cancelled = True
                logger.warning(
                    "Permit acquisition cancelled; {n} sections not submitted",
                    n=len(sections) - submitted,
                )
                for index in range(submitted, len(sections)):
                    section = sections[index]
                    outcomes[index] = SectionOutcome(
                        index, section, self.filename_for(index, section), SKIPPED
                    )

        for future in futures:
            outcome = future.result()
            outcomes[outcome.index] = outcome

        report.outcomes = [o for o in outcomes if o is not None]
        report.peak_in_flight = self.permits.peak
        return report
