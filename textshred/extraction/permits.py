# textshred/extraction/permits.py
"""
Counting permit pool bounding in-flight section copies.
"""
from __future__ import annotations

import threading
from typing import Optional

# How often a blocked acquire re-checks its cancellation event, in seconds.
ACQUIRE_POLL_INTERVAL = 0.05


class PermitPool:
    """A bounded semaphore that also counts acquisitions.

    ``in_use`` and ``peak`` are kept under a lock so tests and reports can
    observe the real concurrency ceiling.
    """

    def __init__(self, size: int):
        if size <= 0:
            raise ValueError(f"permit pool size must be positive, got {size}")
        self.size = size
        self._sem = threading.BoundedSemaphore(size)
        self._lock = threading.Lock()
        self.in_use = 0
        self.peak = 0
        self.acquired = 0
        self.released = 0

    def acquire(self, cancel: Optional[threading.Event] = None) -> bool:
        """Block until a permit is free.

        Returns False, holding nothing, if ``cancel`` is set before or while
        waiting.
        """
        if cancel is None:
            self._sem.acquire()
        else:
            while not self._sem.acquire(timeout=ACQUIRE_POLL_INTERVAL):
                if cancel.is_set():
                    return False
            if cancel.is_set():
                self._sem.release()
                return False
        with self._lock:
            self.in_use += 1
            self.acquired += 1
            self.peak = max(self.peak, self.in_use)
        return True

    def release(self) -> None:
        with self._lock:
            self.in_use -= 1
            self.released += 1
        self._sem.release()
