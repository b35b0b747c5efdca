"""Record id providers.

The extractor takes any zero-argument callable returning an int. The
clock provider mirrors a millisecond timestamp but never repeats a value;
the counter provider is deterministic for tests and batch runs.
"""

from __future__ import annotations

import itertools
import threading
import time
from collections.abc import Callable

IdProvider = Callable[[], int]


class ClockIdProvider:
    """Milliseconds since the epoch, strictly increasing per instance."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            value = max(self._clock(), self._last + 1)
            self._last = value
            return value


class CounterIdProvider:
    """Sequential ids starting at ``start``."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def __call__(self) -> int:
        return next(self._counter)
