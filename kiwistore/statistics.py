"""Per-key access statistics."""

from __future__ import annotations

import time
from collections import deque
from datetime import timedelta
from typing import Any, Callable, Optional


class KeyStatistics:
    """Sliding window of operation durations and a modification counter."""

    def __init__(self, window_size: int = 10) -> None:
        self._window_size = window_size + 2
        self._durations: deque[int] = deque()
        self._modify_count = 0

    @property
    def window_size(self) -> int:
        """Capacity of the duration window."""
        return self._window_size

    @property
    def durations(self) -> tuple[int, ...]:
        """Durations currently held in the window, oldest first."""
        return tuple(self._durations)

    def add_duration(self, duration: int) -> None:
        """Record a duration, dropping the oldest ones beyond the window."""
        self._durations.append(duration)
        while len(self._durations) > self._window_size:
            self._durations.popleft()

    def avg_duration(self) -> int:
        """Mean of the full window without its largest and smallest entry.

        Returns 0 until the window has been filled.
        """
        if len(self._durations) < self._window_size or len(self._durations) <= 2:
            return 0
        total = sum(self._durations)
        trimmed = total - max(self._durations) - min(self._durations)
        return trimmed // (len(self._durations) - 2)

    def add_modify_count(self, count: int) -> None:
        """Add ``count`` to the number of modifications."""
        self._modify_count += count

    def modify_count(self) -> int:
        """Return the number of modifications recorded."""
        return self._modify_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyStatistics):
            return NotImplemented
        return (
            self._window_size == other._window_size
            and self._durations == other._durations
            and self._modify_count == other._modify_count
        )

    def __hash__(self) -> int:
        return hash((self._window_size, tuple(self._durations), self._modify_count))

    def __repr__(self) -> str:
        return (
            f"KeyStatistics(window_size={self._window_size}, "
            f"durations={list(self._durations)}, modify_count={self._modify_count})"
        )


class KeyStatisticsDurationGuard:
    """Context manager that reports how long its block took.

    On exit the callback receives the data type, the key and the elapsed
    time as a :class:`datetime.timedelta`. It is called at most once.
    """

    def __init__(
        self, dtype: Any, key: str, callback: Callable[[Any, str, timedelta], None]
    ) -> None:
        self.dtype = dtype
        self.key = key
        self._start = time.monotonic()
        self._callback: Optional[Callable[[Any, str, timedelta], None]] = callback

    def __enter__(self) -> KeyStatisticsDurationGuard:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        elapsed = timedelta(seconds=time.monotonic() - self._start)
        callback, self._callback = self._callback, None
        if callback is not None:
            callback(self.dtype, self.key, elapsed)