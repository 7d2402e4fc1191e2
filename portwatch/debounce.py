"""Debouncing of state changes across consecutive check cycles.

A change is only acted on once it has been observed ``threshold`` times in
a row, which prevents alert storms caused by transient failures.
"""

from __future__ import annotations

import threading


class Debouncer:
    """Counts consecutive confirmations of a changed state per key."""

    def __init__(self, threshold: int) -> None:
        if threshold < 1:
            raise ValueError("debounce: threshold must be >= 1")
        self._threshold = threshold
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def confirm(self, key: str, changed: bool) -> bool:
        """Record an observation; True once key has changed threshold times in a row.

        A confirmation resets the counter, and an unchanged observation
        discards any pending count.
        """
        with self._lock:
            if not changed:
                self._counts.pop(key, None)
                return False
            count = self._counts.get(key, 0) + 1
            if count >= self._threshold:
                self._counts.pop(key, None)
                return True
            self._counts[key] = count
            return False

    def reset(self, key: str) -> None:
        """Forget all state for key."""
        with self._lock:
            self._counts.pop(key, None)

    def pending(self, key: str) -> int:
        """Return the current consecutive-change count for key."""
        with self._lock:
            return self._counts.get(key, 0)