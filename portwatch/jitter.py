"""Randomised offsets added to durations to spread out simultaneous checks."""

from __future__ import annotations

import random
import threading
from typing import Protocol


class _Source(Protocol):
    def randrange(self, stop: int) -> int: ...


class Jitter:
    """Adds a random offset in ``[0, factor * base)`` to a duration in seconds.

    ``factor`` must lie in (0, 1]; with 0.25 the result falls between base
    and 1.25 times base. A custom random source may be supplied for
    deterministic behaviour; it needs a ``randrange(stop)`` method taking a
    count of nanoseconds.
    """

    def __init__(self, factor: float, source: _Source | None = None) -> None:
        if not 0 < factor <= 1:
            raise ValueError("jitter: factor must be in (0, 1]")
        self._factor = factor
        self._source: _Source = source if source is not None else random.Random()
        self._lock = threading.Lock()

    def apply(self, base: float) -> float:
        """Return base plus a random offset; non-positive bases are returned unchanged."""
        if base <= 0:
            return base
        limit_ns = int(base * 1e9 * self._factor)
        if limit_ns == 0:
            return base
        with self._lock:
            offset_ns = self._source.randrange(limit_ns)
        return base + offset_ns / 1e9