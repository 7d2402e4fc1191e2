"""Per-key concurrency limiting for probe dispatch.

A Limiter caps how many operations may be in flight at once for each key.
A KeyedGuard returns a release handle from ``acquire``. The handle releases
its slot at most once, whether it is called directly or used as a context
manager, so slots are not leaked on error paths::

    guard = KeyedGuard(3)
    try:
        slot = guard.acquire(target.name)
    except LimitReachedError:
        return  # too many concurrent probes for this target
    with slot:
        probe(target)
"""

from __future__ import annotations

import threading
from types import TracebackType


class LimitReachedError(Exception):
    """Raised when the per-key concurrency cap is already reached."""

    def __init__(self, key: str = "") -> None:
        super().__init__("limiter: concurrency limit reached")
        self.key = key


class Limiter:
    """Allows at most ``maximum`` concurrent operations per key; thread-safe."""

    def __init__(self, maximum: int) -> None:
        if maximum < 1:
            raise ValueError("limiter: max must be >= 1")
        self._maximum = maximum
        self._inflight: dict[str, int] = {}
        self._lock = threading.Lock()

    def acquire(self, key: str) -> None:
        """Take a slot for key, raising LimitReachedError if none is free."""
        with self._lock:
            count = self._inflight.get(key, 0)
            if count >= self._maximum:
                raise LimitReachedError(key)
            self._inflight[key] = count + 1

    def release(self, key: str) -> None:
        """Give back a slot for key; does nothing if none is held."""
        with self._lock:
            count = self._inflight.get(key, 0)
            if count > 1:
                self._inflight[key] = count - 1
            else:
                self._inflight.pop(key, None)

    def inflight(self, key: str) -> int:
        """Return the number of operations in flight for key."""
        with self._lock:
            return self._inflight.get(key, 0)

    def keys(self) -> list[str]:
        """Return every key that currently has operations in flight."""
        with self._lock:
            return list(self._inflight)


class _Slot:
    """A held slot that is released at most once."""

    def __init__(self, limiter: Limiter, key: str) -> None:
        self._limiter = limiter
        self._key = key
        self._released = False
        self._lock = threading.Lock()

    def __call__(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
        self._limiter.release(self._key)

    def __enter__(self) -> _Slot:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self()


class KeyedGuard:
    """Wraps a Limiter so that acquiring a slot yields its own release handle."""

    def __init__(self, maximum: int) -> None:
        self._limiter = Limiter(maximum)

    def acquire(self, key: str) -> _Slot:
        """Take a slot for key and return a callable that releases it once.

        Raises LimitReachedError when no slot is free.
        """
        self._limiter.acquire(key)
        return _Slot(self._limiter, key)

    def inflight(self, key: str) -> int:
        """Return the number of operations in flight for key."""
        return self._limiter.inflight(key)