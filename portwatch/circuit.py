"""Per-target circuit breaker.

A Breaker counts consecutive failures; at the threshold it opens and
``allow`` returns False. After the reset window (seconds) it goes half-open
and allows a probe: success closes it, another failure keeps it open.
``BreakerStore`` hands out one Breaker per key::

    store = BreakerStore(3, 30.0)
    breaker = store.get("api:8080")
    if breaker.allow():
        ...
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from enum import IntEnum

Clock = Callable[[], float]


class State(IntEnum):
    """Current state of a breaker."""

    CLOSED = 0
    OPEN = 1
    HALF_OPEN = 2

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


class Breaker:
    """Opens after ``threshold`` consecutive failures; probes after a window."""

    def __init__(self, threshold: int, reset_window: float, clock: Clock = time.monotonic) -> None:
        if threshold < 1:
            raise ValueError("circuit: threshold must be >= 1")
        if reset_window <= 0:
            raise ValueError("circuit: reset_window must be positive")
        self._threshold = threshold
        self._reset_window = reset_window
        self._clock = clock
        self._failures = 0
        self._state = State.CLOSED
        self._opened_at = 0.0
        self._lock = threading.Lock()

    def allow(self) -> bool:
        """Report whether a call may be attempted, moving open to half-open when due."""
        with self._lock:
            if self._state is State.OPEN:
                if self._clock() - self._opened_at >= self._reset_window:
                    self._state = State.HALF_OPEN
                    return True
                return False
            return True

    def record_success(self) -> None:
        """Close the breaker and clear the failure count."""
        with self._lock:
            self._failures = 0
            self._state = State.CLOSED

    def record_failure(self) -> None:
        """Count a failure, opening the breaker once the threshold is reached."""
        with self._lock:
            self._failures += 1
            if self._failures >= self._threshold and self._state is not State.OPEN:
                self._state = State.OPEN
                self._opened_at = self._clock()

    @property
    def state(self) -> State:
        """The current breaker state."""
        with self._lock:
            return self._state


class BreakerStore:
    """Named breakers, created on first access with shared parameters."""

    def __init__(self, threshold: int, reset_window: float, clock: Clock = time.monotonic) -> None:
        Breaker(threshold, reset_window, clock)
        self._threshold = threshold
        self._reset_window = reset_window
        self._clock = clock
        self._breakers: dict[str, Breaker] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Breaker:
        """Return the breaker for key, creating it if needed."""
        with self._lock:
            breaker = self._breakers.get(key)
            if breaker is None:
                breaker = Breaker(self._threshold, self._reset_window, self._clock)
                self._breakers[key] = breaker
            return breaker

    def keys(self) -> list[str]:
        """Return the names of all tracked breakers."""
        with self._lock:
            return list(self._breakers)