"""Per-key cooldown tracking.

After ``allow`` succeeds for a key, further calls for that key return False
until the quiet window (seconds) has fully elapsed; the timer restarts on
every successful trigger::

    tracker = Tracker(300.0)
    if tracker.allow(target.name):
        send_alert()
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

Clock = Callable[[], float]


class Tracker:
    """Records the last trigger per key and enforces a quiet window."""

    def __init__(self, window: float, clock: Clock = time.monotonic) -> None:
        if window <= 0:
            raise ValueError("cooldown: window must be positive")
        self._window = window
        self._clock = clock
        self._last: dict[str, float] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        """Return True and restart the window if key is not in its quiet period."""
        with self._lock:
            now = self._clock()
            last = self._last.get(key)
            if last is None or now - last >= self._window:
                self._last[key] = now
                return True
            return False

    def reset(self, key: str) -> None:
        """Forget key so that the next allow succeeds immediately."""
        with self._lock:
            self._last.pop(key, None)

    def remaining(self, key: str) -> float:
        """Return the seconds left in key's quiet window, or 0 if none."""
        with self._lock:
            last = self._last.get(key)
            if last is None:
                return 0.0
            elapsed = self._clock() - last
            if elapsed >= self._window:
                return 0.0
            return self._window - elapsed