"""Escalation of outages that last beyond a threshold.

An Escalator remembers when each target first went critical. Once it has
stayed critical for the threshold (seconds), ``evaluate`` returns True;
a non-critical alert clears the tracked downtime::

    escalator = Escalator(1800.0)
    if escalator.evaluate(alert):
        page_on_call()
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from portwatch.alert import Alert, Severity

Clock = Callable[[], float]


class Escalator:
    """Tracks continuous downtime per target against a threshold."""

    def __init__(self, threshold: float, clock: Clock = time.monotonic) -> None:
        if threshold <= 0:
            raise ValueError("escalation: threshold must be positive")
        self._threshold = threshold
        self._clock = clock
        self._down_since: dict[str, float] = {}
        self._lock = threading.Lock()

    def evaluate(self, alert: Alert) -> bool:
        """Update state for alert; True once its target has been down for the threshold."""
        with self._lock:
            if alert.severity != Severity.CRITICAL:
                self._down_since.pop(alert.target, None)
                return False
            now = self._clock()
            since = self._down_since.setdefault(alert.target, now)
            return now - since >= self._threshold

    def reset(self, target: str) -> None:
        """Clear the tracked downtime for target."""
        with self._lock:
            self._down_since.pop(target, None)

    def down_since(self, target: str) -> float | None:
        """Return the clock reading when target was first seen down, or None."""
        with self._lock:
            return self._down_since.get(target)