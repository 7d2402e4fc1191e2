"""Exponential back-off for retrying transient failures.

Durations are in seconds. Attempt 0 returns the base duration; each further
attempt multiplies by ``multiplier`` (default 2.0) until ``maximum`` is hit::

    strategy = exponential(0.5, 30.0)
    for attempt in range(max_attempts):
        if try_operation():
            break
        time.sleep(strategy.delay(attempt))
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strategy:
    """Parameters of an exponential back-off, all durations in seconds."""

    base: float
    maximum: float
    multiplier: float = 2.0

    def delay(self, attempt: int) -> float:
        """Return the wait for a zero-based attempt number, capped at maximum."""
        base = self.base if self.base > 0 else 1.0
        if attempt <= 0:
            return base
        multiplier = self.multiplier if self.multiplier > 0 else 2.0
        try:
            wait = base * multiplier**attempt
        except OverflowError:
            return self.maximum
        return min(wait, self.maximum)


def exponential(base: float, maximum: float) -> Strategy:
    """Build a Strategy; a non-positive maximum defaults to 30 times base."""
    if base <= 0:
        raise ValueError("backoff: base duration must be positive")
    if maximum <= 0:
        maximum = 30 * base
    return Strategy(base=base, maximum=maximum, multiplier=2.0)