"""Roll-up of alerts across targets into an overall health summary.

An Aggregator is fed alerts from any number of monitoring threads and keeps
each target's latest severity plus a bounded list of recent alerts::

    agg = Aggregator(100)
    agg.record(alert)
    summary = agg.summarise()
    print(f"{summary.up}/{summary.total} targets up")
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone

from portwatch.alert import Alert, Severity


@dataclass(frozen=True)
class Summary:
    """Point-in-time snapshot of overall service health."""

    total: int = 0
    up: int = 0
    down: int = 0
    unknown: int = 0
    alerts: list[Alert] = field(default_factory=list)
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Aggregator:
    """Tracks per-target severity and the most recent alerts; thread-safe."""

    def __init__(self, recent_cap: int) -> None:
        if recent_cap < 1:
            raise ValueError("aggregator: recent_cap must be >= 1")
        self._status: dict[str, Severity] = {}
        self._recent: deque[Alert] = deque(maxlen=recent_cap)
        self._lock = threading.Lock()

    def record(self, alert: Alert) -> None:
        """Ingest an alert, updating its target's status and the recent list."""
        with self._lock:
            self._status[alert.target] = alert.severity
            self._recent.append(alert)

    def summarise(self) -> Summary:
        """Return a snapshot of current health across all known targets."""
        with self._lock:
            up = down = unknown = 0
            for severity in self._status.values():
                if severity == Severity.CRITICAL:
                    down += 1
                elif severity == Severity.INFO:
                    up += 1
                else:
                    unknown += 1
            return Summary(
                total=len(self._status),
                up=up,
                down=down,
                unknown=unknown,
                alerts=list(self._recent),
                at=datetime.now(timezone.utc),
            )