"""Alert deduplication by fingerprint.

Identical alerts seen within the window (seconds) are suppressed, which
keeps a flapping service from producing an alert storm. Fingerprints are a
SHA-256 hash of the alert's target and severity, so distinct services or a
change of severity are always forwarded::

    dedup = Deduplicator(300.0)
    if dedup.allow(alert):
        forward(alert)
"""

from __future__ import annotations

import hashlib
import threading
import time
from collections.abc import Callable

from portwatch.alert import Alert

Clock = Callable[[], float]


def fingerprint(alert: Alert) -> str:
    """Return a stable hex digest identifying semantically identical alerts."""
    raw = f"{alert.target}|{alert.severity}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class Deduplicator:
    """Suppresses alerts whose fingerprint was seen within the window."""

    def __init__(self, window: float, clock: Clock = time.monotonic) -> None:
        if window <= 0:
            raise ValueError("dedup: window must be positive")
        self._window = window
        self._clock = clock
        self._seen: dict[str, float] = {}
        self._lock = threading.Lock()

    def allow(self, alert: Alert) -> bool:
        """Return True if the alert should be forwarded, False if a duplicate."""
        key = fingerprint(alert)
        now = self._clock()
        with self._lock:
            self._seen = {
                fp: seen_at for fp, seen_at in self._seen.items() if now - seen_at < self._window
            }
            if key in self._seen:
                return False
            self._seen[key] = now
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)