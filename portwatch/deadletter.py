"""Bounded dead-letter queue for alerts whose delivery finally failed.

The most recent failures are kept so operators can inspect or replay them;
when full, the oldest entry is evicted.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone

from portwatch.alert import Alert

DEFAULT_CAPACITY = 64


@dataclass(frozen=True)
class Entry:
    """A failed alert together with the reason and attempt count."""

    alert: Alert
    reason: str
    failed_at: datetime
    attempts: int


class DeadLetterQueue:
    """Thread-safe store of the most recent undeliverable alerts."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("deadletter: capacity must be greater than zero")
        self._entries: deque[Entry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def push(self, alert: Alert, reason: str, attempts: int) -> None:
        """Add a failed alert, evicting the oldest entry when full."""
        entry = Entry(alert, reason, datetime.now(timezone.utc), attempts)
        with self._lock:
            self._entries.append(entry)

    def drain(self) -> list[Entry]:
        """Return all entries, oldest first, and empty the queue."""
        with self._lock:
            out = list(self._entries)
            self._entries.clear()
            return out

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)