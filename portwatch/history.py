"""Bounded history of port-check events.

A Ring keeps entries in a fixed-size buffer, dropping the oldest once full,
so memory stays bounded however long the daemon runs. A Recorder wraps a
Ring and stores checker statuses as text::

    recorder = Recorder(200)
    recorder.record("api-gateway", "10.0.0.5", 8080, Status.DOWN)
    for entry in recorder.entries():
        print(entry.timestamp.isoformat(), entry.host, entry.port, entry.status)
"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from portwatch.checker import Status

DEFAULT_CAPACITY = 100


@dataclass(frozen=True)
class Entry:
    """A single recorded port event."""

    target: str
    host: str
    port: int
    status: str
    timestamp: datetime


class Ring:
    """Thread-safe fixed-size buffer of entries; non-positive capacity means 100."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            capacity = DEFAULT_CAPACITY
        self._entries: deque[Entry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def add(self, entry: Entry) -> None:
        """Append an entry, overwriting the oldest when full."""
        with self._lock:
            self._entries.append(entry)

    def entries(self) -> list[Entry]:
        """Return the stored entries, oldest first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def filter(self, predicate: Callable[[Entry], bool]) -> list[Entry]:
        """Return the entries matching predicate, oldest first."""
        return [entry for entry in self.entries() if predicate(entry)]


class Recorder:
    """Records checker statuses into a Ring."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._ring = Ring(capacity)

    def record(self, target: str, host: str, port: int, status: Status) -> None:
        """Store an event for target stamped with the current UTC time."""
        self._ring.add(Entry(target, host, port, str(status), datetime.now(timezone.utc)))

    def entries(self) -> list[Entry]:
        """Return the recorded entries, oldest first."""
        return self._ring.entries()

    def __len__(self) -> int:
        return len(self._ring)