"""Structured audit log and in-memory store for lifecycle events.

``Logger`` writes human-readable audit lines to any text stream; ``Store``
keeps the N most recent events, evicting the oldest when full.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import TextIO


class Kind(StrEnum):
    """Classification of an audit event."""

    STATE_CHANGE = "state_change"
    ALERT_SENT = "alert_sent"
    ALERT_DROPPED = "alert_dropped"
    CONFIG_RELOAD = "config_reload"
    STARTUP = "startup"
    SHUTDOWN = "shutdown"


def _rfc3339(moment: datetime) -> str:
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass(frozen=True)
class Event:
    """A single audit log entry."""

    at: datetime
    kind: Kind
    target: str
    message: str

    def __str__(self) -> str:
        return f"{_rfc3339(self.at)} [{self.kind}] {self.target}: {self.message}"


class Logger:
    """Writes audit events, one per line, to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        if stream is None:
            raise ValueError("audit: writer must not be None")
        self._stream = stream
        self._lock = threading.Lock()

    def log(self, kind: Kind, target: str, message: str) -> None:
        """Record an audit event stamped with the current UTC time."""
        event = Event(datetime.now(timezone.utc), kind, target, message)
        with self._lock:
            self._stream.write(f"{event}\n")


class Store:
    """Retains the most recent audit events up to a fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("audit: store capacity must be positive")
        self._events: deque[Event] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def record(self, event: Event) -> None:
        """Append an event, evicting the oldest one when full."""
        with self._lock:
            self._events.append(event)

    def entries(self) -> list[Event]:
        """Return a snapshot of stored events, oldest first."""
        with self._lock:
            return list(self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)