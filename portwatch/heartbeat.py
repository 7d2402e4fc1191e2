"""Periodic liveness signal for the monitor loop.

Subscribers receive a Beat on every tick through a queue. Slow subscribers
never block the emitter: a beat is dropped while the previous one is still
unread. When the emitter stops, each queue receives ``None`` to mark the
end::

    emitter = Emitter(10.0)
    beats = emitter.subscribe()
    threading.Thread(target=emitter.run, args=(stop,)).start()
    while (beat := beats.get()) is not None:
        print("alive at", beat.at)
"""

from __future__ import annotations

import queue
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Beat:
    """A single heartbeat and the time it was emitted."""

    at: datetime


class Emitter:
    """Broadcasts heartbeats every ``interval`` seconds to subscribers."""

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("heartbeat: interval must be positive")
        self._interval = interval
        self._subscribers: list[queue.Queue[Beat | None]] = []
        self._lock = threading.Lock()

    def subscribe(self) -> queue.Queue[Beat | None]:
        """Return a queue that receives each beat, then None when the emitter stops."""
        beats: queue.Queue[Beat | None] = queue.Queue()
        with self._lock:
            self._subscribers.append(beats)
        return beats

    def _broadcast(self, beat: Beat) -> None:
        with self._lock:
            for beats in self._subscribers:
                if beats.empty():
                    beats.put_nowait(beat)

    def _close(self) -> None:
        with self._lock:
            for beats in self._subscribers:
                beats.put_nowait(None)
            self._subscribers = []

    def run(self, stop: threading.Event) -> None:
        """Emit heartbeats until stop is set, then close every subscription."""
        next_tick = time.monotonic() + self._interval
        try:
            while not stop.wait(max(0.0, next_tick - time.monotonic())):
                self._broadcast(Beat(datetime.now(timezone.utc)))
                now = time.monotonic()
                next_tick += self._interval
                while next_tick <= now:
                    next_tick += self._interval
        finally:
            self._close()