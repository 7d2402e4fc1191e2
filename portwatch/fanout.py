"""Concurrent delivery of one alert to several senders.

Each sender receives the alert independently; a failure in one does not
stop delivery to the others. Failures are raised together as an
ExceptionGroup once every sender has been tried.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from portwatch.alert import Alert


class Sender(Protocol):
    """Anything that can receive an alert."""

    def send(self, alert: Alert) -> None: ...


class Fanout:
    """Dispatches an alert to a fixed set of senders concurrently."""

    def __init__(self, *senders: Sender) -> None:
        if not senders:
            raise ValueError("fanout: at least one sender is required")
        for index, sender in enumerate(senders):
            if sender is None:
                raise ValueError(f"fanout: sender at index {index} is None")
        self._senders = senders

    def send(self, alert: Alert) -> None:
        """Send alert to every sender and wait; raise ExceptionGroup on failures."""
        with ThreadPoolExecutor(max_workers=len(self._senders)) as pool:
            futures = [pool.submit(sender.send, alert) for sender in self._senders]
        errors = [exc for exc in (f.exception() for f in futures) if exc is not None]
        if errors:
            raise ExceptionGroup("fanout: delivery failed", errors)

    def __len__(self) -> int:
        return len(self._senders)