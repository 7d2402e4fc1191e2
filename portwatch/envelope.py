"""Routing metadata wrapped around alerts.

An Envelope carries an alert together with a priority, a destination
channel and a random hex trace ID, so sinks and middleware can make
delivery decisions without looking inside the alert::

    env = wrap(alert, Priority.HIGH, "ops")

A Router maps priority thresholds to channels. Rules are checked in order,
highest ``min_priority`` first, and the first match wins::

    router = Router([Rule(Priority.CRITICAL, "pager"), Rule(Priority.HIGH, "chat")], "email")
    routed = router.route(env)
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import IntEnum

from portwatch.alert import Alert


class Priority(IntEnum):
    """How urgently an alert should be delivered."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3

    def __str__(self) -> str:
        return self.name.lower()


def _new_trace_id() -> str:
    return f"{random.getrandbits(64):016x}"


@dataclass(frozen=True)
class Envelope:
    """An alert together with its routing metadata."""

    alert: Alert
    priority: Priority
    channel: str = ""
    trace_id: str = field(default_factory=_new_trace_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def wrap(alert: Alert, priority: Priority, channel: str = "") -> Envelope:
    """Wrap an alert with a fresh trace ID and the current time."""
    return Envelope(alert=alert, priority=priority, channel=channel)


@dataclass(frozen=True)
class Rule:
    """Sends envelopes of at least ``min_priority`` to ``channel``."""

    min_priority: Priority
    channel: str


class Router:
    """Assigns a channel to envelopes from an ordered list of rules."""

    def __init__(self, rules: Iterable[Rule] | None, fallback: str) -> None:
        if not fallback:
            raise ValueError("envelope: Router fallback channel must not be empty")
        self._rules = list(rules or ())
        self._fallback = fallback

    def route(self, envelope: Envelope) -> Envelope:
        """Return a copy of envelope with its channel set; the original is unchanged."""
        for rule in self._rules:
            if envelope.priority >= rule.min_priority:
                return replace(envelope, channel=rule.channel)
        return replace(envelope, channel=self._fallback)

    def __str__(self) -> str:
        return f'Router{{rules:{len(self._rules)} fallback:"{self._fallback}"}}'