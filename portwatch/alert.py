"""Alert type and severity levels used when reporting port state transitions.

An alert captures the target (``host:port``) that triggered it, a severity
(INFO for recovery, CRITICAL for outage), a human-readable message and the
UTC time at which it was created::

    a = Alert("localhost:8080", Severity.CRITICAL, "port unreachable")
    print(a)  # [CRITICAL] 2024-01-15T10:30:00Z localhost:8080 — port unreachable
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum


class Severity(IntEnum):
    """How critical an alert is."""

    INFO = 0
    CRITICAL = 1

    def __str__(self) -> str:
        return self.name


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _rfc3339(moment: datetime) -> str:
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass(frozen=True)
class Alert:
    """A single alerting event for a monitored target."""

    target: str
    severity: Severity
    message: str
    occurred_at: datetime = field(default_factory=_utc_now)

    def __str__(self) -> str:
        return (
            f"[{self.severity}] {_rfc3339(self.occurred_at)} "
            f"{self.target} — {self.message}"
        )

    def is_critical(self) -> bool:
        """Return True when the alert has CRITICAL severity."""
        return self.severity == Severity.CRITICAL