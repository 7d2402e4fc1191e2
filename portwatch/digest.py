"""Periodic plain-text summaries of monitoring activity.

A Digest collects entries, each a notable state change seen during an
interval, and renders them as a report. A scheduled job typically calls
``write`` and then ``reset`` at a fixed cadence::

    d = Digest("hourly summary")
    d.add(Entry("db:5432", "down", Severity.CRITICAL, datetime.now(timezone.utc)))
    d.write(sys.stdout)
    d.reset()
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TextIO

from portwatch.alert import Severity

DEFAULT_TITLE = "portwatch digest"

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _rfc1123(moment: datetime) -> str:
    m = moment.astimezone(timezone.utc)
    return (
        f"{_DAYS[m.weekday()]}, {m.day:02d} {_MONTHS[m.month - 1]} {m.year} "
        f"{m.hour:02d}:{m.minute:02d}:{m.second:02d} UTC"
    )


@dataclass(frozen=True)
class Entry:
    """A single line of the digest."""

    target: str
    status: str
    severity: Severity
    changed_at: datetime


class Digest:
    """Collects entries and renders a summary report."""

    def __init__(self, title: str = "", clock: Callable[[], datetime] = _utc_now) -> None:
        self.title = title or DEFAULT_TITLE
        self._clock = clock
        self._entries: list[Entry] = []

    def add(self, entry: Entry) -> None:
        """Append an entry."""
        self._entries.append(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        """Clear all collected entries."""
        self._entries.clear()

    def write(self, stream: TextIO) -> None:
        """Render the digest as plain text to stream."""
        lines = [f"=== {self.title} — {_rfc1123(self._clock())} ===\n"]
        if not self._entries:
            lines.append("  no events recorded.\n")
        for entry in self._entries:
            at = entry.changed_at.astimezone(timezone.utc).strftime("%H:%M:%S UTC")
            lines.append(f"  [{entry.severity}] {entry.target} → {entry.status} (at {at})\n")
        lines.append(f"  total events: {len(self._entries)}\n")
        stream.write("".join(lines))