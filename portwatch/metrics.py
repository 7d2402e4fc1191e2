"""In-process counters and gauges for runtime statistics.

A Registry hands out named counters (which only grow) and gauges (which
move both ways); an Exporter renders a snapshot of them as an aligned text
table or as JSON.
"""

from __future__ import annotations

import json
import threading
from typing import TextIO


class Counter:
    """A monotonically increasing counter; thread-safe."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def inc(self) -> None:
        """Increase the counter by one."""
        self.add(1)

    def add(self, n: int) -> None:
        """Increase the counter by a non-negative amount."""
        if n < 0:
            raise ValueError("metrics: counter increment must not be negative")
        with self._lock:
            self._value += n

    def value(self) -> int:
        """Return the current count."""
        with self._lock:
            return self._value


class Gauge:
    """An integer value that can go up or down; thread-safe."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def set(self, value: int) -> None:
        """Replace the gauge value."""
        with self._lock:
            self._value = value

    def inc(self) -> None:
        """Increase the gauge by one."""
        with self._lock:
            self._value += 1

    def dec(self) -> None:
        """Decrease the gauge by one."""
        with self._lock:
            self._value -= 1

    def value(self) -> int:
        """Return the current value."""
        with self._lock:
            return self._value


class Registry:
    """A named set of counters and gauges."""

    def __init__(self) -> None:
        self._counters: dict[str, Counter] = {}
        self._gauges: dict[str, Gauge] = {}
        self._lock = threading.Lock()

    def counter(self, name: str) -> Counter:
        """Return the named counter, creating it if needed."""
        with self._lock:
            return self._counters.setdefault(name, Counter())

    def gauge(self, name: str) -> Gauge:
        """Return the named gauge, creating it if needed."""
        with self._lock:
            return self._gauges.setdefault(name, Gauge())

    def snapshot(self) -> dict[str, int]:
        """Return a copy of every value; a gauge wins over a counter of the same name."""
        with self._lock:
            out = {name: counter.value() for name, counter in self._counters.items()}
            out.update((name, gauge.value()) for name, gauge in self._gauges.items())
            return out


class Exporter:
    """Formats registry snapshots for people or machines."""

    _PADDING = 2

    def __init__(self, registry: Registry) -> None:
        if registry is None:
            raise ValueError("metrics: Exporter: registry must not be None")
        self._registry = registry

    def write_text(self, stream: TextIO) -> None:
        """Write an aligned table of metrics, sorted by name, to stream."""
        rows = [("METRIC", "VALUE")]
        rows += [(name, str(value)) for name, value in sorted(self._registry.snapshot().items())]
        width = max(len(name) for name, _ in rows) + self._PADDING
        stream.write("".join(f"{name:<{width}}{value}\n" for name, value in rows))

    def write_json(self, stream: TextIO) -> None:
        """Write the snapshot as an indented JSON object to stream."""
        stream.write(json.dumps(self._registry.snapshot(), indent=2, sort_keys=True) + "\n")