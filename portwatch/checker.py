"""TCP connectivity probing for a host and port."""

from __future__ import annotations

import socket
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class Status(Enum):
    """Availability state of a port."""

    UP = 0
    DOWN = 1

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Result:
    """Outcome of a single port check; latency is in seconds."""

    host: str
    port: int
    status: Status
    latency: float
    checked_at: datetime
    error: OSError | None = None


class Checker:
    """Probes TCP connectivity with a connection timeout in seconds."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout

    def check(self, host: str, port: int) -> Result:
        """Attempt a TCP connection to host:port and report the outcome."""
        checked_at = datetime.now(timezone.utc)
        start = time.perf_counter()
        try:
            conn = socket.create_connection((host, port), timeout=self.timeout)
        except OSError as exc:
            latency = time.perf_counter() - start
            return Result(host, port, Status.DOWN, latency, checked_at, exc)
        latency = time.perf_counter() - start
        conn.close()
        return Result(host, port, Status.UP, latency, checked_at)