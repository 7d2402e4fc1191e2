"""HTTP health endpoint reporting the daemon's uptime.

``GET /healthz`` answers with a JSON document holding ``ok`` (always true
while running), ``uptime`` (such as ``1m30s``) and ``started`` (the start
time in RFC 3339)::

    server = Server(":9090", datetime.now(timezone.utc))
    threading.Thread(target=server.serve_forever, daemon=True).start()
    ...
    server.close()
"""

from __future__ import annotations

import json
import logging
import math
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

WSGIApp = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]

_log = logging.getLogger(__name__)


def _format_uptime(seconds: float) -> str:
    whole = int(math.floor(abs(seconds) + 0.5))
    sign = "-" if seconds < 0 and whole else ""
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def _iso(moment: datetime) -> str:
    text = moment.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass(frozen=True)
class HealthStatus:
    """The payload returned by the health endpoint."""

    ok: bool
    uptime: str
    started: datetime

    def to_json(self) -> str:
        """Render as indented JSON with a trailing newline."""
        payload = {"ok": self.ok, "uptime": self.uptime, "started": _iso(self.started)}
        return json.dumps(payload, indent=2) + "\n"


def handler(started: datetime) -> WSGIApp:
    """Return a WSGI application that answers every request with the health status."""

    def app(environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        now = datetime.now(started.tzinfo)
        status = HealthStatus(
            ok=True,
            uptime=_format_uptime((now - started).total_seconds()),
            started=started,
        )
        body = status.to_json().encode("utf-8")
        start_response(
            "200 OK",
            [("Content-Type", "application/json"), ("Content-Length", str(len(body)))],
        )
        return [body]

    return app


def _routes(health: WSGIApp) -> WSGIApp:
    def app(environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        if environ.get("PATH_INFO") == "/healthz":
            return health(environ, start_response)
        body = b"404 page not found\n"
        start_response(
            "404 Not Found",
            [("Content-Type", "text/plain; charset=utf-8"), ("Content-Length", str(len(body)))],
        )
        return [body]

    return app


class _QuietHandler(WSGIRequestHandler):
    timeout = 5

    def log_message(self, format: str, *args: Any) -> None:
        _log.debug("%s - %s", self.address_string(), format % args)


def _split_address(addr: str) -> tuple[str, int]:
    host, _, port = addr.rpartition(":")
    return host, int(port)


class Server:
    """An HTTP server exposing the single ``/healthz`` endpoint."""

    def __init__(self, addr: str, started: datetime) -> None:
        host, port = _split_address(addr)
        self._server: WSGIServer = make_server(
            host, port, _routes(handler(started)), handler_class=_QuietHandler
        )
        self._lock = threading.Lock()
        self._serving = False
        self._closed = False

    @property
    def address(self) -> tuple[str, int]:
        """The host and port the server is bound to."""
        host, port = self._server.server_address[:2]
        return str(host), int(port)

    def serve_forever(self) -> None:
        """Handle requests until close is called."""
        with self._lock:
            if self._closed:
                raise RuntimeError("healthcheck: server is closed")
            self._serving = True
        self._server.serve_forever()

    def close(self) -> None:
        """Stop serving and release the listening socket."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            serving = self._serving
        if serving:
            self._server.shutdown()
        self._server.server_close()