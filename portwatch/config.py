"""Loading and validation of YAML configuration files.

A configuration lists targets, each a host/port pair with a polling
interval and connection timeout. Durations use forms such as ``10s``,
``500ms`` or ``1h30m`` and are held as seconds::

    cfg = load("portwatch.yaml")
    for target in cfg.targets:
        print(f"monitoring {target.name} on {target.host}:{target.port}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_INTERVAL = 30.0
DEFAULT_TIMEOUT = 5.0

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_PART = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
_PART_RE = re.compile(_PART)
_DURATION_RE = re.compile(f"(?:{_PART})+")


class ConfigError(Exception):
    """Raised when a configuration cannot be read, parsed or validated."""


@dataclass
class Target:
    """A single host and port to monitor; durations are in seconds."""

    name: str = ""
    host: str = ""
    port: int = 0
    interval: float = 0.0
    timeout: float = 0.0
    tags: list[str] = field(default_factory=list)


@dataclass
class Config:
    """The full configuration."""

    targets: list[Target] = field(default_factory=list)

    def validate(self) -> None:
        """Check required fields and fill in defaults, raising ConfigError."""
        if not self.targets:
            raise ConfigError("config: no targets defined")
        for index, target in enumerate(self.targets):
            if not target.host:
                raise ConfigError(f"config: target[{index}] missing host")
            if not 1 <= target.port <= 65535:
                raise ConfigError(f"config: target[{index}] port {target.port} out of range")
            if target.interval <= 0:
                target.interval = DEFAULT_INTERVAL
            if target.timeout <= 0:
                target.timeout = DEFAULT_TIMEOUT
            if not target.name:
                target.name = f"{target.host}:{target.port}"


def parse_duration(text: str) -> float:
    """Parse a duration such as ``1h30m`` or ``-500ms`` into seconds."""
    body = text
    sign = 1.0
    if body[:1] in ("+", "-"):
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]
    if body == "0":
        return 0.0
    if not body or not _DURATION_RE.fullmatch(body):
        raise ValueError(f"invalid duration {text!r}")
    total = sum(float(m[1]) * _UNIT_SECONDS[m[2]] for m in _PART_RE.finditer(body))
    return sign * total


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).lower() if isinstance(value, bool) else str(value)
    raise ValueError(f"expected a scalar, got {type(value).__name__}")


def _port(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ValueError(f"port must be an integer, got {value!r}")


def _duration(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"invalid duration {value!r}")
    if isinstance(value, int):
        return value / 1e9
    if isinstance(value, str):
        return parse_duration(value)
    raise ValueError(f"invalid duration {value!r}")


def _tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [_text(item) for item in value]
    raise ValueError("tags must be a list")


def _target(raw: Any, index: int) -> Target:
    if not isinstance(raw, dict):
        raise ValueError(f"target[{index}] must be a mapping")
    return Target(
        name=_text(raw.get("name")),
        host=_text(raw.get("host")),
        port=_port(raw.get("port")),
        interval=_duration(raw.get("interval")),
        timeout=_duration(raw.get("timeout")),
        tags=_tags(raw.get("tags")),
    )


def _parse(document: Any) -> Config:
    if document is None:
        return Config()
    if not isinstance(document, dict):
        raise ValueError("top level must be a mapping")
    raw_targets = document.get("targets")
    if raw_targets is None:
        return Config()
    if not isinstance(raw_targets, list):
        raise ValueError("targets must be a list")
    return Config([_target(raw, index) for index, raw in enumerate(raw_targets)])


def load(path: str | Path) -> Config:
    """Read, parse and validate a YAML configuration file."""
    try:
        data = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"config: reading file: {exc}") from exc
    try:
        cfg = _parse(yaml.safe_load(data))
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigError(f"config: parsing yaml: {exc}") from exc
    cfg.validate()
    return cfg