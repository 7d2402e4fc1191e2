# portwatch

A toolkit for watching TCP ports and turning their state changes into
useful, quiet alerts.

portwatch gives you the pieces of a port-monitoring daemon as small
building blocks that you wire together yourself. Stateful components guard
their state with a lock, so one instance can be shared between threads.
Durations are plain `float` seconds throughout.

## What is in the package

- **Configuration** (`portwatch.config`): `load(path)` reads a YAML file of
  targets into a `Config` of `Target` objects, fills in defaults (30 s
  interval, 5 s timeout, `host:port` as the name) and raises `ConfigError`
  when the file cannot be read, cannot be parsed, has no targets, a target
  lacks a host, or a port is outside 1–65535. `parse_duration` turns strings
  such as `500ms`, `10s` or `1h30m` into seconds.
- **Probing** (`portwatch.checker`): `Checker(timeout).check(host, port)`
  opens a TCP connection and returns a `Result` with `Status.UP` or
  `Status.DOWN`, the latency in seconds, the check time and, on failure, the
  `OSError`.
- **Alerts** (`portwatch.alert`): `Alert(target, severity, message)` with
  `Severity.INFO` for recovery and `Severity.CRITICAL` for outages;
  `str(alert)` gives a one-line log form and `is_critical()` tests severity.
- **Noise control**:
  - `debounce.Debouncer(threshold)` — `confirm(key, changed)` is true only
    after `threshold` consecutive changed observations.
  - `dedup.Deduplicator(window)` — `allow(alert)` suppresses alerts with the
    same target and severity seen within the window (`fingerprint(alert)` is
    the SHA-256 key used).
  - `cooldown.Tracker(window)` — `allow(key)`, `reset(key)`,
    `remaining(key)` for a quiet period per key.
  - `circuit.Breaker(threshold, reset_window)` and `circuit.BreakerStore` —
    open after repeated failures, go half-open after the window.
  - `escalation.Escalator(threshold)` — `evaluate(alert)` is true once a
    target has stayed critical for the threshold.
- **Retry timing**: `backoff.exponential(base, maximum)` returns a
  `Strategy` whose `delay(attempt)` grows by `multiplier` up to `maximum`;
  `jitter.Jitter(factor).apply(base)` adds a random offset in
  `[0, factor * base)`.
- **Delivery**:
  - `envelope.wrap(alert, priority, channel)` builds an `Envelope` with a
    random 16-digit hex `trace_id`; `envelope.Router(rules, fallback)`
    picks a channel from `Rule(min_priority, channel)` entries.
  - `fanout.Fanout(*senders).send(alert)` delivers to every sender
    concurrently and raises an `ExceptionGroup` of any failures.
  - `deadletter.DeadLetterQueue(capacity)` keeps the most recent
    undeliverable alerts; `drain()` returns and clears them.
- **Concurrency limits** (`portwatch.limiter`): `Limiter(maximum)` raises
  `LimitReachedError` when a key has too many operations in flight;
  `KeyedGuard(maximum).acquire(key)` returns a handle that releases its slot
  once, either when called or as a context manager.
- **Reporting**:
  - `aggregator.Aggregator(recent_cap)` — `summarise()` returns a `Summary`
    with up/down/unknown counts and recent alerts.
  - `digest.Digest(title)` — `write(stream)` renders collected entries as a
    plain-text report.
  - `history.Ring` and `history.Recorder` — bounded event logs.
  - `audit.Logger(stream)` and `audit.Store(capacity)` — lifecycle events.
  - `metrics.Registry` with `Counter` and `Gauge`, and
    `metrics.Exporter(registry)` with `write_text` (aligned table sorted by
    name) and `write_json`.
- **Liveness**:
  - `heartbeat.Emitter(interval)` — `subscribe()` returns a queue that
    receives a `Beat` per tick (dropped while the previous one is unread)
    and `None` once `run(stop)` returns after `stop` is set.
  - `healthcheck.Server(addr, started)` — serves `GET /healthz` with JSON
    holding `ok`, `uptime` and `started`; `handler(started)` is the same
    endpoint as a WSGI application.
- **Selection** (`portwatch.filtering`): `apply(targets, Options(tags,
  name_prefix))` keeps targets by name prefix and tags, ignoring case.

## Configuration file

```yaml
targets:
  - name: local-http
    host: localhost
    port: 8080
    interval: 10s
    timeout: 3s
    tags: [http, prod]
  - host: example.com
    port: 443
```

## Example

```python
from portwatch import config
from portwatch.checker import Checker, Status
from portwatch.circuit import BreakerStore

cfg = config.load("portwatch.yaml")
breakers = BreakerStore(3, 30.0)

for target in cfg.targets:
    breaker = breakers.get(target.name)
    if not breaker.allow():
        continue
    result = Checker(target.timeout).check(target.host, target.port)
    if result.status is Status.UP:
        breaker.record_success()
    else:
        breaker.record_failure()
    print(target.name, result.status, f"{result.latency:.3f}s")
```

## What it does not do

portwatch has no command-line program and no running monitor. Nothing in
the package loads a configuration, schedules checks at each target's
interval, or prints alerts on its own; you write that loop from the pieces
above. Alerts are not sent anywhere either: senders for `Fanout` are yours
to provide.

## Requirements

Python 3.11 or later. YAML parsing uses PyYAML; everything else is the
standard library. Install the `test` extra to run the tests with pytest.