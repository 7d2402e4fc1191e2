import io
import json
import threading

import pytest

from portwatch.metrics import Exporter, Registry


def test_counter_starts_at_zero():
    assert Registry().counter("c").value() == 0


def test_counter_inc():
    counter = Registry().counter("checks")
    counter.inc()
    counter.inc()
    assert counter.value() == 2


def test_counter_add():
    counter = Registry().counter("alerts")
    counter.add(5)
    assert counter.value() == 5


def test_counter_rejects_negative_add():
    counter = Registry().counter("alerts")
    with pytest.raises(ValueError):
        counter.add(-1)
    assert counter.value() == 0


def test_counter_same_name_returns_same_instance():
    registry = Registry()
    first = registry.counter("x")
    second = registry.counter("x")
    first.inc()
    assert second.value() == 1
    assert first is second


def test_gauge_set_and_get():
    gauge = Registry().gauge("targets_up")
    gauge.set(7)
    assert gauge.value() == 7


def test_gauge_inc_dec():
    gauge = Registry().gauge("online")
    gauge.inc()
    gauge.inc()
    gauge.dec()
    assert gauge.value() == 1


def test_gauge_can_go_negative():
    gauge = Registry().gauge("delta")
    gauge.dec()
    assert gauge.value() == -1


def test_registry_snapshot():
    registry = Registry()
    registry.counter("checks").add(3)
    registry.gauge("up").set(2)
    assert registry.snapshot() == {"checks": 3, "up": 2}


def test_snapshot_is_a_copy():
    registry = Registry()
    registry.counter("checks").add(3)
    snap = registry.snapshot()
    registry.counter("checks").inc()
    assert snap["checks"] == 3


def test_counter_concurrent_inc():
    counter = Registry().counter("concurrent")
    threads = [threading.Thread(target=counter.inc) for _ in range(100)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert counter.value() == 100


def test_exporter_rejects_missing_registry():
    with pytest.raises(ValueError):
        Exporter(None)


def test_write_text_contains_metric_names():
    registry = Registry()
    registry.counter("checks_total").add(10)
    registry.gauge("targets_up").set(3)
    out = io.StringIO()
    Exporter(registry).write_text(out)
    text = out.getvalue()
    for want in ("checks_total", "10", "targets_up", "3"):
        assert want in text


def test_write_text_layout():
    registry = Registry()
    registry.counter("checks_total").add(10)
    registry.gauge("targets_up").set(3)
    out = io.StringIO()
    Exporter(registry).write_text(out)
    assert out.getvalue() == (
        "METRIC        VALUE\n"
        "checks_total  10\n"
        "targets_up    3\n"
    )


def test_write_json_valid_json():
    registry = Registry()
    registry.counter("alerts_fired").add(2)
    out = io.StringIO()
    Exporter(registry).write_json(out)
    assert json.loads(out.getvalue()) == {"alerts_fired": 2}


def test_write_json_empty_registry():
    out = io.StringIO()
    Exporter(Registry()).write_json(out)
    assert out.getvalue() == "{}\n"


def test_write_text_sorted_output():
    registry = Registry()
    registry.counter("zebra").inc()
    registry.counter("apple").inc()
    registry.counter("mango").inc()
    out = io.StringIO()
    Exporter(registry).write_text(out)
    lines = out.getvalue().strip().split("\n")
    assert len(lines) == 4
    assert [line.split()[0] for line in lines[1:]] == ["apple", "mango", "zebra"]