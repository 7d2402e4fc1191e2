from datetime import datetime, timezone

import pytest

from portwatch.aggregator import Aggregator
from portwatch.alert import Alert, Severity


def make_alert(target, severity):
    return Alert(target, severity, "test")


def test_new_rejects_zero_cap():
    with pytest.raises(ValueError):
        Aggregator(0)


def test_summarise_empty():
    summary = Aggregator(10).summarise()
    assert (summary.total, summary.up, summary.down) == (0, 0, 0)
    assert summary.alerts == []


def test_record_updates_status():
    agg = Aggregator(10)
    agg.record(make_alert("svc-a", Severity.CRITICAL))
    agg.record(make_alert("svc-b", Severity.INFO))
    summary = agg.summarise()
    assert summary.total == 2
    assert summary.down == 1
    assert summary.up == 1
    assert summary.unknown == 0


def test_record_overwrites_same_target():
    agg = Aggregator(10)
    agg.record(make_alert("svc-a", Severity.CRITICAL))
    agg.record(make_alert("svc-a", Severity.INFO))
    summary = agg.summarise()
    assert summary.total == 1
    assert summary.up == 1
    assert summary.down == 0


def test_record_recent_cap_keeps_newest():
    agg = Aggregator(3)
    for index in range(5):
        agg.record(make_alert(f"svc-{index}", Severity.CRITICAL))
    summary = agg.summarise()
    assert [a.target for a in summary.alerts] == ["svc-2", "svc-3", "svc-4"]


def test_summary_alerts_is_a_copy():
    agg = Aggregator(5)
    agg.record(make_alert("svc", Severity.INFO))
    agg.summarise().alerts.clear()
    assert len(agg.summarise().alerts) == 1


def test_summarise_timestamp():
    agg = Aggregator(5)
    before = datetime.now(timezone.utc)
    summary = agg.summarise()
    after = datetime.now(timezone.utc)
    assert before <= summary.at <= after