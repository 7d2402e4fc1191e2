import pytest

from portwatch.alert import Alert, Severity
from portwatch.dedup import Deduplicator, fingerprint


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_alert(target, severity=Severity.CRITICAL, message="down"):
    return Alert(target, severity, message)


@pytest.mark.parametrize("window", [0, -1.0])
def test_new_rejects_non_positive_window(window):
    with pytest.raises(ValueError):
        Deduplicator(window)


def test_allow_first_call_always_true():
    assert Deduplicator(60.0).allow(make_alert("svc")) is True


def test_allow_duplicate_suppressed():
    dedup = Deduplicator(60.0)
    alert = make_alert("svc")
    dedup.allow(alert)
    assert dedup.allow(alert) is False


def test_allow_different_targets_independent():
    dedup = Deduplicator(60.0)
    dedup.allow(make_alert("svc-a"))
    assert dedup.allow(make_alert("svc-b")) is True


def test_allow_severity_change_forwarded():
    dedup = Deduplicator(60.0)
    dedup.allow(make_alert("svc", Severity.CRITICAL))
    assert dedup.allow(make_alert("svc", Severity.INFO)) is True


def test_allow_passes_after_window_expires():
    clock = FakeClock()
    dedup = Deduplicator(0.05, clock=clock)
    alert = make_alert("svc")
    dedup.allow(alert)
    clock.advance(0.06)
    assert dedup.allow(alert) is True


def test_len_tracks_entries():
    dedup = Deduplicator(60.0)
    assert len(dedup) == 0
    dedup.allow(make_alert("a"))
    dedup.allow(make_alert("b"))
    assert len(dedup) == 2


def test_expired_entries_evicted():
    clock = FakeClock()
    dedup = Deduplicator(10.0, clock=clock)
    dedup.allow(make_alert("a"))
    clock.advance(11.0)
    dedup.allow(make_alert("b"))
    assert len(dedup) == 1


def test_fingerprint_ignores_message():
    assert fingerprint(make_alert("svc", message="one")) == fingerprint(
        make_alert("svc", message="two")
    )


def test_fingerprint_is_sha256_hex():
    fp = fingerprint(make_alert("svc"))
    assert len(fp) == 64
    assert set(fp) <= set("0123456789abcdef")