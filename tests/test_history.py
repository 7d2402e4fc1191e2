from datetime import datetime, timezone

from portwatch.checker import Status
from portwatch.history import Entry, Recorder, Ring


def make_entry(target, status):
    return Entry(target, "localhost", 8080, status, datetime.now(timezone.utc))


def test_default_capacity():
    ring = Ring(0)
    assert len(ring) == 0
    for _ in range(150):
        ring.add(make_entry("svc", "up"))
    assert len(ring) == 100


def test_add_and_len():
    ring = Ring(10)
    ring.add(make_entry("svc-a", "down"))
    ring.add(make_entry("svc-b", "up"))
    assert len(ring) == 2


def test_entries_order():
    ring = Ring(5)
    statuses = ["down", "up", "down"]
    for status in statuses:
        ring.add(make_entry("svc", status))
    assert [e.status for e in ring.entries()] == statuses


def test_ring_wraps():
    ring = Ring(3)
    for i in range(5):
        ring.add(make_entry(f"svc-{i}", "down" if i % 2 == 0 else "up"))
    assert len(ring) == 3
    entries = ring.entries()
    assert [e.status for e in entries] == ["down", "up", "down"]
    assert [e.target for e in entries] == ["svc-2", "svc-3", "svc-4"]


def test_entries_empty():
    assert Ring(10).entries() == []


def test_filter():
    ring = Ring(10)
    for status in ["down", "up", "down", "up"]:
        ring.add(make_entry("svc", status))
    got = ring.filter(lambda e: e.status == "down")
    assert [e.status for e in got] == ["down", "down"]


def test_recorder_record():
    rec = Recorder(50)
    rec.record("api", "localhost", 9000, Status.UP)
    rec.record("api", "localhost", 9000, Status.DOWN)
    assert len(rec) == 2
    entries = rec.entries()
    assert entries[0].status == "UP"
    assert entries[1].status == "DOWN"


def test_recorder_fields():
    rec = Recorder(10)
    before = datetime.now(timezone.utc)
    rec.record("db", "10.0.0.1", 5432, Status.UP)
    entry = rec.entries()[0]
    assert entry.target == "db"
    assert entry.host == "10.0.0.1"
    assert entry.port == 5432
    assert entry.timestamp >= before


def test_recorder_capacity():
    rec = Recorder(3)
    for _ in range(7):
        rec.record("svc", "localhost", 80, Status.UP)
    assert len(rec) == 3