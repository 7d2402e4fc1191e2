import threading
from datetime import datetime, timezone

import pytest

from portwatch.heartbeat import Beat, Emitter


@pytest.mark.parametrize("interval", [0, -1.0])
def test_rejects_non_positive_interval(interval):
    with pytest.raises(ValueError):
        Emitter(interval)


def start(emitter):
    stop = threading.Event()
    thread = threading.Thread(target=emitter.run, args=(stop,), daemon=True)
    thread.start()
    return stop, thread


def test_receives_beat():
    emitter = Emitter(0.02)
    beats = emitter.subscribe()
    before = datetime.now(timezone.utc)
    stop, thread = start(emitter)
    try:
        beat = beats.get(timeout=2)
        after = datetime.now(timezone.utc)
        assert isinstance(beat, Beat)
        assert beat.at.tzinfo is not None
        assert before <= beat.at <= after
    finally:
        stop.set()
        thread.join(timeout=2)


def test_multiple_subscribers():
    emitter = Emitter(0.02)
    first, second = emitter.subscribe(), emitter.subscribe()
    before = datetime.now(timezone.utc)
    stop, thread = start(emitter)
    try:
        beat_one = first.get(timeout=2)
        beat_two = second.get(timeout=2)
        after = datetime.now(timezone.utc)
        assert before <= beat_one.at <= after
        assert before <= beat_two.at <= after
    finally:
        stop.set()
        thread.join(timeout=2)


def test_closes_on_stop():
    emitter = Emitter(0.05)
    beats = emitter.subscribe()
    stop, thread = start(emitter)
    stop.set()
    thread.join(timeout=2)
    assert not thread.is_alive()
    items = []
    while not beats.empty():
        items.append(beats.get_nowait())
    assert items[-1] is None
    assert all(isinstance(item, Beat) for item in items[:-1])


def test_slow_subscriber_holds_at_most_one_beat():
    emitter = Emitter(0.01)
    beats = emitter.subscribe()
    stop, thread = start(emitter)
    threading.Event().wait(0.1)
    stop.set()
    thread.join(timeout=2)
    items = []
    while not beats.empty():
        items.append(beats.get_nowait())
    assert len(items) <= 2
    assert items[-1] is None