import socket

import pytest

from portwatch.checker import Checker, Status


@pytest.fixture
def listening_port():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    try:
        yield server.getsockname()[1]
    finally:
        server.close()


@pytest.fixture
def closed_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def test_check_up(listening_port):
    res = Checker(2.0).check("127.0.0.1", listening_port)
    assert res.status is Status.UP, res.error
    assert res.latency > 0
    assert res.error is None
    assert res.host == "127.0.0.1"
    assert res.port == listening_port


def test_check_down(closed_port):
    res = Checker(0.5).check("127.0.0.1", closed_port)
    assert res.status is Status.DOWN
    assert isinstance(res.error, OSError)


def test_status_string(listening_port, closed_port):
    up = Checker(2.0).check("127.0.0.1", listening_port)
    down = Checker(0.5).check("127.0.0.1", closed_port)
    assert str(up.status) == "UP"
    assert str(down.status) == "DOWN"