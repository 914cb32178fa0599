import socket
import threading
from unittest import mock

import pytest

from pizarra.driver import LindaDriver, encode_request
from pizarra.storage_server import parse_request
from pizarra.sync_socket import SyncSocket
from pizarra.tuple_monitor import TupleMonitor
from pizarra.tuples import LindaTuple


class FakeLinda:
    def __init__(self):
        self.monitor = TupleMonitor()
        self.listener = SyncSocket("127.0.0.1", 0)
        self.port = self.listener.bind()
        self.listener.listen(10)
        self.received = []
        threading.Thread(target=self._accept, daemon=True).start()

    def _accept(self):
        while True:
            try:
                conn = self.listener.accept()
            except (OSError, RuntimeError):
                return
            threading.Thread(target=self._serve, args=(conn,), daemon=True).start()

    def _serve(self, conn):
        try:
            with conn:
                while True:
                    message = conn.recv()
                    if not message:
                        return
                    self.received.append(message)
                    if message == "FIN_SERVER":
                        return
                    request = parse_request(message)
                    if request.action == "PN":
                        self.monitor.add(request.item)
                        reply = "PN correcto"
                    elif request.action == "RN":
                        reply = str(self.monitor.remove(request.item))
                    else:
                        reply = str(self.monitor.read(request.item))
                    conn.send(reply)
        except OSError:
            return

    def close(self):
        self.monitor.finish()
        self.listener.close()


@pytest.fixture
def fake():
    server = FakeLinda()
    yield server
    server.close()


def test_encode_request_format():
    assert encode_request("PN", LindaTuple("1", "mi casa", "árbol")) == "PN[1,mi casa,árbol]3"
    assert encode_request("ReadN", LindaTuple("?X")) == "ReadN[?X]1"


def test_post_note_sends_encoded_request(fake):
    with LindaDriver("127.0.0.1", fake.port) as driver:
        driver.post_note(LindaTuple("1", "mi casa", "árbol"))
    assert fake.received == [encode_request("PN", LindaTuple("1", "mi casa", "árbol"))]


def test_remove_note_returns_stored_tuple(fake):
    with LindaDriver("127.0.0.1", str(fake.port)) as driver:
        driver.post_note(LindaTuple("1000"))
        result = driver.remove_note(LindaTuple("?X"))
    assert result == LindaTuple("1000")


def test_read_note_leaves_tuple_stored(fake):
    with LindaDriver("127.0.0.1", fake.port) as driver:
        driver.post_note(LindaTuple("Juan", "1000"))
        first = driver.read_note(LindaTuple("?A", "1000"))
        second = driver.read_note(LindaTuple("Juan", "?B"))
        removed = driver.remove_note(LindaTuple("?A", "?B"))
    assert first == LindaTuple("Juan", "1000")
    assert second == first
    assert removed == first


def test_repeated_variable_must_bind_equal_fields(fake):
    with LindaDriver("127.0.0.1", fake.port) as driver:
        driver.post_note(LindaTuple("c", "c"))
        driver.post_note(LindaTuple("a", "b"))
        result = driver.read_note(LindaTuple("?X", "?X"))
    assert result == LindaTuple("c", "c")


def test_connection_refused_after_retries():
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with mock.patch("time.sleep") as sleep:
        with pytest.raises(OSError):
            LindaDriver("127.0.0.1", port)
    assert sleep.call_count == 9