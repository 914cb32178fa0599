import threading
import time

import pytest

from pizarra.driver import LindaDriver, encode_request
from pizarra.linda_server import (
    LindaServer,
    backend_for,
    main,
    parse_client_message,
)
from pizarra.storage_server import StorageServer
from pizarra.sync_socket import connect_with_retries
from pizarra.tuples import LindaTuple


def _eventually(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


def _read_within(monitor, pattern, timeout):
    result = []
    worker = threading.Thread(
        target=lambda: result.append(monitor.read(pattern)), daemon=True
    )
    worker.start()
    worker.join(timeout)
    return result[0] if result else None


def _shut_down(port):
    try:
        with connect_with_retries("127.0.0.1", port, 3, 0.1) as conn:
            conn.send("FIN_SERVER")
            return conn.recv()
    except OSError:
        return ""


@pytest.fixture
def space():
    backends = [StorageServer(0) for _ in range(3)]
    for backend in backends:
        threading.Thread(target=backend.serve_forever, daemon=True).start()
        assert backend.ready.wait(5)
    server = LindaServer([("127.0.0.1", b.port) for b in backends], 0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    assert server.ready.wait(5)
    yield server, backends, thread
    if thread.is_alive():
        _shut_down(server.port)
        thread.join(5)


@pytest.mark.parametrize(
    "size, expected",
    [(1, 0), (2, 0), (3, 0), (4, 1), (5, 1), (6, 2), (0, None), (7, None)],
)
def test_backend_for_ranges(size, expected):
    assert backend_for(size) == expected


def test_parse_client_message_round_trip():
    item = LindaTuple("aprieta", "el", "pan", "45", "34", "88")
    request = parse_client_message(encode_request("ReadN", item))
    assert request.action == "ReadN"
    assert request.item == item
    assert request.size == len(item)


def test_parse_client_message_pattern():
    request = parse_client_message("RN[?A,?B]2")
    assert request.action == "RN"
    assert request.item == LindaTuple("?A", "?B")
    assert request.size == 2


@pytest.mark.parametrize("message", ["PN a,b 2", "PN[a,b]x", "PN]a[2"])
def test_parse_client_message_rejects_malformed(message):
    with pytest.raises(ValueError):
        parse_client_message(message)


def test_server_needs_three_backends():
    with pytest.raises(ValueError):
        LindaServer([("127.0.0.1", 1)], 0)


def test_post_and_remove_through_server(space):
    server, _, _ = space
    with LindaDriver("127.0.0.1", server.port) as driver:
        driver.post_note(LindaTuple("a", "b"))
        removed = driver.remove_note(LindaTuple("?X", "?Y"))
    assert removed == LindaTuple("a", "b")


def test_read_note_leaves_tuple(space):
    server, _, _ = space
    with LindaDriver("127.0.0.1", server.port) as driver:
        driver.post_note(LindaTuple("x"))
        read = driver.read_note(LindaTuple("?A"))
        removed = driver.remove_note(LindaTuple("?A"))
    assert read == LindaTuple("x")
    assert removed == read


def test_large_tuple_goes_to_third_backend(space):
    server, backends, _ = space
    item = LindaTuple("a", "a", "b", "b", "b", "a")
    pattern = LindaTuple("?A", "?B", "?C", "?D", "?E", "?F")
    with LindaDriver("127.0.0.1", server.port) as driver:
        driver.post_note(item)
        assert _read_within(backends[2].monitor, pattern, 2.0) == item
        assert _read_within(backends[1].monitor, pattern, 0.2) is None


def test_tuple_count_follows_requests(space):
    server, _, _ = space
    with LindaDriver("127.0.0.1", server.port) as driver:
        driver.post_note(LindaTuple("1"))
        driver.post_note(LindaTuple("2"))
        driver.remove_note(LindaTuple("?A"))
        driver.read_note(LindaTuple("?A"))
        assert server.control.tuples == 1


def test_disconnect_closes_client(space):
    server, _, _ = space
    with connect_with_retries("127.0.0.1", server.port, 3, 0.1) as conn:
        conn.send("DESCONECTAR CLIENTE")
        assert conn.recv() == ""
    assert _eventually(lambda: server.control.clients == 0)


def test_fin_server_stops_everything(space):
    server, backends, thread = space
    _shut_down(server.port)
    thread.join(5)
    assert not thread.is_alive()
    assert server.control.finished()
    assert _eventually(lambda: all(b.monitor.finished() for b in backends))


def test_main_requires_three_addresses():
    with pytest.raises(SystemExit):
        main(["127.0.0.1"])