"""Client side of the tuple space: posts, removes and reads tuples."""

from __future__ import annotations

import threading

from pizarra.sync_socket import MESSAGE_SIZE, connect_with_retries
from pizarra.tuples import LindaTuple

CONNECT_ATTEMPTS = 10
CONNECT_DELAY = 1.0


def encode_request(action: str, item: LindaTuple) -> str:
    """Build the wire form ``ACTION[a,b,...]N`` of a request."""
    return f"{action}{item}{len(item)}"


class LindaDriver:
    """A connection to the tuple server, one request at a time."""

    def __init__(self, address: str, port: int | str) -> None:
        self._conn = connect_with_retries(
            address, int(port), CONNECT_ATTEMPTS, CONNECT_DELAY
        )
        self._lock = threading.Lock()

    def _exchange(self, action: str, item: LindaTuple) -> str:
        message = encode_request(action, item)
        with self._lock:
            self._conn.send(message)
            print(f"Enviado a LindaServer: {message}")
            return self._conn.recv(MESSAGE_SIZE)

    def post_note(self, item: LindaTuple) -> None:
        """Store ``item`` in the tuple space."""
        self._exchange("PN", item)

    def remove_note(self, pattern: LindaTuple) -> LindaTuple:
        """Take out a tuple matching ``pattern``, waiting until one exists."""
        return LindaTuple.from_string(self._exchange("RN", pattern))

    def read_note(self, pattern: LindaTuple) -> LindaTuple:
        """Return a tuple matching ``pattern`` without removing it."""
        return LindaTuple.from_string(self._exchange("ReadN", pattern))

    def close(self) -> None:
        """Close the connection to the server."""
        self._conn.close()

    def __enter__(self) -> "LindaDriver":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()