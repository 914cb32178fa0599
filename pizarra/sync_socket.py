"""Synchronous message exchange over TCP.

Every message is acknowledged: the receiver answers each message with
``ACK``, and the sender waits for that answer before going on.
"""

from __future__ import annotations

import socket
import time

ACK = b"ACK"
MESSAGE_SIZE = 4001


def _c_string(data: bytes) -> bytes:
    """Cut ``data`` at its first NUL byte, as a C string would end there."""
    return data.split(b"\0", 1)[0]


class Connection:
    """One end of an open connection that exchanges acknowledged messages."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._closed = False

    @property
    def sock(self) -> socket.socket:
        return self._sock

    def _recv_exact(self, n: int) -> bytes:
        chunks = bytearray()
        while len(chunks) < n:
            piece = self._sock.recv(n - len(chunks))
            if not piece:
                break
            chunks.extend(piece)
        return bytes(chunks)

    def send(self, message: str | bytes) -> int:
        """Send ``message`` and wait for its acknowledgement.

        Returns the number of bytes sent. Raises ``ConnectionError`` when
        the peer does not acknowledge the message.
        """
        data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
        data = _c_string(data)
        if not data:
            raise ValueError("message must not be empty")
        self._sock.sendall(data)
        ack = self._recv_exact(len(ACK))
        if ack != ACK:
            raise ConnectionError(f"message not acknowledged, got {ack!r}")
        return len(data)

    def recv(self, size: int = MESSAGE_SIZE) -> str:
        """Receive one message of at most ``size`` bytes and acknowledge it.

        Returns an empty string when the peer has closed the connection.
        """
        if size <= 0:
            raise ValueError(f"buffer size must be positive: {size}")
        data = self._sock.recv(size)
        try:
            self._sock.sendall(ACK)
        except OSError:
            if data:
                raise
        return _c_string(data).decode("utf-8", errors="replace")

    def close(self) -> None:
        """Close the connection; closing twice is harmless."""
        if not self._closed:
            self._closed = True
            self._sock.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class SyncSocket:
    """Endpoint description: a server binds and accepts, a client connects."""

    def __init__(self, address: str = "localhost", port: int = 0) -> None:
        self.address = address
        self.port = port
        self._listener: socket.socket | None = None

    def bind(self) -> int:
        """Create the listening socket on every interface; return the bound port."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind(("", self.port))
        except OSError:
            sock.close()
            raise
        self._listener = sock
        self.port = sock.getsockname()[1]
        return self.port

    def _bound(self) -> socket.socket:
        if self._listener is None:
            raise RuntimeError("socket is not bound")
        return self._listener

    def listen(self, backlog: int) -> None:
        """Start listening, keeping up to ``backlog`` pending connections."""
        self._bound().listen(backlog)

    def accept(self) -> Connection:
        """Wait for a client and return the connection to it."""
        client, _ = self._bound().accept()
        return Connection(client)

    def connect(self) -> Connection:
        """Connect to the server at this address and port."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.connect((self.address, self.port))
        except OSError:
            sock.close()
            raise
        return Connection(sock)

    def close(self) -> None:
        """Close the listening socket, if any."""
        if self._listener is not None:
            self._listener.close()
            self._listener = None


def connect_with_retries(
    address: str, port: int, attempts: int = 10, delay: float = 1.0
) -> Connection:
    """Try to connect up to ``attempts`` times, waiting ``delay`` seconds between tries."""
    if attempts <= 0:
        raise ValueError(f"attempts must be positive: {attempts}")
    endpoint = SyncSocket(address, port)
    last_error: OSError | None = None
    for attempt in range(attempts):
        try:
            return endpoint.connect()
        except OSError as exc:
            last_error = exc
            if attempt + 1 < attempts:
                time.sleep(delay)
    assert last_error is not None
    raise last_error