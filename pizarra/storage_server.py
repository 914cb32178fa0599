"""A tuple storage server that answers PN, RN and ReadN requests."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass

from pizarra.sync_socket import MESSAGE_SIZE, Connection, SyncSocket
from pizarra.tuple_monitor import TupleMonitor
from pizarra.tuples import LindaTuple

MAX_CONNECTIONS = 10
TERMINATION = "TERMINACION"
USAGE = "Uso: servidor <puerto del servidor>"


@dataclass(frozen=True)
class Request:
    """A decoded request: ``ACTION[fields]SIZE``."""

    action: str
    item: LindaTuple
    size: int


def parse_request(message: str) -> Request:
    """Decode a request of the form ``ACTION[a,b,...]N``."""
    open_at = message.find("[")
    close_at = message.find("]")
    if open_at < 0 or close_at < open_at:
        raise ValueError(f"malformed request: {message!r}")
    action = message[:open_at]
    try:
        size = int(message[close_at + 1 :])
    except ValueError as exc:
        raise ValueError(f"malformed tuple size in request: {message!r}") from exc
    item = LindaTuple.from_string(message[open_at : close_at + 1])
    return Request(action, item, size)


class StorageServer:
    """Stores tuples and serves requests from the coordinating server."""

    def __init__(self, port: int) -> None:
        self.port = port
        self.monitor = TupleMonitor()
        self.ready = threading.Event()
        self._stopping = threading.Event()
        self._listener: SyncSocket | None = None

    def _wake_acceptor(self) -> None:
        if self._listener is None:
            return
        try:
            SyncSocket("127.0.0.1", self.port).connect().close()
        except OSError:
            pass

    def handle(self, message: str) -> str | None:
        """Carry out one request; return the reply, or None when there is none."""
        if message == TERMINATION:
            self.monitor.finish()
            self._stopping.set()
            self._wake_acceptor()
            return None
        request = parse_request(message)
        item = request.item
        if request.action == "PN":
            print(f"Tupla recibida: {item}")
            self.monitor.add(item)
            print(f"Tupla añadida: {item}")
            return "PN correcto"
        if request.action == "RN":
            print(f"Tupla recibida: {item}")
            found = self.monitor.remove(item)
            print(f"Tupla eliminada: {found}")
            return str(found)
        if request.action == "ReadN":
            print(f"Tupla recibida: {item}")
            found = self.monitor.read(item)
            print(f"Tupla leida: {found}")
            return str(found)
        return None

    def serve_link(self, conn: Connection) -> None:
        """Answer requests on ``conn`` until it closes or termination arrives."""
        try:
            while True:
                message = conn.recv(MESSAGE_SIZE)
                if not message:
                    break
                try:
                    reply = self.handle(message)
                except ValueError as exc:
                    print(f"Peticion no valida: {exc}", file=sys.stderr)
                    continue
                if message == TERMINATION:
                    break
                if reply is not None:
                    conn.send(reply)
        except OSError as exc:
            print(f"Error en la comunicacion: {exc}", file=sys.stderr)
        finally:
            print("cierra el socket")
            conn.close()

    def serve_forever(self) -> None:
        """Accept connections, one thread each, until termination is requested."""
        listener = SyncSocket("localhost", self.port)
        self.port = listener.bind()
        print("*Servidor conectado*")
        listener.listen(MAX_CONNECTIONS)
        self._listener = listener
        self.ready.set()
        try:
            while not self._stopping.is_set():
                conn = listener.accept()
                if self._stopping.is_set():
                    conn.close()
                    break
                threading.Thread(
                    target=self.serve_link, args=(conn,), daemon=True
                ).start()
        finally:
            self._listener = None
            listener.close()
        print("bye bye")


def main(argv: list[str] | None = None) -> int:
    """Run a storage server on the port given as the only argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(USAGE)
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print(USAGE)
        return 1
    server = StorageServer(port)
    try:
        server.serve_forever()
    except OSError as exc:
        print(f"Error en el servidor: {exc}", file=sys.stderr)
        return 1
    return 0