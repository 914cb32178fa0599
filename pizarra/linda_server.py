"""The coordinating tuple server.

Clients send ``ACTION[fields]SIZE`` requests. The server hands each request
to one of three storage servers, chosen by the tuple's size, and passes the
answer back to the client.
"""

from __future__ import annotations

import argparse
import sys
import threading
from typing import Iterable

from pizarra.driver import CONNECT_ATTEMPTS, CONNECT_DELAY
from pizarra.linda_control import LindaControl
from pizarra.storage_server import Request
from pizarra.sync_socket import (
    MESSAGE_SIZE,
    Connection,
    SyncSocket,
    connect_with_retries,
)
from pizarra.tuples import LindaTuple

SERVER_PORT = 5000
BACKEND_PORTS = (5001, 5002, 5003)
MAX_CONNECTIONS = 10
FIN_SERVER = "FIN_SERVER"
DISCONNECT = "DESCONECTAR CLIENTE"
TERMINATION = "TERMINACION"

# Tuple sizes handled by each storage server, in order.
_SIZE_RANGES = ((1, 3), (4, 5), (6, 6))


def backend_for(size: int) -> int | None:
    """Return the index of the storage server for tuples of ``size``, or None."""
    for index, (low, high) in enumerate(_SIZE_RANGES):
        if low <= size <= high:
            return index
    return None


def parse_client_message(message: str) -> Request:
    """Decode a client request ``ACTION[a,b,...]N``."""
    open_at = message.find("[")
    close_at = message.rfind("]")
    if open_at < 0 or close_at < open_at:
        raise ValueError(f"malformed request: {message!r}")
    action = message[:open_at]
    try:
        size = int(message[close_at + 1 :])
    except ValueError as exc:
        raise ValueError(f"malformed tuple size in request: {message!r}") from exc
    item = LindaTuple.from_string(message[open_at : close_at + 1])
    if len(item) != size:
        print(
            "no son iguales la tupla mandada y la parte del mensaje "
            "que nos dice su tamaño",
            file=sys.stderr,
        )
    return Request(action, item, size)


class LindaServer:
    """Accepts clients and forwards their requests to three storage servers."""

    def __init__(
        self, backends: Iterable[tuple[str, int]], port: int = SERVER_PORT
    ) -> None:
        self.backends = [(str(address), int(port_)) for address, port_ in backends]
        if len(self.backends) != len(_SIZE_RANGES):
            raise ValueError(
                f"expected {len(_SIZE_RANGES)} storage servers, "
                f"got {len(self.backends)}"
            )
        self.port = port
        self.control = LindaControl()
        self.ready = threading.Event()
        self._listener: SyncSocket | None = None

    def _wake_acceptor(self) -> None:
        if self._listener is None:
            return
        try:
            SyncSocket("127.0.0.1", self.port).connect().close()
        except OSError:
            pass

    def _shutdown(self, links: list[Connection]) -> None:
        print("\nESPERANDO A QUE FINALICEN LOS CLIENTES")
        print("SE CIERRA LA ENTRADA")
        print("\n Se ha cerrado el servidor, esperando a los clientes")
        for link in links:
            try:
                link.send(TERMINACION_MESSAGE)
            except OSError as exc:
                print("error al enviar a servidores")
                print(f"Error al enviar datos: {exc}", file=sys.stderr)
                link.close()
        self.control.finish()
        self._wake_acceptor()

    def _serve(self, conn: Connection, links: list[Connection]) -> None:
        while True:
            message = conn.recv(MESSAGE_SIZE)
            if not message:
                return
            if self.control.should_exit():
                return
            if message.startswith(DISCONNECT):
                return
            print("-----------------------------------------")
            print(f"Mensaje recibido: {message}")
            if message.startswith(FIN_SERVER):
                self._shutdown(links)
                return
            try:
                request = parse_client_message(message)
            except ValueError as exc:
                print(f"Peticion no valida: {exc}", file=sys.stderr)
                return
            reply = message
            index = backend_for(len(request.item))
            if index is not None:
                link = links[index]
                link.send(message)
                print(f"Mensaje enviado a servidor {index + 1} : {message}")
                reply = link.recv(MESSAGE_SIZE)
                if not reply:
                    raise ConnectionError(
                        f"storage server {index + 1} closed the connection"
                    )
            print(f"Mensaje recibido del servidor x: {reply}")
            conn.send(reply)
            if self.control.update_tuples(request.action):
                return

    def serve_client(self, conn: Connection) -> None:
        """Serve one client until it leaves, shutdown ends it, or a link fails."""
        self.control.client_enters()
        links: list[Connection] = []
        try:
            for address, port in self.backends:
                links.append(
                    connect_with_retries(address, port, CONNECT_ATTEMPTS, CONNECT_DELAY)
                )
            self._serve(conn, links)
        except OSError as exc:
            print(f"Error en la comunicacion: {exc}", file=sys.stderr)
        finally:
            self.control.client_leaves()
            conn.close()
            for link in links:
                link.close()

    def serve_forever(self) -> None:
        """Accept clients, one thread each, until shutdown is requested."""
        listener = SyncSocket("localhost", self.port)
        self.port = listener.bind()
        listener.listen(MAX_CONNECTIONS)
        self._listener = listener
        self.ready.set()
        print("ya escucho")
        number = 1
        try:
            while True:
                conn = listener.accept()
                if self.control.finished():
                    conn.close()
                    break
                print(f"Lanzo thread nuevo cliente {number}")
                threading.Thread(
                    target=self.serve_client, args=(conn,), daemon=True
                ).start()
                print(f"Nuevo cliente {number} aceptado")
                number += 1
        finally:
            self._listener = None
            listener.close()
        print("Bye bye")


TERMINACION_MESSAGE = TERMINATION


def main(argv: list[str] | None = None) -> int:
    """Run the coordinating server, given the three storage servers' addresses."""
    parser = argparse.ArgumentParser(description="Coordinating tuple server")
    parser.add_argument("address1", help="storage server for tuples of size 1-3")
    parser.add_argument("address2", help="storage server for tuples of size 4-5")
    parser.add_argument("address3", help="storage server for tuples of size 6")
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    parser.add_argument(
        "--backend-ports", type=int, nargs=3, default=list(BACKEND_PORTS)
    )
    args = parser.parse_args(argv)
    addresses = (args.address1, args.address2, args.address3)
    server = LindaServer(zip(addresses, args.backend_ports), args.port)
    try:
        server.serve_forever()
    except OSError as exc:
        print(f"Error en el servidor: {exc}", file=sys.stderr)
        return 1
    return 0