"""A server that counts the vowels in each line its clients send."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import Iterable, TextIO

from pizarra.sync_socket import (
    MESSAGE_SIZE,
    Connection,
    SyncSocket,
    connect_with_retries,
)

END_OF_SERVICE = "END OF SERVICE"
DEFAULT_PORT = 2000
_VOWELS = frozenset("aeiouAEIOU")


def count_vowels(message: str) -> int:
    """Return how many unaccented vowels, either case, ``message`` holds."""
    return sum(1 for char in message if char in _VOWELS)


def serve_client(conn: Connection, out: TextIO) -> None:
    """Answer each message on ``conn`` with its vowel count until end of service."""
    try:
        while True:
            message = conn.recv(MESSAGE_SIZE)
            if not message:
                break
            out.write(f"Mensaje recibido: '{message}'\n")
            if message == END_OF_SERVICE:
                break
            conn.send(str(count_vowels(message)))
    except OSError as exc:
        print(f"Error en la comunicacion: {exc}", file=sys.stderr)
    finally:
        conn.close()


def run_server(port: int, max_clients: int, out: TextIO) -> None:
    """Serve ``max_clients`` clients, one thread each, then stop."""
    if max_clients <= 0:
        raise ValueError(f"max_clients must be positive: {max_clients}")
    listener = SyncSocket("localhost", port)
    listener.bind()
    try:
        listener.listen(max_clients)
        threads = []
        for i in range(max_clients):
            conn = listener.accept()
            out.write(f"Lanzo thread nuevo cliente {i}\n")
            thread = threading.Thread(target=serve_client, args=(conn, out))
            thread.start()
            threads.append(thread)
            out.write(f"Nuevo cliente {i} aceptado\n")
        for thread in threads:
            thread.join()
    finally:
        listener.close()
    out.write("Bye bye\n")


def run_client(
    address: str, port: int, lines: Iterable[str], out: TextIO
) -> list[int]:
    """Send each line to the server and return the vowel counts it answered.

    Empty lines are skipped; running out of lines ends the service.
    """
    counts: list[int] = []
    with connect_with_retries(address, port) as conn:
        source = iter(lines)
        while True:
            out.write("Frase para contar las vocales: ")
            message = next(source, END_OF_SERVICE).rstrip("\r\n")
            if not message:
                continue
            conn.send(message)
            if message == END_OF_SERVICE:
                break
            reply = conn.recv(MESSAGE_SIZE)
            out.write(f"Mensaje enviado: '{message}'\n")
            out.write(f"Numero de vocales: {reply}\n")
            counts.append(int(reply))
    out.write("Bye bye\n")
    return counts


def server_main(argv: list[str] | None = None) -> int:
    """Run the vowel-counting server."""
    parser = argparse.ArgumentParser(description="Vowel-counting server")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--clients", type=int, default=1)
    args = parser.parse_args(argv)
    try:
        run_server(args.port, args.clients, sys.stdout)
    except OSError as exc:
        print(f"Error en el servidor: {exc}", file=sys.stderr)
        return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Send lines read from standard input to the vowel-counting server."""
    parser = argparse.ArgumentParser(description="Vowel-counting client")
    parser.add_argument("--address", default="localhost")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    try:
        run_client(args.address, args.port, sys.stdin, sys.stdout)
    except (OSError, ValueError) as exc:
        print(f"Error en el cliente: {exc}", file=sys.stderr)
        return 1
    return 0