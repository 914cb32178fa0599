"""Bookkeeping for the tuple server: connected clients and stored tuples."""

from __future__ import annotations

import threading


class LindaControl:
    """Monitor counting clients and tuples, and handling orderly shutdown."""

    def __init__(self) -> None:
        self._clients = 0
        self._tuples = 0
        self._finished = False
        self._exit = False
        self._cond = threading.Condition()

    @property
    def clients(self) -> int:
        with self._cond:
            return self._clients

    @property
    def tuples(self) -> int:
        with self._cond:
            return self._tuples

    def client_enters(self) -> None:
        """Register a client.

        Once shutdown has begun no client is counted; if clients remain,
        the caller waits until the last one leaves an empty board.
        """
        with self._cond:
            if self._finished:
                if self._clients != 0:
                    self._cond.wait_for(
                        lambda: self._clients == 0 and self._tuples <= 0
                    )
            else:
                self._clients += 1

    def update_tuples(self, instruction: str) -> bool:
        """Account for ``instruction``; tell whether the client must leave."""
        with self._cond:
            if instruction == "RN":
                self._tuples -= 1
            elif instruction == "PN":
                self._tuples += 1
            if self._tuples <= 0 and self._finished:
                self._exit = True
                return True
            return False

    def client_leaves(self) -> None:
        """Unregister a client, waking the waiter when the server may stop."""
        with self._cond:
            self._clients -= 1
            if self._clients == 0 and self._tuples <= 0 and self._finished:
                self._cond.notify_all()
            elif self._finished:
                print(
                    f"Aun quedan por salir {self._clients} clientes y sigue "
                    f"habiendo {self._tuples} en la pizarra"
                )

    def finish(self) -> None:
        """Begin shutdown."""
        with self._cond:
            self._finished = True

    def should_exit(self) -> bool:
        with self._cond:
            return self._exit

    def finished(self) -> bool:
        with self._cond:
            return self._finished