"""A shared event log that grants access to writers in arrival order."""

from __future__ import annotations

import itertools
import threading
import time
from pathlib import Path
from typing import TextIO

HEADER = "ID,event,sectionID,val,procID,ts,ticket"
MAX_MESSAGES = 4096

_ID = "idUnico"
_SEP = ","


def _split_events(message: str) -> list[str]:
    """Split on ';' the way a line reader would: a trailing empty piece is dropped."""
    pieces = message.split(";")
    if pieces and pieces[-1] == "":
        pieces.pop()
    return pieces


class EventLogger:
    """Buffered log of events, written to a CSV file.

    Each call to ``add_message`` takes a ticket on arrival; callers are
    served strictly in ticket order. A message may hold several events
    separated by ';', each written as one line.
    """

    def __init__(self, path: str | Path, echo: TextIO | None = None) -> None:
        self._path = Path(path)
        self._echo = echo
        self._buffer: list[str] = []
        self._tickets = itertools.count(1)
        self._ticket_lock = threading.Lock()
        self._turn = threading.Condition()
        self._next = 1
        self._path.write_text(HEADER + "\n", encoding="utf-8")

    def add_message(self, message: str) -> None:
        """Record the events in ``message``, waiting for this caller's turn."""
        with self._ticket_lock:
            ticket = next(self._tickets)
        stamp = time.time_ns()
        thread_id = threading.get_ident()

        with self._turn:
            self._turn.wait_for(lambda: self._next == ticket)
            try:
                for event in _split_events(message):
                    if len(self._buffer) >= MAX_MESSAGES:
                        self._save()
                    line = _SEP.join(
                        (_ID, event, str(thread_id), str(stamp), str(ticket))
                    )
                    self._buffer.append(line)
                    if self._echo is not None:
                        self._echo.write(line + "\n")
            finally:
                self._next += 1
                self._turn.notify_all()

    def _save(self) -> None:
        if not self._buffer:
            return
        with self._path.open("a", encoding="utf-8") as log_file:
            log_file.writelines(line + "\n" for line in self._buffer)
        self._buffer.clear()

    def flush(self) -> None:
        """Append the buffered lines to the log file."""
        with self._turn:
            self._save()

    def close(self) -> None:
        """Write any pending lines."""
        self.flush()

    def __enter__(self) -> "EventLogger":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()