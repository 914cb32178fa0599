"""A thread-safe tuple space with blocking removal and reading."""

from __future__ import annotations

import threading

from pizarra.store import TupleList
from pizarra.tuples import LindaTuple


class TupleMonitor:
    """Tuple storage shared between threads.

    ``remove`` and ``read`` block until a matching tuple exists. Once
    ``finish`` is called, they return a blank tuple of the pattern's size.
    """

    def __init__(self) -> None:
        self._store = TupleList()
        self._finished = False
        self._changed = threading.Condition()

    def add(self, item: LindaTuple) -> None:
        """Store a copy of ``item`` and wake any waiting readers."""
        with self._changed:
            self._store.insert(str(item), LindaTuple(*item))
            self._changed.notify_all()

    def _await_match(self, pattern: LindaTuple) -> LindaTuple | None:
        found = self._store.find(pattern)
        while found is None and not self._finished:
            self._changed.wait()
            found = self._store.find(pattern)
        return found

    def remove(self, pattern: LindaTuple) -> LindaTuple:
        """Wait for a tuple matching ``pattern``, take it out and return it."""
        with self._changed:
            found = self._await_match(pattern)
            if self._finished or found is None:
                return LindaTuple.blank(len(pattern))
            self._store.remove(str(found))
            return found

    def read(self, pattern: LindaTuple) -> LindaTuple:
        """Wait for a tuple matching ``pattern`` and return it, leaving it stored."""
        with self._changed:
            found = self._await_match(pattern)
            if self._finished or found is None:
                return LindaTuple.blank(len(pattern))
            return found

    def finish(self) -> None:
        """Release every waiting caller; later calls return blank tuples."""
        with self._changed:
            self._finished = True
            self._changed.notify_all()

    def finished(self) -> bool:
        with self._changed:
            return self._finished