"""An unordered store of tuples with pattern lookup."""

from __future__ import annotations

from collections import deque

from pizarra.tuples import LindaTuple


def is_variable_name(text: str) -> bool:
    """Tell whether ``text`` is a pattern variable ``?A``..``?Z``."""
    return len(text) == 2 and text[0] == "?" and "A" <= text[1] <= "Z"


def _matches(item: LindaTuple, pattern: LindaTuple) -> bool:
    if len(item) != len(pattern):
        return False
    bindings: dict[str, str] = {}
    for value, wanted in zip(item, pattern):
        if is_variable_name(wanted):
            if bindings.setdefault(wanted, value) != value:
                return False
        elif value != wanted:
            return False
    return True


class TupleList:
    """Keyed tuples, newest first; duplicate keys are allowed."""

    def __init__(self) -> None:
        self._nodes: deque[tuple[str, LindaTuple]] = deque()

    def insert(self, key: str, item: LindaTuple) -> None:
        """Add ``item`` under ``key`` at the front."""
        self._nodes.appendleft((key, item))

    def remove(self, key: str) -> bool:
        """Drop the newest entry with ``key``; tell whether one was found."""
        for index, (node_key, _) in enumerate(self._nodes):
            if node_key == key:
                del self._nodes[index]
                return True
        return False

    def find(self, pattern: LindaTuple) -> LindaTuple | None:
        """Return a copy of the newest tuple matching ``pattern``, or None.

        Variables in the pattern match any field, but the same variable
        must match equal fields throughout.
        """
        for _, item in self._nodes:
            if _matches(item, pattern):
                return LindaTuple(*item)
        return None

    def is_empty(self) -> bool:
        return not self._nodes

    def __len__(self) -> int:
        return len(self._nodes)