"""Linda tuples: ordered sequences of string fields."""

from __future__ import annotations

from typing import Iterator


class LindaTuple:
    """A tuple of string fields, addressed with 1-based positions.

    A field of the form ``?X``, where X is an upper-case letter, stands for
    a variable when the tuple is used as a pattern.
    """

    __slots__ = ("_fields",)

    def __init__(self, *args: str) -> None:
        self._fields = [str(arg) for arg in args]

    @classmethod
    def blank(cls, n: int) -> "LindaTuple":
        """Return a tuple of ``n`` empty fields."""
        if n < 0:
            raise ValueError(f"tuple size must not be negative: {n}")
        return cls(*([""] * n))

    @classmethod
    def from_string(cls, text: str) -> "LindaTuple":
        """Parse the ``[a,b,c]`` form produced by ``str``."""
        if len(text) < 2 or text[0] != "[" or text[-1] != "]":
            raise ValueError(f"not a tuple literal: {text!r}")
        return cls(*text[1:-1].split(","))

    def _index(self, n: int) -> int:
        if not 1 <= n <= len(self._fields):
            raise IndexError(f"position {n} outside tuple of size {len(self._fields)}")
        return n - 1

    def get(self, n: int) -> str:
        """Return the field at 1-based position ``n``."""
        return self._fields[self._index(n)]

    def set(self, n: int, label: str) -> None:
        """Replace the field at 1-based position ``n``."""
        self._fields[self._index(n)] = str(label)

    def is_variable(self, n: int) -> bool:
        """Tell whether the field at position ``n`` is a variable ``?A``..``?Z``."""
        field = self.get(n)
        return len(field) == 2 and field[0] == "?" and "A" <= field[1] <= "Z"

    def letter(self, n: int) -> int:
        """Return the alphabet index of the variable at position ``n``."""
        field = self.get(n)
        if len(field) < 2:
            raise ValueError(f"field {field!r} names no variable")
        return ord(field[1]) - ord("A")

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __str__(self) -> str:
        return "[" + ",".join(self._fields) + "]"

    def __repr__(self) -> str:
        return f"LindaTuple({', '.join(map(repr, self._fields))})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LindaTuple):
            return NotImplemented
        return self._fields == other._fields

    __hash__ = None  # type: ignore[assignment]