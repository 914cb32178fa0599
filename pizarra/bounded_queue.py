"""A first-in first-out queue with a fixed capacity."""

from __future__ import annotations

import sys
from collections import deque
from typing import Callable, Generic, Iterator, TextIO, TypeVar

T = TypeVar("T")

_RULE = "------------------------------"


class BoundedQueue(Generic[T]):
    """FIFO queue holding at most ``capacity`` items."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive: {capacity}")
        self._capacity = capacity
        self._items: deque[T] = deque()

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()

    def enqueue(self, item: T) -> None:
        """Append ``item`` at the back; the queue must not be full."""
        if len(self._items) >= self._capacity:
            raise IndexError("enqueue on a full queue")
        self._items.append(item)

    def dequeue(self) -> T:
        """Remove and return the front item; the queue must not be empty."""
        if not self._items:
            raise IndexError("dequeue from an empty queue")
        return self._items.popleft()

    def first(self) -> T:
        """Return the front item without removing it."""
        if not self._items:
            raise IndexError("first of an empty queue")
        return self._items[0]

    def capacity(self) -> int:
        return self._capacity

    def clone(self, other: "BoundedQueue[T]") -> None:
        """Make ``other`` hold the same items; capacities must agree."""
        if other._capacity != self._capacity:
            raise ValueError(
                f"capacity mismatch: {self._capacity} != {other._capacity}"
            )
        other._items = deque(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __str__(self) -> str:
        return ",".join(str(item) for item in self._items)


def demo(make_item: Callable[[int], T], out: TextIO) -> None:
    """Exercise a queue of twelve items, writing each step to ``out``."""
    n = 12
    queue: BoundedQueue[T] = BoundedQueue(n)

    def show(q: BoundedQueue[T]) -> None:
        out.write(f"{q}\n\n")

    for i in range(1, n + 1):
        queue.enqueue(make_item(i))
    show(queue)

    out.write(f"nEl: {len(queue)}\n")
    out.write(f"pri: {queue.first()}\n")

    out.write(f"{_RULE}\nDesencolando ...\n")
    queue.dequeue()
    show(queue)
    out.write(f"{_RULE}\nEncolando el 1000 ...\n")
    queue.enqueue(make_item(1000))
    show(queue)
    out.write(f"{_RULE}\nDesencolando todos menos dos ...\n")
    for _ in range(len(queue) - 2):
        queue.dequeue()
    show(queue)
    out.write(f"{_RULE}\nClonando ...\n")
    copy: BoundedQueue[T] = BoundedQueue(n)
    queue.clone(copy)
    show(copy)
    out.write(f"{_RULE}\n")


def main(argv: list[str] | None = None) -> int:
    """Run the demonstration with integers and with strings."""
    demo(lambda i: i, sys.stdout)
    demo(lambda i: f"verso_{i}", sys.stdout)
    return 0