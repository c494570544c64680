"""
Positional container used to hold waypoints in route order.

``OrderedSequence`` is a thin, bounds-checked wrapper around a Python
list. Unlike a list it never interprets negative indices: every
positional operation rejects an index outside its valid range with
:class:`~tripwise.errors.IndexOutOfRange`. Both the route and the
intermediate state of the insertion heuristic are stored in it.

Example usage:

    seq = OrderedSequence(["a", "c"])
    seq.insert_at(1, "b")
    seq.to_list()  # ['a', 'b', 'c']
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from tripwise.errors import IndexOutOfRange

T = TypeVar("T")

NOT_FOUND = -1


class OrderedSequence(Generic[T]):
    """Indexed, insertable and positionally mutable sequence."""

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: List[T] = list(items) if items is not None else []

    def _check(self, index: int, upper: int, operation: str) -> None:
        if index < 0 or index >= upper:
            raise IndexOutOfRange(index, len(self._items), operation)

    def append(self, x: T) -> None:
        """Add ``x`` to the end of the sequence."""
        self._items.append(x)

    def insert_at(self, index: int, x: T) -> None:
        """Insert ``x`` so that it ends up at ``index``.

        ``index == size()`` is allowed and behaves like :meth:`append`.
        Elements previously at ``index`` or later shift right by one.
        """
        self._check(index, len(self._items) + 1, "insert_at")
        self._items.insert(index, x)

    def get(self, index: int) -> T:
        self._check(index, len(self._items), "get")
        return self._items[index]

    def set(self, index: int, x: T) -> T:
        """Replace the element at ``index`` and return the previous value."""
        self._check(index, len(self._items), "set")
        previous = self._items[index]
        self._items[index] = x
        return previous

    def remove_at(self, index: int) -> T:
        """Remove and return the element at ``index``."""
        self._check(index, len(self._items), "remove_at")
        return self._items.pop(index)

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def contains(self, x: T) -> bool:
        return self.index_of(x) != NOT_FOUND

    def index_of(self, x: T) -> int:
        """Return the first index whose element equals ``x``, or ``-1``."""
        for i, item in enumerate(self._items):
            if item == x:
                return i
        return NOT_FOUND

    def to_list(self) -> List[T]:
        """Return a shallow copy of the elements as a plain list."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, x: object) -> bool:
        return self.contains(x)  # type: ignore[arg-type]

    def __getitem__(self, index: int) -> T:
        return self.get(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedSequence):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"OrderedSequence({self._items!r})"
