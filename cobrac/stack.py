"""A small last-in, first-out stack of strings used by the expression parser."""

from __future__ import annotations

from collections.abc import Iterator


class Stack:
    """A LIFO stack whose bottom is an implicit end marker.

    Popping or peeking an empty stack raises ``IndexError``.
    """

    __slots__ = ("_items",)

    def __init__(self, items: list[str] | None = None) -> None:
        self._items: list[str] = list(items) if items else []

    def push(self, value: str) -> None:
        """Place ``value`` on top of the stack."""
        self._items.append(value)

    def pop(self) -> str:
        """Remove and return the top value."""
        if not self._items:
            raise IndexError("pop from an empty stack")
        return self._items.pop()

    def peek(self) -> str:
        """Return the top value without removing it."""
        if not self._items:
            raise IndexError("peek at an empty stack")
        return self._items[-1]

    def is_empty(self) -> bool:
        """Tell whether the stack holds no values."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[str]:
        """Iterate from the top of the stack down to the bottom."""
        return reversed(self._items)

    def __repr__(self) -> str:
        return f"Stack({self._items!r})"