"""A growable list of item names with an explicit capacity policy."""

from __future__ import annotations

from collections.abc import Iterator

DEFAULT_CAPACITY = 4
_MIN_CAPACITY = 4


class Inventory:
    """Ordered item storage that doubles when full and halves when sparse.

    The storage is a Python list. ``capacity`` is tracked separately so that
    growth and shrinking happen at the same points as in a classic
    dynamic array. Capacity never shrinks below four slots.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._items: list[str] = []
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        """Number of slots currently reserved."""
        return self._capacity

    def add(self, item: str) -> None:
        """Append an item, doubling the capacity first if it is full."""
        if len(self._items) == self._capacity:
            self._capacity *= 2
        self._items.append(item)

    def remove(self, item: str) -> bool:
        """Remove the first occurrence of ``item``.

        Returns False and leaves the inventory unchanged if it is absent.
        """
        try:
            self._items.remove(item)
        except ValueError:
            return False
        if len(self._items) < self._capacity // 4:
            smaller = self._capacity // 2
            if smaller >= _MIN_CAPACITY:
                self._capacity = smaller
        return True

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> str:
        if not 0 <= index < len(self._items):
            raise IndexError("Index out of range")
        return self._items[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def format(self) -> str:
        """Render the items, each followed by a comma."""
        return "".join(f"{item}," for item in self._items)