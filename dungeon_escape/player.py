"""The adventurer: a name, a health total and an inventory."""

from __future__ import annotations

from .inventory import Inventory

STARTING_CAPACITY = 4


class Player:
    """The player character."""

    def __init__(self, name: str = "", health: int = 0) -> None:
        self.name = name
        self.health = health
        self.inventory = Inventory(STARTING_CAPACITY)

    def add_item(self, item: str) -> None:
        self.inventory.add(item)

    def remove_item(self, item: str) -> bool:
        """Remove one copy of ``item``; False if the player did not carry it."""
        return self.inventory.remove(item)

    def has_item(self, item: str) -> bool:
        return item in self.inventory

    def inventory_items(self) -> list[str]:
        return list(self.inventory)

    def status(self) -> str:
        """Health and inventory as two lines of text."""
        return (
            f"Player health: {self.health}\n"
            f"Player inventory: {self.inventory.format()}"
        )