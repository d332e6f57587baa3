"""Rooms, treasure, enemies and the dungeon that ties them together."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

INVALID_ROOM = "Invalid room"
ENEMY_CAPACITY = 10


@dataclass
class Treasure:
    """A pile of coins of some kind."""

    type: str = ""
    quantity: int = 0

    def label(self) -> str:
        """Inventory label for this treasure, e.g. ``"5 Gold coins"``."""
        return f"{self.quantity} {self.type} coins"


@dataclass
class Enemy:
    """A foe waiting in the dungeon."""

    description: str
    health: int

    def __str__(self) -> str:
        return f"{self.description} {self.health} hp"


@dataclass
class Room:
    """One room of the dungeon."""

    description: str
    items: list[str] = field(default_factory=list)
    treasure: Treasure = field(default_factory=Treasure)

    def details(self) -> str:
        """Describe the room, its items and its treasure, one per line."""
        lines = [self.description]
        if self.items:
            lines.append("Items: " + "".join(f"{item} " for item in self.items))
        else:
            lines.append("")
        if self.treasure.quantity == 0:
            lines.append("")
        else:
            lines.append(f"Treasure: {self.treasure.label()}")
        return "\n".join(lines)


class PathStack:
    """The rooms the player has walked through, most recent on top."""

    def __init__(self) -> None:
        self._positions: list[int] = []

    def push(self, position: int) -> None:
        self._positions.append(position)

    def pop(self) -> int:
        if not self._positions:
            raise IndexError("You are at the starting point")
        return self._positions.pop()

    def peek(self) -> int:
        if not self._positions:
            raise IndexError("You are at the starting point")
        return self._positions[-1]

    def __len__(self) -> int:
        return len(self._positions)


class EnemyQueue:
    """Enemies in the order they will be faced.

    The capacity limits how many enemies may ever be enqueued; slots freed
    by dequeuing are not reused.
    """

    def __init__(self, capacity: int = ENEMY_CAPACITY) -> None:
        self._capacity = capacity
        self._enqueued = 0
        self._enemies: deque[Enemy] = deque()

    def enqueue(self, description: str, health: int) -> None:
        if self._enqueued == self._capacity:
            raise OverflowError("No more enemies can be added")
        self._enemies.append(Enemy(description, health))
        self._enqueued += 1

    def dequeue(self) -> Enemy:
        if not self._enemies:
            raise IndexError("No more enemies to fight")
        return self._enemies.popleft()

    def __len__(self) -> int:
        return len(self._enemies)


class Dungeon:
    """The rooms, the enemy line-up and the path the player has taken."""

    def __init__(self) -> None:
        self.rooms: list[Room] = []
        self.enemies = EnemyQueue(ENEMY_CAPACITY)
        self.path = PathStack()

    def add_room(self, description: str, items: list[str], treasure: Treasure) -> None:
        self.rooms.append(Room(description, list(items), treasure))

    def add_enemy(self, description: str, health: int) -> None:
        self.enemies.enqueue(description, health)

    def _room(self, position: int) -> Room:
        if not 1 <= position <= len(self.rooms):
            raise IndexError(f"no room at position {position}")
        return self.rooms[position - 1]

    def room_details(self, position: int) -> str:
        """Details of the room at a 1-based position."""
        return self._room(position).details()

    def enter(self, position: int) -> None:
        self.path.push(position)

    def go_back(self) -> int:
        return self.path.pop()

    def current_position(self) -> int:
        return self.path.peek()

    def at_beginning(self) -> bool:
        return len(self.path) == 0

    def next_enemy(self) -> Enemy:
        return self.enemies.dequeue()

    def room_description(self, index: int) -> str:
        """Description of the room at a 1-based index, or ``"Invalid room"``."""
        if not 1 <= index <= len(self.rooms):
            return INVALID_ROOM
        return self.rooms[index - 1].description