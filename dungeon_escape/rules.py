"""Game rules: the dungeon layout, combat, the potion shop and scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from .player import Player
from .world import Dungeon, Treasure

MAX_MOVES = 7
MAX_HEALTH = 100
POTION_HEAL = 20

MERCHANT_OFFER = "\nA merchant appears and offers a healing potion!"


class GameState(Enum):
    """Which screen the application is showing."""

    MENU = auto()
    PLAYING = auto()
    GAME_OVER = auto()
    LEADERBOARD = auto()


class PlayingState(Enum):
    """Where the player is within a run."""

    INTRO = auto()
    ROOM_NAVIGATION = auto()
    DECISION_MAKING = auto()
    COMBAT = auto()
    BOSS_FIGHT = auto()
    GAME_END = auto()


@dataclass(order=True)
class CombatEvent:
    """One action in a fight; higher priority acts first."""

    priority: int
    source: str = field(compare=False)
    target: str = field(compare=False)
    action: str = field(compare=False)
    value: int = field(compare=False)


def gold_label(treasure: Treasure) -> str:
    """The inventory label the gold from ``treasure`` is carried under."""
    return treasure.label()


def build_dungeon() -> tuple[Dungeon, Treasure]:
    """Lay out the five rooms and their enemies.

    Returns the dungeon and the gold treasure found in the first room.
    """
    dungeon = Dungeon()
    gold = Treasure("Gold", 5)
    dungeon.add_room(
        "You are in a very-well lit room with a lot of treasure.", ["torch"], gold
    )
    dungeon.add_room(
        "You enter the room to the south and come to a pond", [], Treasure()
    )
    dungeon.add_room(
        "You stumble upon an unused furnace while taking north", ["sword"], Treasure()
    )
    dungeon.add_enemy("goblin", 10)
    dungeon.add_enemy("creeper", 20)
    dungeon.add_room("TWO ALIENS APPEAR OUT OF NOWHERE", [], Treasure())
    dungeon.add_enemy("Final Boss", 100)
    dungeon.add_room("Final Boss Room", [], Treasure())
    return dungeon, gold


def _combat_events(armed: bool) -> list[CombatEvent]:
    if armed:
        return [
            CombatEvent(10, "Goblin", "Player", "attack", 10),
            CombatEvent(5, "Player", "All Enemies", "sword_attack", 100),
        ]
    return [
        CombatEvent(15, "Creeper", "Player", "explosion", 20),
        CombatEvent(3, "Player", "All Enemies", "hand_attack", 50),
    ]


def _apply(event: CombatEvent, player: Player) -> str:
    match (event.source, event.action):
        case ("Goblin", "attack"):
            player.health -= event.value
            return "The goblin bites you on the leg!\n"
        case ("Creeper", "explosion"):
            player.health -= event.value
            return "The creeper explodes on you!\n"
        case ("Player", "sword_attack"):
            return "One slash of the sword annihilates the creeper and the goblin!\n"
        case ("Player", "hand_attack"):
            return "You crush the goblin and the creeper with your bare hands!\n"
    return ""


def resolve_combat(player: Player, gold_label: str) -> str:
    """Fight the two aliens, changing the player's health; return the narration."""
    events = _combat_events(player.has_item("sword"))
    results = "".join(_apply(event, player) for event in sorted(events, reverse=True))
    if player.has_item(gold_label):
        results += MERCHANT_OFFER
    return results


def buy_potion(player: Player, gold_label: str) -> str:
    """Trade the player's gold for up to 20 health, capped at full health.

    Raises ValueError if the player carries no gold to pay with.
    """
    if not player.has_item(gold_label):
        raise ValueError("You don't have any gold to trade!")
    if player.health >= MAX_HEALTH:
        return "Your health is already full!"
    player.remove_item(gold_label)
    heal = min(POTION_HEAL, MAX_HEALTH - player.health)
    player.health += heal
    return f"You used your gold to buy a healing potion! +{heal} Health"


def final_score(health: int, moves: int, completed: bool) -> int:
    """Score a run: finished runs earn a move bonus, failed ones half the health weight."""
    if completed:
        return health * 10 + (MAX_MOVES - moves) * 20
    return health * 5