"""The state of one run through the dungeon, free of any drawing code."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from .leaderboard import PlayerRecord
from .player import Player
from .rules import (
    MAX_HEALTH,
    MAX_MOVES,
    GameState,
    PlayingState,
    build_dungeon,
    buy_potion,
    final_score,
    gold_label,
    resolve_combat,
)

MESSAGE_SECONDS = 5.0
MAX_TICK = 0.1
LEPRECHAUN_DELAY = 3.0
BOSS_PROMPT_DELAY = 3.0
BOSS_REACTION_LIMIT = 3.0
BOSS_TIMEOUT = 5.0
JUMP_DAMAGE = 10


@dataclass(frozen=True)
class Choice:
    """An option offered in a room.

    A choice without an action is shown but cannot be taken; ``text_only``
    marks a line of narration rather than a greyed-out button.
    """

    label: str
    action: Callable[[], None] | None = None
    text_only: bool = False

    @property
    def enabled(self) -> bool:
        return self.action is not None


class Game:
    """One play-through: the player, the dungeon and where the run stands."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.state = GameState.PLAYING
        self.playing = PlayingState.INTRO
        self.player = Player("", MAX_HEALTH)
        self.dungeon, self.gold = build_dungeon()
        self.current_room = 1
        self.num_moves = 1
        self.level1_done = False
        self.torch_taken = False
        self.name_submitted = False
        self.status_message = ""
        self.status_timer = 0.0
        self.combat_report = ""
        self._choices: list[Choice] = []
        self._choices_room = 0
        self._leprechaun_appeared = False
        self._leprechaun_since = 0.0
        self._boss_started = False
        self._boss_since = 0.0
        self.boss_prompt_shown = False
        self.boss_result_determined = False

    # ------------------------------------------------------------------ intro

    @property
    def moves_left(self) -> int:
        return MAX_MOVES - self.num_moves

    @property
    def finished(self) -> bool:
        return self.state is GameState.GAME_OVER or self.playing is PlayingState.GAME_END

    def submit_name(self, name: str) -> None:
        """Set the adventurer's name during the introduction."""
        if self.playing is not PlayingState.INTRO:
            raise RuntimeError("the name can only be given during the introduction")
        self.player.name = name
        self.name_submitted = True

    def begin(self) -> None:
        """Leave the introduction and stand in the first room."""
        if self.playing is not PlayingState.INTRO or not self.name_submitted:
            raise RuntimeError("enter a name before starting")
        self.playing = PlayingState.ROOM_NAVIGATION
        self.current_room = 1
        self.dungeon.enter(self.current_room)

    # -------------------------------------------------------------- messages

    def _say(self, message: str, seconds: float = MESSAGE_SECONDS) -> None:
        self.status_message = message
        self.status_timer = seconds

    def tick(self, elapsed: float) -> None:
        """Let time pass for the status message; each step counts at most 0.1 s."""
        if not self.status_message or self.status_timer <= 0.0:
            return
        self.status_timer -= min(max(elapsed, 0.0), MAX_TICK)
        if self.status_timer <= 0.0:
            self.status_message = ""

    # ------------------------------------------------------------ navigation

    def _require_navigation(self) -> None:
        if self.state is not GameState.PLAYING or self.playing is not PlayingState.ROOM_NAVIGATION:
            raise RuntimeError("the player is not moving between rooms")

    def _check_moves(self) -> None:
        if (
            self.state is GameState.PLAYING
            and self.playing is PlayingState.ROOM_NAVIGATION
            and self.num_moves >= MAX_MOVES
        ):
            self.state = GameState.GAME_OVER
            self._say("You ran out of moves!")

    def _advance(self, record_path: bool = False) -> None:
        self.num_moves += 1
        self.current_room += 1
        if record_path:
            self.dungeon.enter(self.current_room)
        self._check_moves()

    def next_room(self) -> None:
        """Walk on to the next room; only offered in the first two rooms."""
        self._require_navigation()
        if self.current_room > 2:
            raise RuntimeError("there is no way onward from here")
        self._advance(record_path=True)

    def back_room(self) -> None:
        """Return to the previous room; only offered in the second room."""
        self._require_navigation()
        if not 1 < self.current_room <= 2:
            raise RuntimeError("there is no way back from here")
        self.num_moves += 1
        self.dungeon.go_back()
        self.current_room -= 1
        self._check_moves()

    def show_stats(self) -> None:
        self._require_navigation()
        self.playing = PlayingState.DECISION_MAKING

    def close_stats(self) -> None:
        if self.playing is not PlayingState.DECISION_MAKING:
            raise RuntimeError("the stats screen is not open")
        self.playing = PlayingState.ROOM_NAVIGATION

    # --------------------------------------------------------------- choices

    def choices(self) -> list[Choice]:
        """The options in the current room, rebuilt when the room changes."""
        if not self._choices or self._choices_room != self.current_room:
            self._choices = self._build_choices()
            self._choices_room = self.current_room
        return list(self._choices)

    def choose(self, label: str) -> None:
        """Take the enabled option with the given label."""
        self._require_navigation()
        for choice in self.choices():
            if choice.label == label and choice.action is not None:
                choice.action()
                return
        raise ValueError(f"no available choice {label!r}")

    def _invalidate_choices(self) -> None:
        self._choices_room = 0

    def _build_choices(self) -> list[Choice]:
        builders = {
            1: self._first_room,
            2: self._pond_room,
            3: self._furnace_room,
            4: self._alien_room,
            5: self._boss_room,
        }
        builder = builders.get(self.current_room)
        return builder() if builder else []

    def _first_room(self) -> list[Choice]:
        def take_gold() -> None:
            if not self.level1_done:
                self.player.add_item(gold_label(self.gold))
                self.level1_done = True
                self._say("You collected 5 gold coins!")
            self.playing = PlayingState.ROOM_NAVIGATION

        def take_torch() -> None:
            if not self.player.has_item("torch"):
                self.player.add_item("torch")
                self.torch_taken = True
                self._say("You picked up the torch!")
            else:
                self._say("Cannot carry more than one torch.")
            self.playing = PlayingState.ROOM_NAVIGATION

        torch_available = not self.torch_taken or self._choices_room == 2
        return [
            Choice("Take Gold", take_gold),
            Choice("Take Torch", take_torch if torch_available else None),
        ]

    def _pond_room(self) -> list[Choice]:
        def swim() -> None:
            if self.player.has_item("torch"):
                self.player.remove_item("torch")
                self._say("You swam across the pond but your torch is extinguished!")
            else:
                self._say("You swam across the pond.")
            self.playing = PlayingState.ROOM_NAVIGATION
            self._advance()

        def jump() -> None:
            self.player.health -= JUMP_DAMAGE
            self._say("Ouch!!! That jump almost cost you a knee.")
            self.playing = PlayingState.ROOM_NAVIGATION
            self._advance()

        return [
            Choice("Swim Across", swim),
            Choice("Jump Over", jump),
            Choice("You have to swim across or jump over the pond", text_only=True),
        ]

    def _furnace_room(self) -> list[Choice]:
        intro = Choice("You stumble upon an unused furnace", text_only=True)
        if self.player.has_item("torch"):
            def light() -> None:
                self.player.add_item("sword")
                self._say("You lit the furnace and found a sword!")
                self._advance(record_path=True)

            return [intro, Choice("Use Torch to Light Furnace", light)]

        def wait(message: str) -> Callable[[], None]:
            def action() -> None:
                self._say(message)
                self._invalidate_choices()

            return action

        if not self._leprechaun_appeared:
            self._leprechaun_since = self._clock()
            self._leprechaun_appeared = True
            return [
                intro,
                Choice("You don't have anything to light the furnace", text_only=True),
                Choice("Wait...", wait("Waiting in the darkness...")),
            ]

        if self._clock() - self._leprechaun_since > LEPRECHAUN_DELAY:
            coins = gold_label(self.gold)

            def accept() -> None:
                if self.player.has_item(coins):
                    self.player.add_item("sword")
                    self.player.remove_item(coins)
                    self._say("You traded your gold for a sword!")
                else:
                    self._say("You don't have any gold to trade!")
                self._advance(record_path=True)

            def decline() -> None:
                self._say("You declined the leprechaun's offer. He vanishes.")
                self._advance(record_path=True)

            return [
                intro,
                Choice("A leprechaun offers you a sword for your gold", text_only=True),
                Choice("Accept Trade", accept),
                Choice("Decline", decline),
            ]

        return [
            intro,
            Choice("You wait in the darkness...", text_only=True),
            Choice("Continue waiting...", wait("Still waiting...")),
        ]

    def _alien_room(self) -> list[Choice]:
        def fight() -> None:
            report = resolve_combat(self.player, gold_label(self.gold))
            self.combat_report = report
            self._say(report)
            self.playing = PlayingState.ROOM_NAVIGATION
            self._advance()

        return [
            Choice("TWO ALIENS APPEAR OUT OF NOWHERE", text_only=True),
            Choice("Fight!", fight),
        ]

    def _boss_room(self) -> list[Choice]:
        def confront() -> None:
            self.playing = PlayingState.BOSS_FIGHT
            self._say("You approach the final boss...", 2.0)

        options = [Choice("Confront Boss", confront)]
        coins = gold_label(self.gold)
        if self.player.has_item(coins):
            def potion() -> None:
                try:
                    self._say(buy_potion(self.player, coins))
                except ValueError as error:
                    self._say(str(error))

            options.append(Choice("Buy Healing Potion (5 Gold)", potion))
        return options

    # ------------------------------------------------------------- boss fight

    def _lose(self, message: str) -> None:
        self._say(message)
        self.player.health = 0
        self.state = GameState.GAME_OVER

    def _require_boss(self) -> None:
        if self.state is not GameState.PLAYING or self.playing is not PlayingState.BOSS_FIGHT:
            raise RuntimeError("the boss fight has not begun")

    def update_boss(self) -> None:
        """Advance the boss fight: prepare, prompt, or time out."""
        self._require_boss()
        if not self._boss_started:
            self._boss_started = True
            self.boss_prompt_shown = False
            self.boss_result_determined = False
            self._boss_since = self._clock()
            if not self.player.has_item("sword"):
                self._lose("You have no weapon! The boss crushes you.")
                return
        elapsed = self._clock() - self._boss_since
        if not self.boss_prompt_shown:
            if elapsed > BOSS_PROMPT_DELAY:
                self.boss_prompt_shown = True
                self._boss_since = self._clock()
        elif not self.boss_result_determined and elapsed > BOSS_TIMEOUT:
            self.boss_result_determined = True
            self._lose("You failed to react in time! The boss crushes you!")

    def slash(self) -> bool:
        """Swing the sword; counts only once the prompt is showing."""
        self._require_boss()
        if not self.boss_prompt_shown or self.boss_result_determined:
            return False
        reaction = self._clock() - self._boss_since
        self.boss_result_determined = True
        if reaction < BOSS_REACTION_LIMIT:
            self._say("You slash the boss just in time and win the fight!")
            self.playing = PlayingState.GAME_END
        else:
            self._lose("You hesitated... The boss crushes you!")
        return True

    # ---------------------------------------------------------------- result

    def record(self) -> PlayerRecord:
        """The leaderboard record for a finished run."""
        if self.state is GameState.PLAYING and self.playing is PlayingState.GAME_END:
            completed = True
        elif self.state is GameState.GAME_OVER:
            completed = False
        else:
            raise RuntimeError("the run is not over yet")
        health = self.player.health
        return PlayerRecord(
            self.player.name,
            final_score(health, self.num_moves, completed),
            health,
            self.num_moves,
            completed,
        )