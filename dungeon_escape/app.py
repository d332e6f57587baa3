"""The windowed front end: menus, rooms, the boss fight and the leaderboards."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Callable, Sequence
from functools import partial

import pygame

from .button import Button, Color
from .game import Choice, Game
from .leaderboard import EfficiencyLeaderboard, PlayerRecord, ScoreLeaderboard
from .rules import GameState, PlayingState

TITLE = "Dungeon Game"
SCORE_FILE = "leaderboard_score.csv"
EFFICIENCY_FILE = "leaderboard_efficiency.csv"
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
FPS = 60

NAME_WIDTH = 16
MAX_NAME_LENGTH = 20
LEADERBOARD_ROWS = 7
INTRO_SECONDS = 3.0
COMBAT_SECONDS = 3.0
VICTORY_SECONDS = 8.0
GAME_OVER_SECONDS = 5.0
FIGHT_LABEL = "Fight!"

BACKGROUND: Color = (30, 30, 30)
WHITE: Color = (255, 255, 255)
YELLOW: Color = (255, 255, 0)
GREEN: Color = (0, 255, 0)
RED: Color = (255, 0, 0)
IDLE: Color = (70, 70, 70)
HOVER: Color = (150, 150, 150)
ACTIVE: Color = (20, 20, 20)
DISABLED: Color = (50, 50, 50)
CLEAR: Color = (0, 0, 0, 0)

ACTION_WIDTH = 340
ACTION_GAP = 20


def format_leaderboard_row(rank: int, record: PlayerRecord) -> str:
    """One line of the on-screen score table; names are cut or padded to 16."""
    name = record.name[:NAME_WIDTH].ljust(NAME_WIDTH)
    status = "Complete" if record.completed else "Failed"
    return (
        f"{rank}    | {name} | {record.score}   | {record.health}    | "
        f"{record.moves_used}    | {status}"
    )


def _noop() -> None:
    pass


class App:
    """The game window and the screens it moves between."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        fullscreen: bool = True,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("window size must be positive")
        self.width = width
        self.height = height
        self.fullscreen = fullscreen
        self.state = GameState.MENU
        self.game: Game | None = None
        self.score_board = ScoreLeaderboard(SCORE_FILE)
        self.efficiency_board = EfficiencyLeaderboard(EFFICIENCY_FILE)
        self.running = False
        self._input = ""
        self._accepting_input = True
        self._intro_since: float | None = None
        self._combat_until = 0.0
        self._over_since: float | None = None
        self._recorded = False
        self._fonts: dict[int, pygame.font.Font] = {}
        self._screen: pygame.Surface | None = None

    # ------------------------------------------------------------- lifecycle

    def run(self) -> int:
        """Open the window and play until it is closed; returns an exit status."""
        pygame.init()
        try:
            self._screen = self._open_window()
            pygame.display.set_caption(TITLE)
            pygame.key.start_text_input()
            clock = pygame.time.Clock()
            self.running = True
            while self.running:
                elapsed = clock.tick(FPS) / 1000.0
                for event in pygame.event.get():
                    self._handle_event(event)
                if not self.running:
                    break
                self._update(elapsed)
                if not self.running:
                    break
                self._draw()
                pygame.display.flip()
        finally:
            pygame.quit()
        return 0

    def _open_window(self) -> pygame.Surface:
        screen = None
        if self.fullscreen:
            try:
                screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            except pygame.error:
                screen = None
        if screen is None:
            screen = pygame.display.set_mode((self.width, self.height))
        self.width, self.height = screen.get_size()
        return screen

    # ---------------------------------------------------------------- events

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
            return
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if time.monotonic() < self._combat_until:
                return
            for button in self._buttons():
                if button.handle_click(event.pos):
                    break
            return
        if self.state is GameState.PLAYING and self._accepting_input:
            self._handle_typing(event)

    def _handle_typing(self, event: pygame.event.Event) -> None:
        if event.type == pygame.TEXTINPUT:
            for char in event.text:
                if 32 <= ord(char) < 128 and len(self._input) < MAX_NAME_LENGTH:
                    self._input += char
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKSPACE:
                self._input = self._input[:-1]
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self._submit_name()
            elif event.key == pygame.K_ESCAPE:
                self.state = GameState.MENU

    def _submit_name(self) -> None:
        if self.game is None:
            return
        self.game.submit_name(self._input)
        self._accepting_input = False
        self._input = ""
        self._intro_since = time.monotonic()

    # --------------------------------------------------------------- actions

    def _start(self) -> None:
        self.state = GameState.PLAYING
        if self.game is None:
            self.game = Game()
            self._accepting_input = True

    def _show_leaderboard(self) -> None:
        self.state = GameState.LEADERBOARD
        try:
            self.score_board.load()
        except FileNotFoundError:
            print(
                "No existing leaderboard file found. Creating new leaderboard.",
                file=sys.stderr,
            )

    def _to_menu(self) -> None:
        self.state = GameState.MENU

    def _exit(self) -> None:
        self.running = False

    def _choose(self, label: str) -> None:
        if self.game is None:
            return
        self.game.choose(label)
        if label == FIGHT_LABEL:
            self._combat_until = time.monotonic() + COMBAT_SECONDS

    def _record(self) -> None:
        if self._recorded or self.game is None:
            return
        self._recorded = True
        record = self.game.record()
        for board in (self.score_board, self.efficiency_board):
            board.add_record(record)
            try:
                board.save()
            except OSError:
                print(f"Failed to open file for writing: {board.path}", file=sys.stderr)

    # ---------------------------------------------------------------- update

    def _update(self, elapsed: float) -> None:
        game = self.game
        if game is None:
            return
        game.tick(elapsed)
        now = time.monotonic()
        if self.state is GameState.PLAYING:
            if game.playing is PlayingState.INTRO:
                if (
                    not self._accepting_input
                    and self._intro_since is not None
                    and now - self._intro_since > INTRO_SECONDS
                ):
                    game.begin()
            elif game.playing is PlayingState.BOSS_FIGHT and game.state is GameState.PLAYING:
                game.update_boss()
                if game.state is GameState.PLAYING and pygame.key.get_pressed()[pygame.K_f]:
                    game.slash()
            elif game.playing is PlayingState.GAME_END:
                if self._over_since is None:
                    self._over_since = now
                self._record()
                if now - self._over_since > VICTORY_SECONDS:
                    self.running = False
            if game.state is GameState.GAME_OVER:
                self.state = GameState.GAME_OVER
        if self.state is GameState.GAME_OVER:
            if self._over_since is None:
                self._over_since = now
            self._record()
            if now - self._over_since > GAME_OVER_SECONDS:
                self.running = False

    # --------------------------------------------------------------- buttons

    def _button(self, x: float, y: float, width: float, height: float, label: str,
                callback: Callable[[], object]) -> Button:
        return Button(x, y, width, height, label, IDLE, HOVER, ACTIVE, callback)

    def _buttons(self) -> list[Button]:
        w, h = self.width, self.height
        if self.state is GameState.MENU:
            return [
                self._button(w / 2 - 100, h * 0.4, 200, 50, "Start Game", self._start),
                self._button(w / 2 - 100, h * 0.5, 200, 50, "Leaderboard", self._show_leaderboard),
                self._button(w / 2 - 100, h * 0.6, 200, 50, "Exit Game", self._exit),
            ]
        if self.state is GameState.LEADERBOARD:
            return [self._button(w / 2 - 100, h - 100, 200, 50, "Back to Menu", self._to_menu)]
        game = self.game
        if self.state is not GameState.PLAYING or game is None:
            return []
        if game.playing is PlayingState.DECISION_MAKING:
            return [self._button(w / 2 - 100, h - 100, 200, 50, "Back to Game", game.close_stats)]
        if game.playing is PlayingState.ROOM_NAVIGATION:
            return self._room_buttons(game.choices()) + self._navigation_buttons(game)
        return []

    def _room_buttons(self, choices: Sequence[Choice]) -> list[Button]:
        w, h = self.width, self.height
        narration = [choice for choice in choices if choice.text_only]
        actions = [choice for choice in choices if not choice.text_only]
        buttons = [
            Button(w / 2 - 250, h / 2 - 80 + row * 50, 500, 40, choice.label,
                   CLEAR, CLEAR, CLEAR, _noop)
            for row, choice in enumerate(narration)
        ]
        total = len(actions) * ACTION_WIDTH + max(len(actions) - 1, 0) * ACTION_GAP
        left = w / 2 - total / 2
        for column, choice in enumerate(actions):
            x = left + column * (ACTION_WIDTH + ACTION_GAP)
            if choice.enabled:
                buttons.append(self._button(x, h / 2 + 50, ACTION_WIDTH, 50, choice.label,
                                            partial(self._choose, choice.label)))
            else:
                buttons.append(Button(x, h / 2 + 50, ACTION_WIDTH, 50, choice.label,
                                      DISABLED, DISABLED, DISABLED, _noop))
        return buttons

    def _navigation_buttons(self, game: Game) -> list[Button]:
        w, h = self.width, self.height
        buttons = []
        if game.current_room <= 2:
            buttons.append(self._button(w / 2 - 300, h - 80, 200, 50, "Next Room", game.next_room))
            if game.current_room > 1:
                buttons.append(self._button(w / 2 + 100, h - 80, 200, 50, "Back Room",
                                            game.back_room))
        buttons.append(self._button(w / 2 - 100, h - 80, 200, 50, "Check Stats", game.show_stats))
        return buttons

    # --------------------------------------------------------------- drawing

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont("dejavusans", size)
        return self._fonts[size]

    def _text(self, text: str, size: int, color: Color, pos: tuple[float, float],
              centered: bool = False) -> None:
        assert self._screen is not None
        font = self._font(size)
        x, y = pos
        for line in text.split("\n"):
            surface = font.render(line, True, color)
            rect = surface.get_rect()
            if centered:
                rect.midtop = (round(x), round(y))
            else:
                rect.topleft = (round(x), round(y))
            self._screen.blit(surface, rect)
            y += font.get_linesize()

    def _panel(self, text: str, size: int, color: Color, center_x: float, top: float,
               alpha: int) -> None:
        assert self._screen is not None
        font = self._font(size)
        lines = text.split("\n")
        width = max(font.size(line)[0] for line in lines)
        height = font.get_linesize() * len(lines)
        backdrop = pygame.Surface((width + 40, height + 20), pygame.SRCALPHA)
        backdrop.fill((0, 0, 0, alpha))
        self._screen.blit(backdrop, (round(center_x - (width + 40) / 2), round(top - 5)))
        self._text(text, size, color, (center_x, top), centered=True)

    def _draw_buttons(self, buttons: Sequence[Button]) -> None:
        assert self._screen is not None
        mouse = pygame.mouse.get_pos()
        pressed = pygame.mouse.get_pressed()[0]
        font = self._font(24)
        for button in buttons:
            button.update(mouse, pressed)
            rect = pygame.Rect(round(button.x), round(button.y),
                               round(button.width), round(button.height))
            if not (len(button.color) == 4 and button.color[3] == 0):
                pygame.draw.rect(self._screen, button.color[:3], rect)
            label = font.render(button.label, True, WHITE)
            self._screen.blit(label, label.get_rect(center=rect.center))

    def _draw(self) -> None:
        assert self._screen is not None
        self._screen.fill(BACKGROUND)
        if self.state is GameState.MENU:
            self._text("Dungeon Escape", 48, WHITE, (self.width / 2 - 150, self.height * 0.2))
        elif self.state is GameState.PLAYING:
            self._draw_playing()
        elif self.state is GameState.GAME_OVER:
            self._draw_game_over()
        elif self.state is GameState.LEADERBOARD:
            self._draw_leaderboard()
        self._draw_buttons(self._buttons())
        self._draw_status()
        self._draw_combat()

    def _draw_playing(self) -> None:
        game = self.game
        if game is None:
            return
        w, h = self.width, self.height
        if game.playing is PlayingState.INTRO:
            if self._accepting_input:
                self._text("Welcome to Escape the Dungeon!\n"
                           "You fell down a trap door and landed in a dungeon.",
                           24, WHITE, (50, 50))
                self._draw_name_input()
            else:
                self._text(f"Welcome, {game.player.name}!\n"
                           "Press SPACE to begin your adventure.", 24, WHITE, (50, 50))
        elif game.playing is PlayingState.ROOM_NAVIGATION:
            self._text(game.dungeon.room_description(game.current_room), 24, WHITE,
                       (w / 2, 100), centered=True)
            self._text(f"Moves left: {game.moves_left}", 18, YELLOW, (w - 150, 20))
            self._text(f"Health: {game.player.health}", 18, GREEN, (50, 20))
        elif game.playing is PlayingState.DECISION_MAKING:
            self._text("Player Stats", 32, WHITE, (w / 2 - 100, 50))
            self._text(f"Name: {game.player.name}", 24, WHITE, (w / 2 - 150, 120))
            self._text(f"Health: {game.player.health}", 24, GREEN, (w / 2 - 150, 160))
            self._text("Inventory:", 24, WHITE, (w / 2 - 150, 200))
            for row, item in enumerate(game.player.inventory_items()):
                self._text(f"- {item}", 20, WHITE, (w / 2 - 130, 240 + row * 30))
        elif game.playing is PlayingState.BOSS_FIGHT:
            self._text("The Final Boss appears!", 72, RED, (w / 2, 50), centered=True)
            self._text("Prepare yourself...", 64, RED, (w / 2, 140), centered=True)
            self._text("You have to slash your sword when prompted!", 32, WHITE,
                       (w / 2, h / 2 - 16), centered=True)
            if game.boss_prompt_shown and not game.boss_result_determined:
                self._text("NOW! Press F to slash your sword!", 36, RED,
                           (w / 2 - 250, h / 2 + 50))
        elif game.playing is PlayingState.GAME_END:
            self._text("VICTORY!", 64, GREEN, (w / 2 - 150, h / 2 - 100))
            self._text("You defeated the final boss and escaped the dungeon!", 24, WHITE,
                       (w / 2 - 250, h / 2))
            self._text(f"Final Stats\nHealth: {game.player.health}\n"
                       f"Moves used: {game.num_moves}", 20, YELLOW,
                       (w / 2 - 100, h / 2 + 100))

    def _draw_name_input(self) -> None:
        assert self._screen is not None
        w, h = self.width, self.height
        box = pygame.Rect(round(w / 2 - 200), round(h / 2 + 50), 400, 40)
        pygame.draw.rect(self._screen, (50, 50, 50), box)
        pygame.draw.rect(self._screen, WHITE, box, 2)
        self._text("Enter your name:", 24, WHITE, (w / 2 - 200, h / 2 + 10))
        self._text(self._input + "_", 24, WHITE, (w / 2 - 200, h / 2 + 50))

    def _draw_game_over(self) -> None:
        w, h = self.width, self.height
        self._text("GAME OVER", 64, RED, (w / 2 - 200, h / 2 - 100))
        defeated = self.game is not None and self.game.player.health <= 0
        message = "You were defeated!" if defeated else "You ran out of moves!"
        self._text(message, 36, WHITE, (w / 2 - 150, h / 2))

    def _draw_leaderboard(self) -> None:
        w = self.width
        self._text("LEADERBOARDS", 40, WHITE, (w / 2 - 150, 50))
        self._text("TOP SCORES", 28, YELLOW, (w / 2 - 80, 120))
        self._text("Rank | Name             | Score | Health | Moves | Status", 18, GREEN,
                   (w / 2 - 250, 160))
        records = self.score_board.records[:LEADERBOARD_ROWS]
        for rank, record in enumerate(records, start=1):
            self._text(format_leaderboard_row(rank, record), 16, WHITE,
                       (w / 2 - 250, 190 + (rank - 1) * 30))

    def _draw_status(self) -> None:
        game = self.game
        if game is None or not game.status_message or game.status_timer <= 0.0:
            return
        self._panel(game.status_message, 24, YELLOW, self.width / 2, self.height - 150, 180)

    def _draw_combat(self) -> None:
        game = self.game
        if game is None or not game.combat_report or time.monotonic() >= self._combat_until:
            return
        self._panel(game.combat_report, 28, RED, self.width / 2, self.height / 2 - 100, 200)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game window."""
    parser = argparse.ArgumentParser(prog="dungeon-escape", description="Escape the dungeon.")
    parser.add_argument("--windowed", action="store_true",
                        help="open a window instead of going fullscreen")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH,
                        help="window width when not fullscreen")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT,
                        help="window height when not fullscreen")
    args = parser.parse_args(argv)
    try:
        app = App(args.width, args.height, not args.windowed)
    except ValueError as error:
        parser.error(str(error))
    return app.run()