# dungeon_escape

A short graphical dungeon adventure. You fall through a trap door and have
seven moves to work your way through five rooms: pick up gold or a torch,
cross a pond, light a furnace (or bargain with a leprechaun), fight two
aliens and finally face the boss, where you must slash your sword in time.

Every finished or failed run is recorded on two leaderboards, one ranked by
score and one by efficiency (completed runs first, by fewest moves, then by
most health). They are kept as CSV files, `leaderboard_score.csv` and
`leaderboard_efficiency.csv`, in the working directory.

## Installing

```
pip install .
```

The game window is drawn with pygame.

## Playing

```
dungeon-escape
```

The window opens fullscreen when it can. Options:

- `--windowed` opens a window instead of going fullscreen.
- `--width` and `--height` set the window size when not fullscreen
  (default 800 by 600).

In the game:

- From the menu choose **Start Game**, **Leaderboard** or **Exit Game**.
- Type your name (up to 20 characters) and press Enter; the adventure starts
  three seconds later.
- Click the buttons in each room to make your choices. **Check Stats** shows
  your health and inventory; **Next Room** and **Back Room** are offered in
  the first two rooms.
- In the boss fight, press **F** as soon as you are prompted. You have three
  seconds to react.
- Press Escape while entering your name to go back to the menu.

After a victory the window closes on its own after eight seconds; after a
game over, after five.

## Using the pieces

The game logic does not need a window and can be driven directly:

```python
from dungeon_escape.game import Game

game = Game()
game.submit_name("Ada")
game.begin()
for choice in game.choices():
    print(choice.label, choice.enabled)
game.choose("Take Gold")
game.next_room()
```

`Game` also has `back_room`, `show_stats`, `close_stats`, `tick`,
`update_boss`, `slash` and `record`, which returns the `PlayerRecord` of a
finished run. It takes an optional `clock` function for the timed parts of
the furnace room and the boss fight.

Other modules:

- `dungeon_escape.rules` — `build_dungeon`, `resolve_combat`, `buy_potion`,
  `final_score`, and the `GameState` and `PlayingState` enums.
- `dungeon_escape.world` — `Dungeon`, `Room`, `Treasure`, `Enemy`,
  `PathStack` and `EnemyQueue`.
- `dungeon_escape.player` — `Player`, with an `Inventory` from
  `dungeon_escape.inventory`.
- `dungeon_escape.leaderboard` — `PlayerRecord`, `score_sort`,
  `efficiency_sort`, and `ScoreLeaderboard` and `EfficiencyLeaderboard` with
  `add_record`, `save`, `load` and `display` (a text table of the top ten).
- `dungeon_escape.button` — `Button`, a clickable rectangle with hover and
  press colours.
- `dungeon_escape.app` — `App`, the pygame window, and `main`, the command.

## Limitations

The on-screen leaderboard shows only the top seven of the score board. The
efficiency board is saved to its CSV file but is not shown in the window;
use `EfficiencyLeaderboard.load` and `display` to read it.

## Running the tests

```
pip install .[test]
pytest
```