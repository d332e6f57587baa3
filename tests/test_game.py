import pytest

from dungeon_escape.game import Choice, Game
from dungeon_escape.rules import (
    MAX_HEALTH,
    MAX_MOVES,
    GameState,
    PlayingState,
    final_score,
    gold_label,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def game(clock):
    g = Game(clock)
    g.submit_name("Ada")
    g.begin()
    return g


def labels(game):
    return [c.label for c in game.choices()]


def to_boss_with_sword(game):
    game.choose("Take Torch")
    game.next_room()
    game.next_room()
    game.choose("Use Torch to Light Furnace")
    game.choose("Fight!")
    game.choose("Confront Boss")


def test_initial_state(clock):
    g = Game(clock)
    assert g.state is GameState.PLAYING
    assert g.playing is PlayingState.INTRO
    assert g.player.health == MAX_HEALTH
    assert g.moves_left == MAX_MOVES - 1


def test_begin_requires_name(clock):
    g = Game(clock)
    with pytest.raises(RuntimeError):
        g.begin()


def test_begin_enters_first_room(game):
    assert game.playing is PlayingState.ROOM_NAVIGATION
    assert game.current_room == 1
    assert game.dungeon.current_position() == 1
    assert game.player.name == "Ada"


def test_first_room_choices(game):
    assert labels(game) == ["Take Gold", "Take Torch"]
    assert all(c.enabled for c in game.choices())


def test_take_gold_once(game):
    game.choose("Take Gold")
    game.choose("Take Gold")
    assert game.player.inventory_items() == [gold_label(game.gold)]
    assert game.status_message == "You collected 5 gold coins!"


def test_take_torch_twice(game):
    game.choose("Take Torch")
    assert game.player.has_item("torch")
    assert game.status_message == "You picked up the torch!"
    game.choose("Take Torch")
    assert game.status_message == "Cannot carry more than one torch."
    assert game.player.inventory_items().count("torch") == 1


def test_torch_disabled_after_return_from_elsewhere(game):
    game.choose("Take Torch")
    game.next_room()
    game.back_room()
    torch = next(c for c in game.choices() if c.label == "Take Torch")
    assert torch.enabled


def test_next_and_back_room(game):
    game.next_room()
    assert game.current_room == 2
    assert game.num_moves == 2
    assert game.dungeon.current_position() == 2
    game.back_room()
    assert game.current_room == 1
    assert game.num_moves == 3
    assert game.dungeon.current_position() == 1


def test_back_room_from_first_room_raises(game):
    with pytest.raises(RuntimeError):
        game.back_room()


def test_unknown_choice_raises(game):
    with pytest.raises(ValueError):
        game.choose("Dance")


def test_running_out_of_moves(game):
    while game.state is GameState.PLAYING:
        if game.current_room == 1:
            game.next_room()
        else:
            game.back_room()
    assert game.num_moves == MAX_MOVES
    assert game.status_message == "You ran out of moves!"
    record = game.record()
    assert record.completed is False
    assert record.score == final_score(MAX_HEALTH, MAX_MOVES, False)


def test_jump_costs_health(game):
    game.next_room()
    game.choose("Jump Over")
    assert MAX_HEALTH - game.player.health == 10
    assert game.current_room == 3
    assert game.status_message == "Ouch!!! That jump almost cost you a knee."


def test_swim_extinguishes_torch(game):
    game.choose("Take Torch")
    game.next_room()
    game.choose("Swim Across")
    assert not game.player.has_item("torch")
    assert game.status_message == "You swam across the pond but your torch is extinguished!"


def test_pond_info_line_is_not_clickable(game):
    game.next_room()
    info = game.choices()[-1]
    assert info.text_only and not info.enabled
    with pytest.raises(ValueError):
        game.choose(info.label)


def test_furnace_with_torch(game):
    game.choose("Take Torch")
    game.next_room()
    game.next_room()
    game.choose("Use Torch to Light Furnace")
    assert game.player.has_item("sword")
    assert game.current_room == 4
    assert game.dungeon.current_position() == 4


def test_leprechaun_trade(game, clock):
    game.choose("Take Gold")
    game.next_room()
    game.next_room()
    assert "Wait..." in labels(game)
    game.choose("Wait...")
    clock.advance(1)
    assert "Continue waiting..." in labels(game)
    game.choose("Continue waiting...")
    assert game.status_message == "Still waiting..."
    clock.advance(3)
    assert "Accept Trade" in labels(game)
    game.choose("Accept Trade")
    assert game.player.has_item("sword")
    assert not game.player.has_item(gold_label(game.gold))
    assert game.current_room == 4


def test_leprechaun_without_gold(game, clock):
    game.next_room()
    game.next_room()
    game.choose("Wait...")
    clock.advance(4)
    game.choose("Accept Trade")
    assert game.status_message == "You don't have any gold to trade!"
    assert not game.player.has_item("sword")


def test_fight_unarmed(game, clock):
    game.next_room()
    game.next_room()
    game.choose("Wait...")
    clock.advance(4)
    game.choose("Decline")
    game.choose("Fight!")
    assert MAX_HEALTH - game.player.health == 20
    assert game.current_room == 5
    assert "The creeper explodes on you!" in game.combat_report


def test_boss_without_sword_loses(game, clock):
    game.next_room()
    game.next_room()
    game.choose("Wait...")
    clock.advance(4)
    game.choose("Decline")
    game.choose("Fight!")
    game.choose("Confront Boss")
    game.update_boss()
    assert game.state is GameState.GAME_OVER
    assert game.player.health == 0
    assert game.status_message == "You have no weapon! The boss crushes you."


def test_boss_victory(game, clock):
    to_boss_with_sword(game)
    assert game.playing is PlayingState.BOSS_FIGHT
    game.update_boss()
    assert game.slash() is False
    clock.advance(3.5)
    game.update_boss()
    assert game.boss_prompt_shown
    clock.advance(1)
    assert game.slash() is True
    assert game.playing is PlayingState.GAME_END
    assert game.finished
    record = game.record()
    assert record.completed is True
    assert record.name == "Ada"
    assert record.score == final_score(game.player.health, game.num_moves, True)


def test_boss_hesitation(game, clock):
    to_boss_with_sword(game)
    game.update_boss()
    clock.advance(3.5)
    game.update_boss()
    clock.advance(4)
    game.slash()
    assert game.state is GameState.GAME_OVER
    assert game.status_message == "You hesitated... The boss crushes you!"


def test_boss_timeout(game, clock):
    to_boss_with_sword(game)
    game.update_boss()
    clock.advance(3.5)
    game.update_boss()
    clock.advance(5.5)
    game.update_boss()
    assert game.state is GameState.GAME_OVER
    assert game.player.health == 0


def test_potion_when_full_health(game, clock):
    game.choose("Take Gold")
    game.choose("Take Torch")
    game.next_room()
    game.next_room()
    game.choose("Use Torch to Light Furnace")
    game.player.health = MAX_HEALTH
    game.choose("Fight!")
    game.player.health = MAX_HEALTH
    game.choose("Buy Healing Potion (5 Gold)")
    assert game.status_message == "Your health is already full!"
    assert game.player.has_item(gold_label(game.gold))


def test_potion_heals(game):
    game.choose("Take Gold")
    game.choose("Take Torch")
    game.next_room()
    game.choose("Jump Over")
    game.choose("Use Torch to Light Furnace")
    game.choose("Fight!")
    before = game.player.health
    game.choose("Buy Healing Potion (5 Gold)")
    assert game.player.health > before
    assert game.player.health <= MAX_HEALTH
    assert not game.player.has_item(gold_label(game.gold))


def test_stats_screen(game):
    game.show_stats()
    assert game.playing is PlayingState.DECISION_MAKING
    with pytest.raises(RuntimeError):
        game.next_room()
    game.close_stats()
    assert game.playing is PlayingState.ROOM_NAVIGATION


def test_tick_clears_message(game):
    game.choose("Take Torch")
    game.tick(10.0)
    assert game.status_message == "You picked up the torch!"
    for _ in range(100):
        game.tick(0.1)
    assert game.status_message == ""


def test_record_before_end_raises(game):
    with pytest.raises(RuntimeError):
        game.record()


def test_choice_enabled_flag():
    assert Choice("x", lambda: None).enabled is True
    assert Choice("x").enabled is False