import pytest

from dungeon_escape.leaderboard import (
    CSV_HEADER,
    EfficiencyLeaderboard,
    PlayerRecord,
    ScoreLeaderboard,
    efficiency_sort,
    score_sort,
)


def _names(records):
    return [record.name for record in records]


def test_score_sort_orders_by_score_descending():
    records = [
        PlayerRecord("low", 10, 50, 3, True),
        PlayerRecord("high", 900, 80, 5, True),
        PlayerRecord("mid", 200, 40, 4, False),
    ]
    assert _names(score_sort(records)) == ["high", "mid", "low"]


def test_score_sort_tie_prefers_completed_then_fewer_moves():
    records = [
        PlayerRecord("failed", 100, 20, 2, False),
        PlayerRecord("slow", 100, 20, 6, True),
        PlayerRecord("fast", 100, 20, 3, True),
    ]
    assert _names(score_sort(records)) == ["fast", "slow", "failed"]


def test_score_sort_is_non_increasing():
    records = [PlayerRecord(str(i), (i * 37) % 11, 0, i, i % 2 == 0) for i in range(20)]
    scores = [record.score for record in score_sort(records)]
    assert scores == sorted(scores, reverse=True)


def test_efficiency_sort_completed_first_by_moves_then_health():
    records = [
        PlayerRecord("quit", 500, 90, 1, False),
        PlayerRecord("weak", 100, 10, 4, True),
        PlayerRecord("strong", 100, 90, 4, True),
        PlayerRecord("quick", 100, 50, 2, True),
    ]
    assert _names(efficiency_sort(records)) == ["quick", "strong", "weak", "quit"]


def test_efficiency_sort_reverses_equal_ranked_records():
    records = [
        PlayerRecord("a", 1, 1, 1, False),
        PlayerRecord("b", 2, 2, 2, False),
        PlayerRecord("c", 3, 3, 3, False),
    ]
    assert _names(efficiency_sort(records)) == ["c", "b", "a"]


def test_add_record_keeps_board_sorted():
    board = ScoreLeaderboard("unused.csv")
    board.add_record(PlayerRecord("first", 50, 10, 6, False))
    board.add_record(PlayerRecord("second", 1000, 100, 6, True))
    assert _names(board.records) == ["second", "first"]


def test_save_writes_header_and_rows(tmp_path):
    path = tmp_path / "board.csv"
    board = ScoreLeaderboard(path)
    board.add_record(PlayerRecord("hero", 1000, 100, 6, True))
    board.save()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == CSV_HEADER
    assert lines[1] == "hero,1000,100,6,true"


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "board.csv"
    original = EfficiencyLeaderboard(path)
    for record in [
        PlayerRecord("ann", 300, 30, 5, True),
        PlayerRecord("bob", 0, 0, 7, False),
        PlayerRecord("cy", 800, 80, 3, True),
    ]:
        original.add_record(record)
    original.save()

    restored = EfficiencyLeaderboard(path)
    restored.load()
    assert restored.records == original.records


def test_load_replaces_existing_records(tmp_path):
    path = tmp_path / "board.csv"
    writer = ScoreLeaderboard(path)
    writer.add_record(PlayerRecord("saved", 70, 7, 2, True))
    writer.save()

    reader = ScoreLeaderboard(path)
    reader.add_record(PlayerRecord("stale", 1, 1, 1, False))
    reader.load()
    assert _names(reader.records) == ["saved"]


def test_load_missing_file_raises_and_keeps_records(tmp_path):
    board = ScoreLeaderboard(tmp_path / "missing.csv")
    board.add_record(PlayerRecord("kept", 5, 5, 5, False))
    with pytest.raises(FileNotFoundError):
        board.load()
    assert _names(board.records) == ["kept"]


def test_load_skips_short_rows(tmp_path):
    path = tmp_path / "board.csv"
    path.write_text(
        CSV_HEADER + "\n" + "short,1,2\n" + "\n" + "ok,5,6,7,false\n" + "nocomp,1,2,3,\n",
        encoding="utf-8",
    )
    board = ScoreLeaderboard(path)
    board.load()
    assert board.records == [PlayerRecord("ok", 5, 6, 7, False)]


def test_load_rejects_non_numeric_field(tmp_path):
    path = tmp_path / "board.csv"
    path.write_text(CSV_HEADER + "\n" + "bad,abc,1,1,true\n", encoding="utf-8")
    with pytest.raises(ValueError):
        ScoreLeaderboard(path).load()


def test_score_display_lists_at_most_ten():
    board = ScoreLeaderboard("unused.csv")
    for i in range(12):
        board.add_record(PlayerRecord(f"p{i}", i, i, i, True))
    text = board.display()
    lines = text.splitlines()
    assert lines[0] == "===== SCORE LEADERBOARD ====="
    assert len(lines) == 3 + 10 + 1
    assert "p11" in lines[3]
    assert all("p0 " not in line for line in lines)


def test_efficiency_display_omits_unfinished_runs():
    board = EfficiencyLeaderboard("unused.csv")
    board.add_record(PlayerRecord("winner", 900, 90, 4, True))
    board.add_record(PlayerRecord("loser", 0, 0, 7, False))
    text = board.display()
    assert text.splitlines()[0] == "===== EFFICIENCY LEADERBOARD ====="
    assert "winner" in text
    assert "loser" not in text