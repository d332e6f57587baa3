"""Player records and the two leaderboards they are ranked on."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

CSV_HEADER = "Name,Score,Health,MovesUsed,Completed"
DISPLAY_LIMIT = 10
_RULE = "-------------------------------------------------------------"
_FOOTER = "============================================="
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class PlayerRecord:
    """The outcome of one play-through."""

    name: str = ""
    score: int = 0
    health: int = 0
    moves_used: int = 0
    completed: bool = False

    def to_csv(self) -> str:
        flag = "true" if self.completed else "false"
        return f"{self.name},{self.score},{self.health},{self.moves_used},{flag}"


def _leading_int(text: str) -> int:
    """Read the integer at the start of ``text``, ignoring what follows it."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid integer field: {text!r}")
    return int(match.group(1))


def _parse_line(line: str) -> PlayerRecord | None:
    """Parse one CSV row, or return None if it has too few fields."""
    if not line:
        return None
    fields = line.split(",", 4)
    if len(fields) < 5 or not fields[4]:
        return None
    name, score, health, moves, completed = fields
    return PlayerRecord(
        name,
        _leading_int(score),
        _leading_int(health),
        _leading_int(moves),
        completed == "true",
    )


def score_sort(records: Iterable[PlayerRecord]) -> list[PlayerRecord]:
    """Highest score first; ties go to finished runs, then to fewer moves."""
    return sorted(records, key=lambda r: (-r.score, not r.completed, r.moves_used))


def _efficiency_key(record: PlayerRecord) -> tuple[int, int, int]:
    if record.completed:
        return (0, record.moves_used, -record.health)
    return (1, 0, 0)


def efficiency_sort(records: Iterable[PlayerRecord]) -> list[PlayerRecord]:
    """Finished runs first, by fewest moves then most health.

    Records that rank equally come out in the reverse of their given order,
    and unfinished runs are all ranked equally.
    """
    return sorted(reversed(list(records)), key=_efficiency_key)


class Leaderboard(ABC):
    """A ranked list of records kept in a CSV file."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)
        self.records: list[PlayerRecord] = []

    def add_record(self, record: PlayerRecord) -> None:
        self.records.append(record)
        self.sort()

    @abstractmethod
    def sort(self) -> None:
        """Put the records in ranking order."""

    @abstractmethod
    def display(self) -> str:
        """Render the top of the board as a text table."""

    def save(self) -> None:
        """Write every record to the CSV file, replacing its contents."""
        with self.path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(CSV_HEADER + "\n")
            for record in self.records:
                handle.write(record.to_csv() + "\n")

    def load(self) -> None:
        """Replace the records with those in the CSV file and rank them.

        Raises FileNotFoundError, leaving the records untouched, if there is
        no file yet. Rows with too few fields are skipped.
        """
        with self.path.open(encoding="utf-8", newline="") as handle:
            lines = [line.rstrip("\n") for line in handle]
        self.records = [
            record for record in map(_parse_line, lines[1:]) if record is not None
        ]
        self.sort()


class ScoreLeaderboard(Leaderboard):
    """Records ranked by score."""

    def sort(self) -> None:
        self.records = score_sort(self.records)

    def display(self) -> str:
        lines = [
            "===== SCORE LEADERBOARD =====",
            "Rank | Name             | Score | Health | Moves | Completed",
            _RULE,
        ]
        for rank, record in enumerate(self.records[:DISPLAY_LIMIT], start=1):
            lines.append(
                f"{rank:>4} | {record.name:>16} | {record.score:>5} | "
                f"{record.health:>6} | {record.moves_used:>5} | "
                f"{'Yes' if record.completed else 'No'}"
            )
        lines.append(_FOOTER)
        return "\n".join(lines)


class EfficiencyLeaderboard(Leaderboard):
    """Finished runs ranked by how few moves they took."""

    def sort(self) -> None:
        self.records = efficiency_sort(self.records)

    def display(self) -> str:
        lines = [
            "===== EFFICIENCY LEADERBOARD =====",
            "Rank | Name             | Moves | Score | Health | Completed",
            _RULE,
        ]
        finished = [record for record in self.records if record.completed]
        for rank, record in enumerate(finished[:DISPLAY_LIMIT], start=1):
            lines.append(
                f"{rank:>4} | {record.name:>16} | {record.moves_used:>5} | "
                f"{record.score:>5} | {record.health:>6} | Yes"
            )
        lines.append(_FOOTER)
        return "\n".join(lines)