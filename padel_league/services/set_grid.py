"""
Set-score grid validation.

A grid is the list of sets of one match, e.g. [[6, 0], [6, 4]]: each entry is
[games side A, games side B] where side A is the fixture's player1. A match has
1-3 sets, no set may be tied and the match itself may not be a draw.

Each set must also look like a completed set: the winner reached 6 games with a
margin of two or more, or reached 7 games with a margin of one (tiebreak) or
two (7-5). Anything else, 8-6 included, is rejected. Amateur extended sets are
rejected on purpose; the check can be switched off via SetRules.

Pure functions: no I/O, same input => same output.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from padel_league.errors import (
    DrawNotAllowed,
    ImplausibleSetScore,
    InvalidGrid,
    MalformedSet,
    TiedSet,
    TooManySets,
)
from padel_league.models import GridOutcome

MAX_SETS = 3
GAMES_TO_WIN_SET = 6
TIEBREAK_SET_GAMES = 7
MIN_MARGIN = 2


@dataclass(frozen=True)
class SetRules:
    """Business rule for what counts as a completed set."""
    max_sets: int = MAX_SETS
    games_to_win: int = GAMES_TO_WIN_SET
    tiebreak_games: int = TIEBREAK_SET_GAMES
    enforce_plausibility: bool = True

    def looks_like_set(self, a: int, b: int) -> bool:
        if not self.enforce_plausibility:
            return True
        winner = max(a, b)
        loser = min(a, b)
        diff = winner - loser
        if winner == self.games_to_win and diff >= MIN_MARGIN:
            return True
        return winner == self.tiebreak_games and diff in (1, 2)


DEFAULT_RULES = SetRules()


def _coerce_games(value: Any) -> int | None:
    """Integer game count from an int, an integral float or a digit string; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        s = value.strip()
        if s.lstrip("-").isdigit():
            return int(s)
    return None


def parse_set(entry: Any) -> tuple[int, int]:
    """Coerce one set entry to (games_a, games_b) or raise MalformedSet."""
    if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence) or len(entry) != 2:
        raise MalformedSet("Each set must be [team1, team2]", entry)
    a = _coerce_games(entry[0])
    b = _coerce_games(entry[1])
    if a is None or b is None:
        raise MalformedSet("Set scores must be integers", list(entry))
    if a < 0 or b < 0:
        raise MalformedSet("Set scores must be >= 0", [a, b])
    return a, b


def validate_grid(raw_grid: Any, rules: SetRules = DEFAULT_RULES) -> GridOutcome:
    """
    Validate a raw grid and count sets won per side.
    Raises a ValidationError subclass naming the violated rule and offending value.
    """
    if raw_grid is None or isinstance(raw_grid, (str, bytes, dict)) or not isinstance(raw_grid, Sequence):
        raise InvalidGrid("set_scores must be a non-empty array", raw_grid)
    if len(raw_grid) == 0:
        raise InvalidGrid("set_scores must be a non-empty array", [])
    if len(raw_grid) > rules.max_sets:
        raise TooManySets(f"Maximum of {rules.max_sets} sets", len(raw_grid))

    sets_a = 0
    sets_b = 0
    cleaned: list[tuple[int, int]] = []
    for entry in raw_grid:
        a, b = parse_set(entry)
        if a == b:
            raise TiedSet("Set cannot be tied", [a, b])
        if not rules.looks_like_set(a, b):
            raise ImplausibleSetScore(
                f"Invalid set score {a}-{b}. Use e.g. 6-0, 6-4, 7-5, 7-6",
                [a, b],
            )
        if a > b:
            sets_a += 1
        else:
            sets_b += 1
        cleaned.append((a, b))

    if sets_a == sets_b:
        raise DrawNotAllowed("Match result cannot be a draw", [sets_a, sets_b])

    return GridOutcome(sets_won_a=sets_a, sets_won_b=sets_b, normalized_grid=tuple(cleaned))
