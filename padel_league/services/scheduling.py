"""
Single round-robin pairing for a division.

Every team plays every other team exactly once: N teams give N*(N-1)/2 fixtures.
Pairs are enumerated canonically (first team against every later team, then the
second against every later team, ...). Order only affects display. Same roster
ordering yields the same pairing list.
"""
from __future__ import annotations

from typing import Hashable, Sequence, TypeVar

from padel_league.errors import InsufficientPlayers

T = TypeVar("T", bound=Hashable)

MIN_PLAYERS = 2


def fixture_count(n: int) -> int:
    return n * (n - 1) // 2 if n >= MIN_PLAYERS else 0


def round_robin_pairs(player_ids: Sequence[T]) -> list[tuple[T, T]]:
    """
    Return every unordered pair (player_ids[i], player_ids[j]) with i < j.
    Raises InsufficientPlayers for fewer than two distinct teams.
    """
    ids = list(dict.fromkeys(player_ids))  # drop duplicates, keep order
    if len(ids) < MIN_PLAYERS:
        raise InsufficientPlayers(f"Need at least {MIN_PLAYERS} players", len(ids))
    return [
        (ids[i], ids[j])
        for i in range(len(ids))
        for j in range(i + 1, len(ids))
    ]
