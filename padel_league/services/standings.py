"""
Standings ledger: the aggregate effect of one fixture on its two teams.

A team's {played, sets_won, sets_lost, points} is exactly the sum of the effects
of every played fixture in its division. Recording a result applies the effect;
correcting a result reverses the stored effect first, using the set counts stored
on the fixture (never a fresh recomputation), then applies the new one.

Fixtures recorded before set-based scoring only know who won. Their effect was
win = 1 / 3 points for the winner and loss = 1 for the loser; reversing them uses
those semantics. Reversal never takes a value below zero.
"""
from __future__ import annotations

import logging

from padel_league.models import Fixture, PlayerStats

logger = logging.getLogger(__name__)

# Points per set won under the current scoring rule
POINTS_PER_SET = 1
# Effect of one legacy (win/loss only) result
LEGACY_WIN_POINTS = 3
LEGACY_WIN = 1
LEGACY_LOSS = 1


def _clamped(value: int, field_name: str) -> int:
    if value < 0:
        logger.warning("Clamping %s from %d to 0 during reversal", field_name, value)
        return 0
    return value


def _subtract(stats: PlayerStats, played: int, sets_won: int, sets_lost: int, points: int) -> None:
    stats.played = _clamped(stats.played - played, "played")
    stats.sets_won = _clamped(stats.sets_won - sets_won, "sets_won")
    stats.sets_lost = _clamped(stats.sets_lost - sets_lost, "sets_lost")
    stats.points = _clamped(stats.points - points, "points")


def apply(stats_a: PlayerStats, stats_b: PlayerStats, sets_a: int, sets_b: int) -> None:
    """Add one played fixture to both teams. Mutates both stats."""
    stats_a.played += 1
    stats_a.sets_won += sets_a
    stats_a.sets_lost += sets_b
    stats_a.points += sets_a * POINTS_PER_SET
    stats_b.played += 1
    stats_b.sets_won += sets_b
    stats_b.sets_lost += sets_a
    stats_b.points += sets_b * POINTS_PER_SET


def reverse(stats_a: PlayerStats, stats_b: PlayerStats, prior_sets_a: int, prior_sets_b: int) -> None:
    """Exact inverse of apply() for the previously stored set counts."""
    _subtract(stats_a, 1, prior_sets_a, prior_sets_b, prior_sets_a * POINTS_PER_SET)
    _subtract(stats_b, 1, prior_sets_b, prior_sets_a, prior_sets_b * POINTS_PER_SET)


def reverse_legacy(winner: PlayerStats | None, loser: PlayerStats | None) -> None:
    """Undo a win/loss-only result. Either side may be unknown (None)."""
    if winner is not None:
        _subtract(winner, 1, LEGACY_WIN, 0, LEGACY_WIN_POINTS)
    if loser is not None:
        _subtract(loser, 1, 0, LEGACY_LOSS, 0)


def reverse_fixture(fixture: Fixture, stats_p1: PlayerStats, stats_p2: PlayerStats) -> None:
    """
    Remove a played fixture's stored effect from its two teams.
    Set-based results reverse by stored sets; legacy results by win/loss.
    """
    if not fixture.played:
        return
    if not fixture.is_legacy_result:
        reverse(stats_p1, stats_p2, fixture.player1_sets or 0, fixture.player2_sets or 0)
        return

    logger.warning("Reversing legacy win/loss result on fixture %s", fixture.id)
    if fixture.winner_id == fixture.player1_id:
        reverse_legacy(stats_p1, stats_p2)
    elif fixture.winner_id == fixture.player2_id:
        reverse_legacy(stats_p2, stats_p1)
    else:
        # Winner unknown: only the appearance can be undone.
        _subtract(stats_p1, 1, 0, 0, 0)
        _subtract(stats_p2, 1, 0, 0, 0)
