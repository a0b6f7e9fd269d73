"""
Tests for the standings ledger: apply, exact reversal, legacy reversal and clamping.
"""
from __future__ import annotations

from padel_league.models import RESULT_VERSION_SETS, Fixture, PlayerStats
from padel_league.services import standings


def _stats(played=0, sets_won=0, sets_lost=0, points=0) -> PlayerStats:
    return PlayerStats(played=played, sets_won=sets_won, sets_lost=sets_lost, points=points)


def test_apply_updates_both_sides():
    a, b = _stats(), _stats()
    standings.apply(a, b, 2, 1)
    assert a == _stats(played=1, sets_won=2, sets_lost=1, points=2)
    assert b == _stats(played=1, sets_won=1, sets_lost=2, points=1)


def test_points_equal_sets_won():
    a, b = _stats(), _stats()
    standings.apply(a, b, 2, 0)
    standings.apply(a, b, 1, 2)
    assert a.points == a.sets_won == 3
    assert b.points == b.sets_won == 2


def test_reverse_is_exact_inverse_of_apply():
    a = _stats(played=3, sets_won=5, sets_lost=2, points=5)
    b = _stats(played=2, sets_won=1, sets_lost=4, points=1)
    before_a, before_b = PlayerStats(**a.to_dict()), PlayerStats(**b.to_dict())
    standings.apply(a, b, 1, 2)
    standings.reverse(a, b, 1, 2)
    assert a == before_a
    assert b == before_b


def test_reverse_clamps_at_zero():
    a, b = _stats(played=1, sets_won=1, sets_lost=0, points=1), _stats()
    standings.reverse(a, b, 2, 1)
    for s in (a, b):
        assert s.played >= 0 and s.sets_won >= 0 and s.sets_lost >= 0 and s.points >= 0
    assert a == _stats()
    assert b == _stats()


def test_reverse_legacy_uses_win_loss_semantics():
    winner = _stats(played=2, sets_won=2, sets_lost=0, points=6)
    loser = _stats(played=2, sets_won=0, sets_lost=2, points=0)
    standings.reverse_legacy(winner, loser)
    assert winner == _stats(played=1, sets_won=1, sets_lost=0, points=3)
    assert loser == _stats(played=1, sets_won=0, sets_lost=1, points=0)


def test_reverse_legacy_clamps_malformed_data():
    winner = _stats(played=1, sets_won=0, sets_lost=0, points=1)
    loser = _stats(played=0, sets_won=0, sets_lost=0, points=0)
    standings.reverse_legacy(winner, loser)
    assert winner == _stats()
    assert loser == _stats()


def _played_fixture(**kw) -> Fixture:
    base = dict(id=1, division_id=1, player1_id=10, player2_id=20, played=True)
    base.update(kw)
    return Fixture(**base)


def test_reverse_fixture_uses_stored_sets():
    fixture = _played_fixture(
        player1_sets=2, player2_sets=1, winner_id=10, result_version=RESULT_VERSION_SETS
    )
    p1 = _stats(played=1, sets_won=2, sets_lost=1, points=2)
    p2 = _stats(played=1, sets_won=1, sets_lost=2, points=1)
    standings.reverse_fixture(fixture, p1, p2)
    assert p1 == _stats()
    assert p2 == _stats()


def test_reverse_fixture_legacy_winner_is_player2():
    fixture = _played_fixture(winner_id=20, result_version=None)
    p1 = _stats(played=1, sets_lost=1)
    p2 = _stats(played=1, sets_won=1, points=3)
    standings.reverse_fixture(fixture, p1, p2)
    assert p1 == _stats()
    assert p2 == _stats()


def test_reverse_fixture_legacy_without_winner_only_undoes_appearance():
    fixture = _played_fixture(winner_id=None, result_version=None)
    p1 = _stats(played=1, sets_won=1, points=3)
    p2 = _stats(played=1, sets_lost=1)
    standings.reverse_fixture(fixture, p1, p2)
    assert p1 == _stats(played=0, sets_won=1, points=3)
    assert p2 == _stats(played=0, sets_lost=1)


def test_reverse_fixture_ignores_unplayed():
    fixture = _played_fixture(played=False)
    p1 = _stats(played=1, sets_won=2, points=2)
    standings.reverse_fixture(fixture, p1, _stats())
    assert p1 == _stats(played=1, sets_won=2, points=2)
