"""
Tests for set-score grid validation.
"""
from __future__ import annotations

import pytest

from padel_league.errors import (
    DrawNotAllowed,
    ImplausibleSetScore,
    InvalidGrid,
    MalformedSet,
    TiedSet,
    TooManySets,
    ValidationError,
)
from padel_league.services.set_grid import SetRules, validate_grid


def test_straight_sets_win_for_side_a():
    outcome = validate_grid([[6, 0], [6, 4]])
    assert outcome.sets_won_a == 2
    assert outcome.sets_won_b == 0
    assert outcome.side_a_won
    assert outcome.normalized_grid == ((6, 0), (6, 4))


def test_three_set_win_for_side_b():
    outcome = validate_grid([[6, 2], [3, 6], [5, 7]])
    assert (outcome.sets_won_a, outcome.sets_won_b) == (1, 2)
    assert not outcome.side_a_won


def test_single_set_match():
    outcome = validate_grid([[7, 6]])
    assert (outcome.sets_won_a, outcome.sets_won_b) == (1, 0)


@pytest.mark.parametrize("raw", [None, [], "6-0", {"a": 1}, 6])
def test_missing_or_empty_grid(raw):
    with pytest.raises(InvalidGrid):
        validate_grid(raw)


def test_more_than_three_sets():
    with pytest.raises(TooManySets) as exc_info:
        validate_grid([[6, 0], [0, 6], [6, 0], [6, 0]])
    assert exc_info.value.detail == 4


@pytest.mark.parametrize(
    "entry",
    [[6], [6, 0, 1], "60", [6.5, 0], ["six", 0], [None, 6], [-1, 6], [True, 6], 6],
)
def test_malformed_set_entry(entry):
    with pytest.raises(MalformedSet):
        validate_grid([entry])


def test_tied_set_rejected_before_plausibility():
    with pytest.raises(TiedSet) as exc_info:
        validate_grid([[6, 6]])
    assert exc_info.value.detail == [6, 6]


def test_eight_six_is_implausible():
    with pytest.raises(ImplausibleSetScore) as exc_info:
        validate_grid([[8, 6]])
    assert exc_info.value.detail == [8, 6]
    assert "8-6" in str(exc_info.value)


@pytest.mark.parametrize(
    "a, b",
    [(6, 0), (6, 4), (4, 6), (7, 5), (7, 6), (6, 7), (5, 7)],
)
def test_completed_set_shapes_accepted(a, b):
    grid = [[a, b], [a, b]]
    outcome = validate_grid(grid)
    assert outcome.sets_won_a + outcome.sets_won_b == 2


@pytest.mark.parametrize(
    "a, b",
    [(6, 5), (5, 3), (7, 4), (7, 0), (8, 6), (10, 8), (1, 0)],
)
def test_incomplete_or_extended_sets_rejected(a, b):
    with pytest.raises(ImplausibleSetScore):
        validate_grid([[a, b]])


def test_draw_rejected():
    with pytest.raises(DrawNotAllowed):
        validate_grid([[6, 0], [0, 6]])


def test_numeric_strings_and_integral_floats_are_coerced():
    outcome = validate_grid([["6", "3"], [4.0, 6.0], [7, "5"]])
    assert outcome.normalized_grid == ((6, 3), (4, 6), (7, 5))
    assert all(isinstance(v, int) for pair in outcome.normalized_grid for v in pair)


def test_tuples_accepted_as_entries():
    outcome = validate_grid(((6, 1), (6, 2)))
    assert outcome.grid_as_lists() == [[6, 1], [6, 2]]


def test_first_failing_set_is_reported():
    with pytest.raises(ImplausibleSetScore) as exc_info:
        validate_grid([[6, 0], [9, 7], [6, 6]])
    assert exc_info.value.detail == [9, 7]


def test_all_validation_errors_share_base():
    with pytest.raises(ValidationError):
        validate_grid([[6, 6]])
    with pytest.raises(ValueError):
        validate_grid([])


def test_lenient_rules_accept_extended_set():
    rules = SetRules(enforce_plausibility=False)
    outcome = validate_grid([[10, 8], [6, 3]], rules)
    assert (outcome.sets_won_a, outcome.sets_won_b) == (2, 0)


def test_lenient_rules_still_reject_ties_and_draws():
    rules = SetRules(enforce_plausibility=False)
    with pytest.raises(TiedSet):
        validate_grid([[3, 3]], rules)
    with pytest.raises(DrawNotAllowed):
        validate_grid([[10, 8], [8, 10]], rules)


def test_deterministic_and_input_not_mutated():
    grid = [[6, 2], [3, 6], [7, 5]]
    first = validate_grid(grid)
    second = validate_grid(grid)
    assert first == second
    assert grid == [[6, 2], [3, 6], [7, 5]]


def test_set_counts_cover_every_set_and_never_tie():
    grids = [
        [[6, 0]],
        [[0, 6]],
        [[6, 4], [6, 4]],
        [[4, 6], [7, 6], [6, 7]],
        [[7, 5], [2, 6], [6, 1]],
    ]
    for grid in grids:
        outcome = validate_grid(grid)
        assert outcome.sets_won_a + outcome.sets_won_b == len(grid)
        assert outcome.sets_won_a != outcome.sets_won_b


def test_to_dict_shape():
    d = validate_grid([[6, 0], [6, 4]]).to_dict()
    assert d == {"sets_won_a": 2, "sets_won_b": 0, "normalized_grid": [[6, 0], [6, 4]]}
