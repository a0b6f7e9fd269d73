"""
Result recording: UNPLAYED -> PLAYED, and PLAYED -> PLAYED (correction).

There is no separate "delete result" transition. Recording on a played fixture
reverses the stored result and applies the new one (recalculate mode). The
lookup, reversal, fixture update and standings update run in one transaction:
either all of it is committed or none of it.
"""
from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable

from padel_league.errors import FixtureNotFound, PersistenceError
from padel_league.models import GridOutcome
from padel_league.persistence.db import transaction
from padel_league.persistence.repositories import FixtureRepository, PlayerRepository
from padel_league.services import standings
from padel_league.services.set_grid import DEFAULT_RULES, SetRules, validate_grid

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResultRecorder:
    """Orchestrates grid validation, standings reversal/application and persistence."""

    def __init__(
        self,
        rules: SetRules = DEFAULT_RULES,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._rules = rules
        self._clock = clock
        self._fixture_repo = FixtureRepository()
        self._player_repo = PlayerRepository()

    def record_result(self, conn: sqlite3.Connection, fixture_id: int, raw_grid: Any) -> GridOutcome:
        """
        Validate raw_grid and make it the fixture's result.
        Raises FixtureNotFound, a ValidationError subclass (no state change), or
        PersistenceError (everything rolled back).
        """
        with transaction(conn):
            fixture = self._fixture_repo.get(conn, fixture_id)
            if fixture is None:
                raise FixtureNotFound(f"Fixture not found: {fixture_id}", fixture_id)

            outcome = validate_grid(raw_grid, self._rules)

            p1 = self._player_repo.get(conn, fixture.player1_id)
            p2 = self._player_repo.get(conn, fixture.player2_id)
            if p1 is None or p2 is None:
                raise PersistenceError(f"Fixture {fixture_id} references a missing team", fixture_id)

            correcting = fixture.played
            if correcting:
                standings.reverse_fixture(fixture, p1.stats, p2.stats)

            winner_id = fixture.player1_id if outcome.side_a_won else fixture.player2_id
            self._fixture_repo.save_result(
                conn,
                fixture_id,
                outcome.grid_as_lists(),
                outcome.sets_won_a,
                outcome.sets_won_b,
                winner_id,
                self._clock(),
            )

            standings.apply(p1.stats, p2.stats, outcome.sets_won_a, outcome.sets_won_b)
            self._player_repo.update_stats(conn, p1.id, p1.stats)
            self._player_repo.update_stats(conn, p2.id, p2.stats)

        logger.info(
            "%s result on fixture %s: %d-%d (winner %s)",
            "Corrected" if correcting else "Recorded",
            fixture_id,
            outcome.sets_won_a,
            outcome.sets_won_b,
            winner_id,
        )
        return outcome
