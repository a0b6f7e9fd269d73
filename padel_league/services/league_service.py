"""
League service: divisions, teams, fixture generation and result recording.
Every mutating operation is one transaction; persistence is delegated to repositories.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any

from padel_league.errors import DivisionNotFound, InvalidName
from padel_league.models import Division, Fixture, GridOutcome, Player
from padel_league.persistence.db import transaction
from padel_league.persistence.repositories import (
    DivisionRepository,
    FixtureRepository,
    PlayerRepository,
)
from padel_league.services import standings
from padel_league.services.result_service import ResultRecorder
from padel_league.services.scheduling import fixture_count, round_robin_pairs
from padel_league.services.set_grid import DEFAULT_RULES, SetRules

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 200


def _clean_name(name: Any, what: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidName(f"{what} name is required", name)
    cleaned = name.strip()
    if len(cleaned) > MAX_NAME_LENGTH:
        raise InvalidName(f"{what} name must be at most {MAX_NAME_LENGTH} characters", cleaned)
    return cleaned


class LeagueService:
    """
    Domain operations exposed to the HTTP layer.
    The connection is always passed in; the service holds no storage state.
    """

    def __init__(self, rules: SetRules = DEFAULT_RULES) -> None:
        self._division_repo = DivisionRepository()
        self._player_repo = PlayerRepository()
        self._fixture_repo = FixtureRepository()
        self._recorder = ResultRecorder(rules=rules)

    def _require_division(self, conn: sqlite3.Connection, division_id: int) -> Division:
        division = self._division_repo.get(conn, division_id)
        if division is None:
            raise DivisionNotFound(f"Division not found: {division_id}", division_id)
        return division

    # ---------- Divisions ----------

    def list_divisions(self, conn: sqlite3.Connection) -> list[Division]:
        return self._division_repo.list_all(conn)

    def create_division(self, conn: sqlite3.Connection, name: str) -> Division:
        clean = _clean_name(name, "Division")
        with transaction(conn):
            division = self._division_repo.create(conn, clean)
        logger.info("Created division %s (%s)", division.id, division.name)
        return division

    def delete_division(self, conn: sqlite3.Connection, division_id: int) -> None:
        """Delete a division with its teams and fixtures."""
        with transaction(conn):
            if not self._division_repo.delete(conn, division_id):
                raise DivisionNotFound(f"Division not found: {division_id}", division_id)
        logger.info("Deleted division %s", division_id)

    # ---------- Teams ----------

    def list_players(self, conn: sqlite3.Connection, division_id: int) -> list[Player]:
        """Standings order: points desc, set difference desc, name asc."""
        self._require_division(conn, division_id)
        return self._player_repo.list_standings(conn, division_id)

    def create_player(self, conn: sqlite3.Connection, division_id: int, name: str) -> Player:
        clean = _clean_name(name, "Player")
        with transaction(conn):
            self._require_division(conn, division_id)
            player = self._player_repo.create(conn, division_id, clean)
        logger.info("Added player %s (%s) to division %s", player.id, player.name, division_id)
        return player

    # ---------- Fixtures ----------

    def list_fixtures(self, conn: sqlite3.Connection, division_id: int) -> list[Fixture]:
        self._require_division(conn, division_id)
        return self._fixture_repo.list_by_division(conn, division_id)

    def generate_fixtures(self, conn: sqlite3.Connection, division_id: int) -> list[Fixture]:
        """
        Replace the division's fixtures with a fresh single round-robin and reset
        every team's standings to zero. Raises InsufficientPlayers (nothing changed)
        for fewer than two teams.
        """
        with transaction(conn):
            self._require_division(conn, division_id)
            roster = self._player_repo.list_by_division(conn, division_id)
            pairs = round_robin_pairs([p.id for p in roster])
            removed = self._fixture_repo.delete_by_division(conn, division_id)
            self._player_repo.reset_stats_for_division(conn, division_id)
            for p1_id, p2_id in pairs:
                self._fixture_repo.create(conn, division_id, p1_id, p2_id)
            fixtures = self._fixture_repo.list_by_division(conn, division_id)
        logger.info(
            "Generated %d fixtures for division %s (%d teams, %d previous fixtures removed)",
            fixture_count(len(roster)), division_id, len(roster), removed,
        )
        return fixtures

    # ---------- Results ----------

    def record_result(self, conn: sqlite3.Connection, fixture_id: int, set_scores: Any) -> GridOutcome:
        return self._recorder.record_result(conn, fixture_id, set_scores)

    def get_fixture(self, conn: sqlite3.Connection, fixture_id: int) -> Fixture | None:
        return self._fixture_repo.get(conn, fixture_id)

    # ---------- Legacy data ----------

    def migrate_legacy_results(self, conn: sqlite3.Connection) -> int:
        """
        One-time migration of win/loss-only results: reverse each one's effect on
        standings (clamped at zero) and reopen the fixture so it can be re-entered
        as a set grid. Returns the number of fixtures migrated.
        """
        with transaction(conn):
            legacy = self._fixture_repo.list_legacy_played(conn)
            for fixture in legacy:
                p1 = self._player_repo.get(conn, fixture.player1_id)
                p2 = self._player_repo.get(conn, fixture.player2_id)
                if p1 is None or p2 is None:
                    continue
                standings.reverse_fixture(fixture, p1.stats, p2.stats)
                self._player_repo.update_stats(conn, p1.id, p1.stats)
                self._player_repo.update_stats(conn, p2.id, p2.stats)
                self._fixture_repo.clear_result(conn, fixture.id)
        if legacy:
            logger.info("Migrated %d legacy results", len(legacy))
        return len(legacy)
