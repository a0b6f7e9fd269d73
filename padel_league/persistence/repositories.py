"""
Repository interfaces for league data.
No business logic: only read/write operations. Repositories never commit;
the caller's transaction() decides when a unit of work is complete.
"""
from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any

from padel_league.models import RESULT_VERSION_SETS, Division, Fixture, Player, PlayerStats


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_datetime(s: str | None) -> datetime | None:
    if s is None:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _opt_int(value: Any) -> int | None:
    return None if value is None else int(value)


# ---------- DivisionRepository ----------


class DivisionRepository:
    """CRUD for divisions. Deleting a division cascades to its players and fixtures."""

    def create(self, conn: sqlite3.Connection, name: str) -> Division:
        now = _now_iso()
        cur = conn.execute(
            "INSERT INTO divisions (name, created_at) VALUES (?, ?)",
            (name, now),
        )
        return Division(id=cur.lastrowid, name=name, created_at=datetime.fromisoformat(now))

    def get(self, conn: sqlite3.Connection, division_id: int) -> Division | None:
        row = conn.execute(
            "SELECT id, name, created_at FROM divisions WHERE id = ?",
            (division_id,),
        ).fetchone()
        if row is None:
            return None
        return Division(id=row["id"], name=row["name"], created_at=_parse_datetime(row["created_at"]))

    def list_all(self, conn: sqlite3.Connection) -> list[Division]:
        rows = conn.execute("SELECT id, name, created_at FROM divisions ORDER BY id").fetchall()
        return [
            Division(id=r["id"], name=r["name"], created_at=_parse_datetime(r["created_at"]))
            for r in rows
        ]

    def delete(self, conn: sqlite3.Connection, division_id: int) -> bool:
        cur = conn.execute("DELETE FROM divisions WHERE id = ?", (division_id,))
        return cur.rowcount > 0


# ---------- PlayerRepository ----------

_PLAYER_COLS = "id, division_id, name, played, sets_won, sets_lost, points, created_at"


def _row_to_player(r: sqlite3.Row) -> Player:
    return Player(
        id=r["id"],
        division_id=r["division_id"],
        name=r["name"],
        stats=PlayerStats(
            played=r["played"],
            sets_won=r["sets_won"],
            sets_lost=r["sets_lost"],
            points=r["points"],
        ),
        created_at=_parse_datetime(r["created_at"]),
    )


class PlayerRepository:
    """CRUD for players (teams) and their standings columns."""

    def create(self, conn: sqlite3.Connection, division_id: int, name: str) -> Player:
        now = _now_iso()
        cur = conn.execute(
            "INSERT INTO players (division_id, name, played, sets_won, sets_lost, points, created_at) "
            "VALUES (?, ?, 0, 0, 0, 0, ?)",
            (division_id, name, now),
        )
        return Player(
            id=cur.lastrowid,
            division_id=division_id,
            name=name,
            stats=PlayerStats(),
            created_at=datetime.fromisoformat(now),
        )

    def get(self, conn: sqlite3.Connection, player_id: int) -> Player | None:
        row = conn.execute(
            f"SELECT {_PLAYER_COLS} FROM players WHERE id = ?",
            (player_id,),
        ).fetchone()
        return _row_to_player(row) if row is not None else None

    def list_by_division(self, conn: sqlite3.Connection, division_id: int) -> list[Player]:
        """Roster in insertion order (the order fixtures are generated in)."""
        rows = conn.execute(
            f"SELECT {_PLAYER_COLS} FROM players WHERE division_id = ? ORDER BY id",
            (division_id,),
        ).fetchall()
        return [_row_to_player(r) for r in rows]

    def list_standings(self, conn: sqlite3.Connection, division_id: int) -> list[Player]:
        """Points desc, then set difference desc, then name asc."""
        rows = conn.execute(
            f"SELECT {_PLAYER_COLS} FROM players WHERE division_id = ? "
            "ORDER BY points DESC, (sets_won - sets_lost) DESC, name ASC, id ASC",
            (division_id,),
        ).fetchall()
        return [_row_to_player(r) for r in rows]

    def update_stats(self, conn: sqlite3.Connection, player_id: int, stats: PlayerStats) -> None:
        conn.execute(
            "UPDATE players SET played = ?, sets_won = ?, sets_lost = ?, points = ? WHERE id = ?",
            (stats.played, stats.sets_won, stats.sets_lost, stats.points, player_id),
        )

    def reset_stats_for_division(self, conn: sqlite3.Connection, division_id: int) -> int:
        cur = conn.execute(
            "UPDATE players SET played = 0, sets_won = 0, sets_lost = 0, points = 0 WHERE division_id = ?",
            (division_id,),
        )
        return cur.rowcount


# ---------- FixtureRepository ----------

_FIXTURE_COLS = (
    "f.id, f.division_id, f.player1_id, f.player2_id, f.set_scores, f.player1_sets, "
    "f.player2_sets, f.winner_id, f.played, f.match_date, f.result_version"
)


def _row_to_fixture(r: sqlite3.Row, with_names: bool = False) -> Fixture:
    raw_scores = r["set_scores"]
    return Fixture(
        id=r["id"],
        division_id=r["division_id"],
        player1_id=r["player1_id"],
        player2_id=r["player2_id"],
        set_scores=json.loads(raw_scores) if raw_scores else None,
        player1_sets=_opt_int(r["player1_sets"]),
        player2_sets=_opt_int(r["player2_sets"]),
        winner_id=_opt_int(r["winner_id"]),
        played=bool(r["played"]),
        match_date=_parse_datetime(r["match_date"]),
        result_version=_opt_int(r["result_version"]),
        player1_name=r["player1_name"] if with_names else None,
        player2_name=r["player2_name"] if with_names else None,
    )


class FixtureRepository:
    """CRUD for fixtures. No business logic."""

    def create(
        self,
        conn: sqlite3.Connection,
        division_id: int,
        player1_id: int,
        player2_id: int,
    ) -> Fixture:
        cur = conn.execute(
            "INSERT INTO fixtures (division_id, player1_id, player2_id, played, created_at) "
            "VALUES (?, ?, ?, 0, ?)",
            (division_id, player1_id, player2_id, _now_iso()),
        )
        return Fixture(
            id=cur.lastrowid,
            division_id=division_id,
            player1_id=player1_id,
            player2_id=player2_id,
        )

    def get(self, conn: sqlite3.Connection, fixture_id: int) -> Fixture | None:
        row = conn.execute(
            f"SELECT {_FIXTURE_COLS} FROM fixtures f WHERE f.id = ?",
            (fixture_id,),
        ).fetchone()
        return _row_to_fixture(row) if row is not None else None

    def list_by_division(self, conn: sqlite3.Connection, division_id: int) -> list[Fixture]:
        """Fixtures with both team names resolved, in creation order."""
        rows = conn.execute(
            f"""
            SELECT {_FIXTURE_COLS},
                p1.name AS player1_name,
                p2.name AS player2_name
            FROM fixtures f
            JOIN players p1 ON f.player1_id = p1.id
            JOIN players p2 ON f.player2_id = p2.id
            WHERE f.division_id = ?
            ORDER BY f.id
            """,
            (division_id,),
        ).fetchall()
        return [_row_to_fixture(r, with_names=True) for r in rows]

    def list_legacy_played(self, conn: sqlite3.Connection) -> list[Fixture]:
        """Played fixtures whose result predates set-based scoring."""
        rows = conn.execute(
            f"SELECT {_FIXTURE_COLS} FROM fixtures f "
            "WHERE f.played = 1 AND (f.result_version IS NULL OR f.result_version != ?) "
            "ORDER BY f.id",
            (RESULT_VERSION_SETS,),
        ).fetchall()
        return [_row_to_fixture(r) for r in rows]

    def delete_by_division(self, conn: sqlite3.Connection, division_id: int) -> int:
        cur = conn.execute("DELETE FROM fixtures WHERE division_id = ?", (division_id,))
        return cur.rowcount

    def save_result(
        self,
        conn: sqlite3.Connection,
        fixture_id: int,
        set_scores: list[list[int]],
        player1_sets: int,
        player2_sets: int,
        winner_id: int,
        match_date: datetime,
    ) -> None:
        conn.execute(
            """
            UPDATE fixtures
               SET set_scores = ?,
                   player1_sets = ?,
                   player2_sets = ?,
                   winner_id = ?,
                   played = 1,
                   match_date = ?,
                   result_version = ?
             WHERE id = ?
            """,
            (
                json.dumps(set_scores),
                player1_sets,
                player2_sets,
                winner_id,
                match_date.isoformat(),
                RESULT_VERSION_SETS,
                fixture_id,
            ),
        )

    def clear_result(self, conn: sqlite3.Connection, fixture_id: int) -> None:
        conn.execute(
            """
            UPDATE fixtures
               SET set_scores = NULL,
                   player1_sets = NULL,
                   player2_sets = NULL,
                   winner_id = NULL,
                   played = 0,
                   match_date = NULL,
                   result_version = NULL
             WHERE id = ?
            """,
            (fixture_id,),
        )
