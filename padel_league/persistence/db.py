"""
Database connection, initialization and transaction boundary.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from padel_league.errors import LeagueError, PersistenceError
from .schema import all_schema_sql

logger = logging.getLogger(__name__)


def _columns(conn: sqlite3.Connection, table: str) -> list[str]:
    cur = conn.execute(f"PRAGMA table_info({table})")
    return [row[1] for row in cur.fetchall()]


def _run_players_stats_migration(conn: sqlite3.Connection) -> None:
    """Older DBs stored won/lost on players; standings now count sets."""
    cols = _columns(conn, "players")
    if "won" in cols and "sets_won" not in cols:
        conn.execute("ALTER TABLE players RENAME COLUMN won TO sets_won")
        logger.info("Migrated players.won -> players.sets_won")
    if "lost" in cols and "sets_lost" not in cols:
        conn.execute("ALTER TABLE players RENAME COLUMN lost TO sets_lost")
        logger.info("Migrated players.lost -> players.sets_lost")


def _run_fixture_sets_migration(conn: sqlite3.Connection) -> None:
    """Add set breakdown columns so results can be reversed exactly."""
    cols = _columns(conn, "fixtures")
    if "set_scores" not in cols:
        conn.execute("ALTER TABLE fixtures ADD COLUMN set_scores TEXT")
    if "player1_sets" not in cols:
        conn.execute("ALTER TABLE fixtures ADD COLUMN player1_sets INTEGER")
    if "player2_sets" not in cols:
        conn.execute("ALTER TABLE fixtures ADD COLUMN player2_sets INTEGER")
    if "result_version" not in cols:
        conn.execute("ALTER TABLE fixtures ADD COLUMN result_version INTEGER")
        # Rows that carry a set grid, or decisive set totals without one, were
        # scored by sets. Both totals default to 0, so 0-0 stays legacy.
        conn.execute(
            """
            UPDATE fixtures SET result_version = 1
             WHERE played = 1
               AND (set_scores IS NOT NULL
                    OR (player1_sets IS NOT NULL
                        AND player2_sets IS NOT NULL
                        AND player1_sets != player2_sets))
            """
        )
        logger.info("Added fixtures.result_version")


def get_connection(db_path: str | Path, timeout: float = 30.0) -> sqlite3.Connection:
    """
    Return a new SQLite connection in autocommit mode.
    Writes must go through transaction(); use close() when done.
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), isolation_level=None, timeout=timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str | Path) -> None:
    """Create or ensure all tables exist, then bring older layouts up to date."""
    conn = get_connection(db_path)
    try:
        tables = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        with transaction(conn):
            if "players" in tables:
                _run_players_stats_migration(conn)
            if "fixtures" in tables:
                _run_fixture_sets_migration(conn)
        conn.executescript(all_schema_sql())
    finally:
        conn.close()


def _rollback(conn: sqlite3.Connection) -> None:
    # Some sqlite errors end the transaction on their own.
    if conn.in_transaction:
        conn.execute("ROLLBACK")


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    One atomic unit of work. BEGIN IMMEDIATE takes the database write lock up
    front, so concurrent writers (same-fixture corrections, regeneration of a
    division) are serialized. Any exception rolls everything back; sqlite errors
    surface as PersistenceError. Joins an already open transaction.
    """
    if conn.in_transaction:
        yield conn
        return
    try:
        conn.execute("BEGIN IMMEDIATE")
    except sqlite3.Error as exc:
        logger.exception("Could not begin transaction")
        raise PersistenceError("Could not begin transaction", str(exc)) from exc
    try:
        yield conn
    except sqlite3.Error as exc:
        _rollback(conn)
        logger.exception("Transaction rolled back after storage error")
        raise PersistenceError("Storage error; changes rolled back", str(exc)) from exc
    except LeagueError:
        _rollback(conn)
        raise
    except BaseException:
        _rollback(conn)
        logger.exception("Transaction rolled back")
        raise
    else:
        try:
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            _rollback(conn)
            logger.exception("Commit failed")
            raise PersistenceError("Commit failed; changes rolled back", str(exc)) from exc
