"""
SQLite schema for league entities.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def divisions_schema() -> str:
    return """
    CREATE TABLE IF NOT EXISTS divisions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    """


def players_schema() -> str:
    """Teams. Standings columns are owned by the standings ledger."""
    return """
    CREATE TABLE IF NOT EXISTS players (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        division_id INTEGER NOT NULL,
        name TEXT NOT NULL,
        played INTEGER NOT NULL DEFAULT 0,
        sets_won INTEGER NOT NULL DEFAULT 0,
        sets_lost INTEGER NOT NULL DEFAULT 0,
        points INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        FOREIGN KEY (division_id) REFERENCES divisions(id) ON DELETE CASCADE
    );
    CREATE INDEX IF NOT EXISTS ix_players_division ON players(division_id);
    """


def fixtures_schema() -> str:
    """One row per unordered pair per division. set_scores is a JSON list of [a, b]."""
    return """
    CREATE TABLE IF NOT EXISTS fixtures (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        division_id INTEGER NOT NULL,
        player1_id INTEGER NOT NULL,
        player2_id INTEGER NOT NULL,
        set_scores TEXT,
        player1_sets INTEGER,
        player2_sets INTEGER,
        winner_id INTEGER,
        played INTEGER NOT NULL DEFAULT 0,
        match_date TEXT,
        result_version INTEGER,
        created_at TEXT NOT NULL,
        FOREIGN KEY (division_id) REFERENCES divisions(id) ON DELETE CASCADE,
        FOREIGN KEY (player1_id) REFERENCES players(id) ON DELETE CASCADE,
        FOREIGN KEY (player2_id) REFERENCES players(id) ON DELETE CASCADE,
        FOREIGN KEY (winner_id) REFERENCES players(id) ON DELETE SET NULL
    );
    CREATE INDEX IF NOT EXISTS ix_fixtures_division ON fixtures(division_id);
    CREATE INDEX IF NOT EXISTS ix_fixtures_played ON fixtures(played);
    CREATE UNIQUE INDEX IF NOT EXISTS ix_fixtures_pair ON fixtures(division_id, player1_id, player2_id);
    """


def all_schema_sql() -> str:
    """Combine all schema DDL. Order: divisions, players, fixtures."""
    return "\n".join([
        divisions_schema(),
        players_schema(),
        fixtures_schema(),
    ])
