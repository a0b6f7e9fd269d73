#!/usr/bin/env python3
"""
One-time upgrade of a league database written before set-based scoring.
Brings the schema up to date, then reopens every win/loss-only result so it can
be re-entered as a set grid.
Run from project root: python3 scripts/migrate_legacy.py [db_path]
"""
from __future__ import annotations

import sys
from pathlib import Path

from padel_league.config import configure_logging, load_settings
from padel_league.persistence import get_connection, init_db
from padel_league.services import LeagueService


def main() -> None:
    settings = load_settings()
    db_path = Path(sys.argv[1]) if len(sys.argv) > 1 else settings.db_path
    configure_logging(settings.log_level)
    init_db(db_path)

    conn = get_connection(db_path)
    try:
        migrated = LeagueService().migrate_legacy_results(conn)
    finally:
        conn.close()
    print(f"Reopened {migrated} legacy result(s) in {db_path}")


if __name__ == "__main__":
    main()
