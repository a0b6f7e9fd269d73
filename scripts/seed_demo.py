#!/usr/bin/env python3
"""
Demo: Create division → Add teams → Generate fixtures → Record/correct results → Standings.
Run from project root: python3 scripts/seed_demo.py [db_path]
"""
from __future__ import annotations

import sys
from pathlib import Path

from padel_league.config import configure_logging
from padel_league.persistence import get_connection, init_db
from padel_league.services import LeagueService

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def main() -> None:
    # Use data/demo.db by default (distinct from league.db)
    db_path = Path(sys.argv[1]) if len(sys.argv) > 1 else PROJECT_ROOT / "data" / "demo.db"
    configure_logging("INFO")
    init_db(db_path)

    conn = get_connection(db_path)
    try:
        svc = LeagueService()

        # 1. Division and teams
        division = svc.create_division(conn, "Demo Division")
        for name in ("Smash Bros", "Net Ninjas", "Wall Street", "Bandeja Club"):
            svc.create_player(conn, division.id, name)
        print(f"Created division: {division.name} (id={division.id})")

        # 2. Round-robin fixtures
        fixtures = svc.generate_fixtures(conn, division.id)
        print(f"Generated {len(fixtures)} fixtures")

        # 3. Results, including a correction of the first one
        svc.record_result(conn, fixtures[0].id, [[6, 2], [3, 6], [7, 5]])
        svc.record_result(conn, fixtures[1].id, [[6, 4], [6, 4]])
        svc.record_result(conn, fixtures[5].id, [[7, 6], [4, 6], [2, 6]])
        svc.record_result(conn, fixtures[0].id, [[2, 6], [2, 6]])

        for f in svc.list_fixtures(conn, division.id):
            result = " ".join(f"{a}-{b}" for a, b in f.set_scores) if f.played else "not played"
            print(f"  {f.player1_name} vs {f.player2_name}: {result}")

        # 4. Standings
        print("\nStandings (P  W  L  Pts):")
        for p in svc.list_players(conn, division.id):
            s = p.stats
            print(f"  {p.name:<14} {s.played:>2} {s.sets_won:>2} {s.sets_lost:>2} {s.points:>3}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
