"""
Service layer: grid validation, standings ledger, round-robin pairing, result recording.
set_grid, standings and scheduling are pure; league_service and result_service own transactions.
"""
from .set_grid import SetRules, DEFAULT_RULES, validate_grid
from .scheduling import round_robin_pairs, fixture_count
from .result_service import ResultRecorder
from .league_service import LeagueService

__all__ = [
    "SetRules",
    "DEFAULT_RULES",
    "validate_grid",
    "round_robin_pairs",
    "fixture_count",
    "ResultRecorder",
    "LeagueService",
]
