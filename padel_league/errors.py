"""
Error taxonomy for the league engine.
Every error carries a machine-readable code and the offending value so the
HTTP layer can report exactly which rule was broken.
"""
from __future__ import annotations

from typing import Any


class LeagueError(Exception):
    """Base for all league errors."""

    code = "league_error"

    def __init__(self, message: str, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, "value": self.detail}


# ---------- Validation (caller input, never mutates state) ----------


class ValidationError(LeagueError, ValueError):
    code = "validation_error"


class InvalidGrid(ValidationError):
    """Grid is missing, not a list, or empty."""
    code = "invalid_grid"


class TooManySets(ValidationError):
    code = "too_many_sets"


class MalformedSet(ValidationError):
    """Set entry is not a pair of non-negative integers."""
    code = "malformed_set"


class TiedSet(ValidationError):
    code = "tied_set"


class ImplausibleSetScore(ValidationError):
    """Set does not look like a completed 6- or 7-game set."""
    code = "implausible_set_score"


class DrawNotAllowed(ValidationError):
    code = "draw_not_allowed"


class InvalidName(ValidationError):
    code = "invalid_name"


# ---------- Lookup ----------


class NotFoundError(LeagueError, LookupError):
    code = "not_found"


class FixtureNotFound(NotFoundError):
    code = "fixture_not_found"


class DivisionNotFound(NotFoundError):
    code = "division_not_found"


# ---------- Scheduling ----------


class InsufficientPlayers(LeagueError, ValueError):
    """Fewer than two teams in the division; nothing was changed."""
    code = "insufficient_players"


# ---------- Storage ----------


class PersistenceError(LeagueError, RuntimeError):
    """Storage or transaction failure. The unit of work was rolled back."""
    code = "persistence_error"
