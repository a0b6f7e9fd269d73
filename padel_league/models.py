"""
Data models for the league backend.
Domain objects only: no persistence or API logic.

A division is an independent round-robin competition. Teams are stored as
"players" (the UI calls them teams). Standings live on the player row and are
maintained incrementally by the standings ledger, never re-summed on read.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Fixture result_version values
RESULT_VERSION_SETS = 1  # set-based grid; NULL means legacy or no result


# ---------- Division ----------
@dataclass
class Division:
    id: int
    name: str
    created_at: datetime | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


# ---------- Standings ----------
@dataclass
class PlayerStats:
    """
    Cumulative standings for one team.
    played = matches played, sets_won/sets_lost summed over played fixtures,
    points = sets_won (1 set = 1 point).
    """
    played: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    points: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "played": self.played,
            "sets_won": self.sets_won,
            "sets_lost": self.sets_lost,
            "points": self.points,
        }


# ---------- Player (team) ----------
@dataclass
class Player:
    id: int
    division_id: int
    name: str
    stats: PlayerStats = field(default_factory=PlayerStats)
    created_at: datetime | None = None

    @property
    def set_difference(self) -> int:
        return self.stats.sets_won - self.stats.sets_lost

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "division_id": self.division_id,
            "name": self.name,
            **self.stats.to_dict(),
            "set_difference": self.set_difference,
        }
        if self.created_at is not None:
            d["created_at"] = self.created_at.isoformat()
        return d


# ---------- Fixture ----------
@dataclass
class Fixture:
    """
    One unordered pairing within a division.
    played=False => result fields are None/0.
    played=True  => player1_sets != player2_sets and winner_id has more sets.
    result_version None on a played fixture marks a legacy win/loss record.
    """
    id: int
    division_id: int
    player1_id: int
    player2_id: int
    set_scores: list[list[int]] | None = None
    player1_sets: int | None = None
    player2_sets: int | None = None
    winner_id: int | None = None
    played: bool = False
    match_date: datetime | None = None
    result_version: int | None = None
    player1_name: str | None = None
    player2_name: str | None = None

    @property
    def is_legacy_result(self) -> bool:
        return self.played and self.result_version != RESULT_VERSION_SETS

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "division_id": self.division_id,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "set_scores": self.set_scores,
            "player1_sets": self.player1_sets,
            "player2_sets": self.player2_sets,
            "winner_id": self.winner_id,
            "played": self.played,
            "match_date": self.match_date.isoformat() if self.match_date else None,
        }
        if self.player1_name is not None:
            d["player1_name"] = self.player1_name
        if self.player2_name is not None:
            d["player2_name"] = self.player2_name
        return d


# ---------- Validated grid ----------
@dataclass(frozen=True)
class GridOutcome:
    """Trusted result of validating a set grid. Side A is player1, side B is player2."""
    sets_won_a: int
    sets_won_b: int
    normalized_grid: tuple[tuple[int, int], ...]

    @property
    def side_a_won(self) -> bool:
        return self.sets_won_a > self.sets_won_b

    def grid_as_lists(self) -> list[list[int]]:
        return [[a, b] for a, b in self.normalized_grid]

    def to_dict(self) -> dict[str, Any]:
        return {
            "sets_won_a": self.sets_won_a,
            "sets_won_b": self.sets_won_b,
            "normalized_grid": self.grid_as_lists(),
        }
