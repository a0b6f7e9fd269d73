"""
Persistence layer for league data.
No business logic: only read/write interfaces and the transaction boundary.
"""
from .db import get_connection, init_db, transaction
from .repositories import (
    DivisionRepository,
    PlayerRepository,
    FixtureRepository,
)

__all__ = [
    "get_connection",
    "init_db",
    "transaction",
    "DivisionRepository",
    "PlayerRepository",
    "FixtureRepository",
]
