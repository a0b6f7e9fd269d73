"""
Runtime settings read from the environment.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _default_db_path() -> Path:
    return _project_root() / "data" / "league.db"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    db_path: Path = field(default_factory=_default_db_path)
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    # 6/7-game plausibility check on each set. Turning it off still rejects ties and draws.
    strict_sets: bool = True
    log_level: str = "INFO"
    # Reopen win/loss-only results at startup so standings hold set points only.
    migrate_legacy: bool = False


def load_settings() -> Settings:
    """Build Settings from PADEL_LEAGUE_* environment variables."""
    db_raw = os.environ.get("PADEL_LEAGUE_DB", "").strip()
    origins_raw = os.environ.get("PADEL_LEAGUE_CORS_ORIGINS", "*")
    origins = [o.strip() for o in origins_raw.split(",") if o.strip()] or ["*"]
    return Settings(
        db_path=Path(db_raw) if db_raw else _default_db_path(),
        cors_origins=origins,
        strict_sets=_env_flag("PADEL_LEAGUE_STRICT_SETS", True),
        log_level=os.environ.get("PADEL_LEAGUE_LOG_LEVEL", "INFO").upper(),
        migrate_legacy=_env_flag("PADEL_LEAGUE_MIGRATE_LEGACY", False),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
