"""
REST API for the padel league manager.
Thin wrappers around the league service; one SQLite connection per request.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from padel_league.config import Settings, configure_logging, load_settings
from padel_league.errors import (
    InsufficientPlayers,
    LeagueError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from padel_league.persistence import get_connection, init_db
from padel_league.services import LeagueService, SetRules

logger = logging.getLogger(__name__)


# ---------- Request models ----------


class CreateDivisionRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class CreatePlayerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class RecordResultRequest(BaseModel):
    # Validated by the set grid rules, not by pydantic, so errors name the broken rule.
    set_scores: Any = Field(None, description="List of sets, e.g. [[6, 0], [6, 4]]; 1-3 sets")


# ---------- Error mapping ----------


def _http_error(exc: LeagueError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        status = 404
    elif isinstance(exc, (ValidationError, InsufficientPlayers)):
        status = 400
    elif isinstance(exc, PersistenceError):
        status = 500
    else:
        status = 400
    return HTTPException(status_code=status, detail=exc.to_dict())


# ---------- Dependencies ----------


def get_service(request: Request) -> LeagueService:
    return request.app.state.service


@contextmanager
def db_conn(request: Request) -> Generator:
    """Yield a DB connection for this request, ensure close on exit."""
    conn = get_connection(request.app.state.settings.db_path)
    try:
        yield conn
    finally:
        conn.close()


# ---------- Routes ----------


def _register_routes(app: FastAPI) -> None:

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok"}

    @app.get("/api/divisions")
    def list_divisions(request: Request, svc: LeagueService = Depends(get_service)) -> list[dict[str, Any]]:
        with db_conn(request) as conn:
            return [d.to_dict() for d in svc.list_divisions(conn)]

    @app.post("/api/divisions")
    def create_division(
        req: CreateDivisionRequest, request: Request, svc: LeagueService = Depends(get_service)
    ) -> dict[str, Any]:
        with db_conn(request) as conn:
            try:
                return svc.create_division(conn, req.name).to_dict()
            except LeagueError as e:
                raise _http_error(e)

    @app.delete("/api/divisions/{division_id}")
    def delete_division(
        division_id: int, request: Request, svc: LeagueService = Depends(get_service)
    ) -> dict[str, Any]:
        with db_conn(request) as conn:
            try:
                svc.delete_division(conn, division_id)
            except LeagueError as e:
                raise _http_error(e)
        return {"id": division_id, "deleted": True}

    @app.get("/api/divisions/{division_id}/players")
    def list_players(
        division_id: int, request: Request, svc: LeagueService = Depends(get_service)
    ) -> list[dict[str, Any]]:
        """Teams in standings order."""
        with db_conn(request) as conn:
            try:
                return [p.to_dict() for p in svc.list_players(conn, division_id)]
            except LeagueError as e:
                raise _http_error(e)

    @app.post("/api/divisions/{division_id}/players")
    def create_player(
        division_id: int,
        req: CreatePlayerRequest,
        request: Request,
        svc: LeagueService = Depends(get_service),
    ) -> dict[str, Any]:
        with db_conn(request) as conn:
            try:
                return svc.create_player(conn, division_id, req.name).to_dict()
            except LeagueError as e:
                raise _http_error(e)

    @app.get("/api/divisions/{division_id}/fixtures")
    def list_fixtures(
        division_id: int, request: Request, svc: LeagueService = Depends(get_service)
    ) -> list[dict[str, Any]]:
        with db_conn(request) as conn:
            try:
                return [f.to_dict() for f in svc.list_fixtures(conn, division_id)]
            except LeagueError as e:
                raise _http_error(e)

    @app.post("/api/divisions/{division_id}/generate-fixtures")
    def generate_fixtures(
        division_id: int, request: Request, svc: LeagueService = Depends(get_service)
    ) -> list[dict[str, Any]]:
        """Replace all fixtures of the division and reset its standings."""
        with db_conn(request) as conn:
            try:
                return [f.to_dict() for f in svc.generate_fixtures(conn, division_id)]
            except LeagueError as e:
                raise _http_error(e)

    @app.put("/api/fixtures/{fixture_id}/result")
    def record_result(
        fixture_id: int,
        req: RecordResultRequest,
        request: Request,
        svc: LeagueService = Depends(get_service),
    ) -> dict[str, Any]:
        """Record or correct a result. A played fixture is recalculated, not duplicated."""
        with db_conn(request) as conn:
            try:
                outcome = svc.record_result(conn, fixture_id, req.set_scores)
            except LeagueError as e:
                raise _http_error(e)
            fixture = svc.get_fixture(conn, fixture_id)
        return {
            "success": True,
            "player1_sets": outcome.sets_won_a,
            "player2_sets": outcome.sets_won_b,
            "set_scores": outcome.grid_as_lists(),
            "winner_id": fixture.winner_id if fixture else None,
        }


# ---------- App factory ----------


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        init_db(settings.db_path)
        if settings.migrate_legacy:
            conn = get_connection(settings.db_path)
            try:
                app.state.service.migrate_legacy_results(conn)
            finally:
                conn.close()
        logger.info("Database ready at %s", settings.db_path)
        yield

    app = FastAPI(
        title="Padel League Manager API",
        description="Divisions, round-robin fixtures and set-based standings",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.service = LeagueService(rules=SetRules(enforce_plausibility=settings.strict_sets))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_routes(app)
    return app


app = create_app()

# ---------- Run with: uvicorn padel_league.api:app --reload ----------
