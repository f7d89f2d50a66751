"""HTTP API over the team catalog.

Routes (all ``GET``)::

    /                          version, generation date, links
    /teams[?search=]           every team, or a name search
    /leagues                   league list
    /leagues/{league}          teams in a league
    /leagues/{league}/{team}   one team

Every response body, errors included, is compact JSON followed by a
newline.  Errors have the shape ``{"message": "..."}``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from teamhex.catalog.errors import LookupFailedError
from teamhex.catalog.model import CatalogHolder, TeamCatalog
from teamhex.catalog.schema import AnyTeam
from teamhex.utils.logger import get_logger

logger = get_logger("api")

ROOT_LINKS: tuple[str, ...] = ("/teams{?search}", "/leagues")

# Always written as \uXXXX escapes inside JSON strings.
_HTML_ESCAPES = str.maketrans({
    "&": "\\u0026",
    "<": "\\u003c",
    ">": "\\u003e",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
})


class JSONLineResponse(JSONResponse):
    """Compact JSON terminated by a newline.

    ``&``, ``<``, ``>``, U+2028 and U+2029 are escaped, so bodies are
    HTML-safe JSON.
    """

    def render(self, content: Any) -> bytes:
        text = json.dumps(content, ensure_ascii=False, separators=(",", ":")).translate(_HTML_ESCAPES)
        return (text + "\n").encode("utf-8")


def _error(status_code: int, message: str) -> JSONLineResponse:
    return JSONLineResponse({"message": message}, status_code=status_code)


def _teams_payload(teams: Iterable[AnyTeam]) -> list[dict[str, Any]]:
    return [team.to_payload() for team in teams]


def create_app(source: TeamCatalog | CatalogHolder, version: str) -> FastAPI:
    """Build the FastAPI application.

    Args:
        source: A catalog, or a holder whose current catalog is read on
            every request.
        version: Reported by ``GET /``.
    """
    app = FastAPI(
        title="Team Hex API",
        description="Professional and collegiate sports teams' colors.",
        version=version,
        default_response_class=JSONLineResponse,
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"])
    app.state.catalog_source = source

    def current_catalog(request: Request) -> TeamCatalog:
        held = request.app.state.catalog_source
        return held.catalog if isinstance(held, CatalogHolder) else held

    # -- error translation --------------------------------------------------

    @app.exception_handler(LookupFailedError)
    async def _not_found(request: Request, exc: LookupFailedError) -> JSONLineResponse:
        return _error(404, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONLineResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def _server_error(request: Request, exc: Exception) -> JSONLineResponse:
        logger.error("Unhandled error serving %s: %s", request.url.path, exc, exc_info=exc)
        return _error(500, str(exc) or "Internal Server Error")

    # -- routes ---------------------------------------------------------------

    @app.get("/")
    def get_root(catalog: TeamCatalog = Depends(current_catalog)) -> JSONLineResponse:
        """Version information and links to other resources."""
        return JSONLineResponse({
            "version": version,
            "generationDate": catalog.generation_timestamp(),
            "_links": list(ROOT_LINKS),
        })

    @app.get("/teams")
    def get_teams(search: str | None = None, catalog: TeamCatalog = Depends(current_catalog)) -> JSONLineResponse:
        """All teams, or those whose name contains ``search``."""
        teams = catalog.search(search) if search else catalog.all_teams()
        return JSONLineResponse(_teams_payload(teams))

    @app.get("/leagues")
    def get_leagues(catalog: TeamCatalog = Depends(current_catalog)) -> JSONLineResponse:
        """All supported leagues."""
        return JSONLineResponse([record.to_payload() for record in catalog.leagues()])

    @app.get("/leagues/{league}")
    def get_league_teams(league: str, catalog: TeamCatalog = Depends(current_catalog)) -> JSONLineResponse:
        """Teams in one league."""
        return JSONLineResponse(_teams_payload(catalog.teams_by_league(league)))

    @app.get("/leagues/{league}/{team}")
    def get_league_team(league: str, team: str, catalog: TeamCatalog = Depends(current_catalog)) -> JSONLineResponse:
        """A single team in one league."""
        return JSONLineResponse(catalog.team_by_league_and_name(league, team).to_payload())

    return app
