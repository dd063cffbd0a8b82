"""League routes — cached passthroughs to the ESPN league API.

GET /api/league/{leagueId}/info         seasonId
GET /api/league/{leagueId}/teams        seasonId, scoringPeriodId
GET /api/league/{leagueId}/boxscores    seasonId, matchupPeriodId, scoringPeriodId
GET /api/league/{leagueId}/free-agents  seasonId, scoringPeriodId
GET /api/league/{leagueId}/draft        seasonId

Private leagues: pass espnS2 and SWID headers.
"""

from fastapi import APIRouter, Depends, Query, Request

from routes.common import as_int, fetch_resource, get_credentials, require
from services.espn_client import Credentials
from services.response_cache import CACHE_TTL_SECONDS, cached_response

router = APIRouter(prefix="/api/league/{league_id}")


@router.get("/info")
@cached_response(ttl_seconds=CACHE_TTL_SECONDS)
async def league_info(
    request: Request,
    league_id: str,
    season_id: str | None = Query(None, alias="seasonId"),
    credentials: Credentials = Depends(get_credentials),
) -> dict:
    """League name, size and settings."""
    require("seasonId query parameter is required", season_id)
    params = {"league_id": as_int("leagueId", league_id), "season_id": as_int("seasonId", season_id)}
    return await fetch_resource(
        request, "league_info", params, "Failed to fetch league information", credentials
    )


@router.get("/teams")
@cached_response(ttl_seconds=CACHE_TTL_SECONDS)
async def teams(
    request: Request,
    league_id: str,
    season_id: str | None = Query(None, alias="seasonId"),
    scoring_period_id: str | None = Query(None, alias="scoringPeriodId"),
    credentials: Credentials = Depends(get_credentials),
) -> list:
    """Teams with records and rosters as of a scoring period (week)."""
    require("seasonId and scoringPeriodId query parameters are required", season_id, scoring_period_id)
    params = {
        "league_id": as_int("leagueId", league_id),
        "season_id": as_int("seasonId", season_id),
        "scoring_period_id": as_int("scoringPeriodId", scoring_period_id),
    }
    return await fetch_resource(request, "teams", params, "Failed to fetch teams", credentials)


@router.get("/boxscores")
@cached_response(ttl_seconds=CACHE_TTL_SECONDS)
async def boxscores(
    request: Request,
    league_id: str,
    season_id: str | None = Query(None, alias="seasonId"),
    matchup_period_id: str | None = Query(None, alias="matchupPeriodId"),
    scoring_period_id: str | None = Query(None, alias="scoringPeriodId"),
    credentials: Credentials = Depends(get_credentials),
) -> list:
    require(
        "seasonId, matchupPeriodId, and scoringPeriodId query parameters are required",
        season_id,
        matchup_period_id,
        scoring_period_id,
    )
    params = {
        "league_id": as_int("leagueId", league_id),
        "season_id": as_int("seasonId", season_id),
        "matchup_period_id": as_int("matchupPeriodId", matchup_period_id),
        "scoring_period_id": as_int("scoringPeriodId", scoring_period_id),
    }
    return await fetch_resource(request, "boxscores", params, "Failed to fetch boxscores", credentials)


@router.get("/free-agents")
@cached_response(ttl_seconds=CACHE_TTL_SECONDS)
async def free_agents(
    request: Request,
    league_id: str,
    season_id: str | None = Query(None, alias="seasonId"),
    scoring_period_id: str | None = Query(None, alias="scoringPeriodId"),
    credentials: Credentials = Depends(get_credentials),
) -> list:
    """Most-owned free agents and waiver players."""
    require("seasonId and scoringPeriodId query parameters are required", season_id, scoring_period_id)
    params = {
        "league_id": as_int("leagueId", league_id),
        "season_id": as_int("seasonId", season_id),
        "scoring_period_id": as_int("scoringPeriodId", scoring_period_id),
    }
    return await fetch_resource(request, "free_agents", params, "Failed to fetch free agents", credentials)


@router.get("/draft")
@cached_response(ttl_seconds=CACHE_TTL_SECONDS)
async def draft(
    request: Request,
    league_id: str,
    season_id: str | None = Query(None, alias="seasonId"),
    credentials: Credentials = Depends(get_credentials),
) -> list:
    require("seasonId query parameter is required", season_id)
    params = {"league_id": as_int("leagueId", league_id), "season_id": as_int("seasonId", season_id)}
    return await fetch_resource(request, "draft", params, "Failed to fetch draft information", credentials)
