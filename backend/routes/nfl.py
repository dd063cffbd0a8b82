"""NFL schedule route. Not league-scoped, so no credentials are forwarded."""

from fastapi import APIRouter, Query, Request

from routes.common import as_date, fetch_resource, require
from services.response_cache import CACHE_TTL_SECONDS, cached_response

router = APIRouter()


@router.get("/api/nfl-games")
@cached_response(ttl_seconds=CACHE_TTL_SECONDS)
async def nfl_games(
    request: Request,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
) -> list:
    """NFL games between two YYYYMMDD dates, inclusive."""
    require(
        "startDate and endDate query parameters are required (format: YYYYMMDD)",
        start_date,
        end_date,
    )
    params = {
        "start_date": as_date("startDate", start_date),
        "end_date": as_date("endDate", end_date),
    }
    return await fetch_resource(request, "nfl_games", params, "Failed to fetch NFL games")
