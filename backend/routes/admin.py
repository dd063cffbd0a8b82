"""Cache administration. Unauthenticated: anyone who can reach it can clear the cache."""

import logging

from fastapi import APIRouter, Request

from services.response_cache import get_response_cache

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/cache/clear")
async def clear_cache(request: Request) -> dict:
    dropped = get_response_cache(request).clear()
    logger.info("Cache cleared (%d entries dropped)", dropped)
    return {"message": "Cache cleared successfully"}
