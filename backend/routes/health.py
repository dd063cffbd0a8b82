"""Health check route."""

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()


@router.get("/api/health")
async def health() -> dict:
    """Liveness only — no cache or ESPN calls."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
