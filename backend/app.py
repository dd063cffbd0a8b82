"""FastAPI application entry point for the fantasy proxy."""

import logging
import sys

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from errors import register_error_handlers
from services.cache import ResponseCache
from services.espn_client import EspnClient

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(cache: ResponseCache | None = None, upstream=None) -> FastAPI:
    """Build the app. Tests pass their own cache (with a fake clock) and upstream."""
    app = FastAPI(title="Fantasy Proxy API", version="1.0.0")

    app.state.response_cache = cache if cache is not None else ResponseCache()
    app.state.upstream = upstream if upstream is not None else EspnClient()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.admin import router as admin_router
    from routes.health import router as health_router
    from routes.league import router as league_router
    from routes.nfl import router as nfl_router

    app.include_router(health_router)
    app.include_router(admin_router)
    app.include_router(league_router)
    app.include_router(nfl_router)

    @app.on_event("shutdown")
    async def _close_upstream() -> None:
        close = getattr(app.state.upstream, "aclose", None)
        if close is not None:
            await close()

    return app


app = create_app()


def main() -> None:
    logger.info("Fantasy proxy listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
