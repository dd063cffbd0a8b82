"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FantasyProxyError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code

    def to_body(self) -> dict:
        return {"error": str(self)}


class MissingParameterError(FantasyProxyError):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class InvalidParameterError(FantasyProxyError):
    def __init__(self, name: str, value: str, expected: str = "an integer"):
        super().__init__(f"{name} must be {expected}, got {value!r}", status_code=400)


class UpstreamError(FantasyProxyError):
    """ESPN fetch failed. Carries a fixed summary plus the upstream message."""

    def __init__(self, error: str, message: str):
        super().__init__(error, status_code=500)
        self.message = message

    def to_body(self) -> dict:
        return {"error": str(self), "message": self.message}


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(FantasyProxyError)
    async def handle_proxy_error(_request: Request, exc: FantasyProxyError):
        return JSONResponse(exc.to_body(), status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
