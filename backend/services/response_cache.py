"""Route decorator that memoizes successful JSON responses.

    @router.get("/api/league/{league_id}/info")
    @cached_response(ttl_seconds=CACHE_TTL_SECONDS)
    async def league_info(request: Request, ...) -> dict:
        ...

The decorated route must accept ``request: Request``. The store is read from
``request.app.state.response_cache`` so each app (and each test) owns its
own instance.

Keys are the request path plus raw query string. Credential headers are not
part of the key, so callers with different ESPN cookies share entries. There
is no single-flight: concurrent misses on the same key each run the route.
"""

import functools
import inspect
import logging
from typing import Any, Awaitable, Callable

from fastapi import Request, Response

from services.cache import ResponseCache

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 10 * 60


def cache_key(request: Request) -> str:
    """Path + verbatim query string."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache


def cached_response(ttl_seconds: float = CACHE_TTL_SECONDS):
    def decorator(route: Callable[..., Awaitable[Any]]):
        if "request" not in inspect.signature(route).parameters:
            raise TypeError(f"{route.__name__} must accept a 'request' parameter to be cached")

        @functools.wraps(route)
        async def wrapper(*args, **kwargs):
            request: Request = kwargs["request"]
            cache = get_response_cache(request)
            key = cache_key(request)

            entry = cache.lookup(key, ttl_seconds)
            if entry is not None:
                logger.debug("Cache hit: %s", key)
                return entry.payload

            logger.debug("Cache miss: %s", key)
            result = await route(*args, **kwargs)

            # Explicit Response objects pass through uncached.
            if not isinstance(result, Response):
                cache.set(key, result)
            return result

        return wrapper

    return decorator
