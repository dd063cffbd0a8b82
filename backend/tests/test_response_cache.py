"""Tests for the cached_response route decorator."""

import asyncio

import pytest
from fastapi.responses import JSONResponse

from services.response_cache import cache_key, cached_response


def counting_route(ttl_seconds: float = 600):
    calls = []

    @cached_response(ttl_seconds=ttl_seconds)
    async def route(request):
        calls.append(request.url.path)
        return {"call": len(calls)}

    return route, calls


class TestCacheKey:
    def test_path_only(self, make_request):
        assert cache_key(make_request("/api/health")) == "/api/health"

    def test_query_kept_verbatim(self, make_request):
        request = make_request("/api/league/1/teams", "scoringPeriodId=3&seasonId=2024")
        assert cache_key(request) == "/api/league/1/teams?scoringPeriodId=3&seasonId=2024"

    def test_query_order_matters(self, make_request):
        a = make_request("/x", "a=1&b=2")
        b = make_request("/x", "b=2&a=1")
        assert cache_key(a) != cache_key(b)

    def test_headers_ignored(self, make_request):
        a = make_request("/x", "a=1", headers={"espnS2": "one", "SWID": "{1}"})
        b = make_request("/x", "a=1", headers={"espnS2": "two", "SWID": "{2}"})
        assert cache_key(a) == cache_key(b)


class TestCachedResponse:
    def test_requires_request_parameter(self):
        with pytest.raises(TypeError, match="request"):

            @cached_response(ttl_seconds=60)
            async def route(league_id: str):
                return {}

    @pytest.mark.asyncio
    async def test_hit_returns_identical_payload(self, make_request, clock):
        route, calls = counting_route()

        first = await route(request=make_request("/x", "a=1"))
        clock.advance(300)
        second = await route(request=make_request("/x", "a=1"))

        assert second is first
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_stale_entry_reruns_route(self, make_request, clock, cache):
        route, calls = counting_route(ttl_seconds=600)

        first = await route(request=make_request("/x"))
        clock.advance(650)
        second = await route(request=make_request("/x"))

        assert len(calls) == 2
        assert second == {"call": 2}
        assert cache.get("/x").payload is second
        assert first != second

    @pytest.mark.asyncio
    async def test_distinct_queries_are_distinct_entries(self, make_request, cache):
        route, calls = counting_route()

        await route(request=make_request("/x", "week=1"))
        await route(request=make_request("/x", "week=2"))

        assert len(calls) == 2
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_failure_is_not_stored(self, make_request, cache):
        attempts = []

        @cached_response(ttl_seconds=600)
        async def route(request):
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("upstream down")
            return {"ok": True}

        with pytest.raises(RuntimeError):
            await route(request=make_request("/x"))
        assert len(cache) == 0

        assert await route(request=make_request("/x")) == {"ok": True}
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_response_objects_pass_through_uncached(self, make_request, cache):
        @cached_response(ttl_seconds=600)
        async def route(request):
            return JSONResponse({"error": "nope"}, status_code=502)

        result = await route(request=make_request("/x"))

        assert result.status_code == 502
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_clear_forces_miss(self, make_request, cache):
        route, calls = counting_route()

        await route(request=make_request("/x"))
        await route(request=make_request("/y"))
        cache.clear()
        await route(request=make_request("/x"))
        await route(request=make_request("/y"))

        assert len(calls) == 4

    @pytest.mark.asyncio
    async def test_concurrent_misses_are_not_coalesced(self, make_request):
        started = []
        both_started = asyncio.Event()

        @cached_response(ttl_seconds=600)
        async def route(request):
            started.append(1)
            if len(started) == 2:
                both_started.set()
            await both_started.wait()
            return {"call": len(started)}

        await asyncio.wait_for(
            asyncio.gather(
                route(request=make_request("/x", "a=1")),
                route(request=make_request("/x", "a=1")),
            ),
            timeout=5,
        )

        assert len(started) == 2

    def test_wraps_route_metadata(self):
        route, _ = counting_route()
        assert route.__name__ == "route"
        assert route.__wrapped__ is not None
