"""
Pytest fixtures for the fantasy proxy tests.

The app is built with an injected cache (driven by a manual clock) and a fake
upstream, so no test talks to ESPN or depends on wall-clock time.
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from app import create_app
from services.cache import ResponseCache


class ManualClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Stands in for EspnClient. Each call returns a fresh payload tagged with the call number."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.error: Exception | None = None

    async def fetch_league_resource(self, kind, params, credentials=None):
        self.calls.append((kind, params, credentials))
        if self.error is not None:
            raise self.error
        payload = {"kind": kind, "call": len(self.calls)}
        return payload if kind == "league_info" else [payload]


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def cache(clock) -> ResponseCache:
    return ResponseCache(clock=clock)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(cache, upstream) -> TestClient:
    return TestClient(create_app(cache=cache, upstream=upstream))


@pytest.fixture
def make_request(cache):
    """Build a bare Request whose app carries ``cache``."""
    fake_app = SimpleNamespace(state=SimpleNamespace(response_cache=cache))

    def _make(path: str = "/api/thing", query: str = "", headers: dict | None = None) -> Request:
        scope = {
            "type": "http",
            "method": "GET",
            "path": path,
            "query_string": query.encode(),
            "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
            "app": fake_app,
        }
        return Request(scope)

    return _make
