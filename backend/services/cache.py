"""Simple in-memory response store. No Redis needed.

Entries never expire on their own: the caller passes a TTL when reading, so
routes can keep different freshness windows over the same store. Stale
entries stay in place until the next miss overwrites them or the store is
cleared.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
data may be fetched twice (once per worker).
"""

import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class CacheEntry:
    payload: Any
    stored_at: float


class ResponseCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._store.get(key)

    def set(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(payload=payload, stored_at=self._clock())
        self._store[key] = entry
        return entry

    def lookup(self, key: str, ttl_seconds: float) -> CacheEntry | None:
        """Return the entry for ``key`` only if it is younger than ``ttl_seconds``."""
        entry = self._store.get(key)
        if entry is not None and self._clock() - entry.stored_at < ttl_seconds:
            return entry
        return None

    def clear(self) -> int:
        dropped = len(self._store)
        self._store.clear()
        return dropped

    def __len__(self) -> int:
        return len(self._store)
