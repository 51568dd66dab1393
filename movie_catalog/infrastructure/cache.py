"""In-Process Cache — key/value store with per-entry TTL (cachetools.TLRUCache).

Invariants:
    - ttl_ms=None stores without expiry; ttl_ms <= 0 stores nothing (already expired)
    - Expired entries are invisible to get()/contains() even before eviction
    - Bounded size: entries are evicted past maxsize

Design Decisions:
    - Single-process cache (module singleton, injected via get_cache): token payloads,
      token blocklist, throttle counters, recent-movies response
    - Injectable timer so tests can advance time without sleeping
"""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cachetools import TLRUCache


@dataclass(frozen=True)
class _Entry:
    value: Any
    ttl_seconds: float | None


def _time_to_use(_key: str, entry: _Entry, now: float) -> float:
    if entry.ttl_seconds is None:
        return math.inf
    return now + entry.ttl_seconds


class CacheStore:
    """Thin TTL-aware wrapper over TLRUCache."""

    def __init__(
        self, maxsize: int = 10_000,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._cache: TLRUCache = TLRUCache(
            maxsize=maxsize, ttu=_time_to_use, timer=timer,
        )

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._cache.get(key)
        return default if entry is None else entry.value

    def set(self, key: str, value: Any, ttl_ms: int | None = None) -> None:
        if ttl_ms is not None and ttl_ms <= 0:
            self.delete(key)
            return
        ttl_seconds = None if ttl_ms is None else ttl_ms / 1000
        self._cache[key] = _Entry(value, ttl_seconds)

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    def contains(self, key: str) -> bool:
        return key in self._cache

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)


cache_store = CacheStore()


def get_cache() -> CacheStore:
    """FastAPI dependency for the process-wide cache."""
    return cache_store
