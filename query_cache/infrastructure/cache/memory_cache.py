"""In-process key/value store with per-entry TTL.

Backed by cachetools.TLRUCache: each entry expires after its own TTL and
the least recently used entry is evicted once max_entries is reached.
Used when Redis is disabled and in tests. Not shared across processes.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import NamedTuple

from cachetools import TLRUCache

from query_cache.core.constants import DEFAULT_MEMORY_CACHE_MAX_ENTRIES


class _Stored(NamedTuple):
    value: str
    ttl: int | None


def _time_to_use(_key: str, stored: _Stored, now: float) -> float:
    """Expiry time for an entry; entries without TTL never expire."""
    if stored.ttl is None:
        return float("inf")
    return now + stored.ttl


class InMemoryKeyValueCache:
    """KeyValueCache over a TLRUCache. Single event loop; no locking needed."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MEMORY_CACHE_MAX_ENTRIES,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the store.

        Args:
            max_entries: Maximum number of live entries before LRU eviction.
            timer: Monotonic clock in seconds (injectable for tests).
        """
        self._cache: TLRUCache[str, _Stored] = TLRUCache(
            maxsize=max_entries,
            ttu=_time_to_use,
            timer=timer,
        )

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> str | None:
        stored = self._cache.get(key)
        return stored.value if stored is not None else None

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        # TLRUCache silently skips items that are already expired (ttl <= 0).
        self._cache[key] = _Stored(value, ttl)

    def __len__(self) -> int:
        return len(self._cache)
