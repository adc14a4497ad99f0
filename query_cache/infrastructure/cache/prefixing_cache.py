"""Namespacing facade over a KeyValueCache.

Every key is prefixed so response-cache entries cannot collide with other
users of the same store. Pure passthrough: no retries, errors propagate.
"""

from query_cache.core.constants import CACHE_KEY_PREFIX
from query_cache.infrastructure.cache.cache_protocol import KeyValueCache


class PrefixingKeyValueCache:
    """KeyValueCache that prepends a fixed prefix to every key."""

    def __init__(self, wrapped: KeyValueCache, prefix: str = CACHE_KEY_PREFIX) -> None:
        if not prefix:
            raise ValueError("prefix must be a non-empty string")
        self.wrapped = wrapped
        self.prefix = prefix

    def namespaced(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def get(self, key: str) -> str | None:
        return await self.wrapped.get(self.namespaced(key))

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        await self.wrapped.set(self.namespaced(key), value, ttl=ttl)
