"""Cache stores: protocol, namespacing adapter, Redis and in-memory backends.

The response cache only sees KeyValueCache; concrete stores are picked at
startup (see query_cache.core.lifespan).
"""

from query_cache.infrastructure.cache.cache_protocol import KeyValueCache
from query_cache.infrastructure.cache.memory_cache import InMemoryKeyValueCache
from query_cache.infrastructure.cache.prefixing_cache import PrefixingKeyValueCache
from query_cache.infrastructure.cache.redis_cache import RedisKeyValueCache

__all__ = [
    "KeyValueCache",
    "InMemoryKeyValueCache",
    "PrefixingKeyValueCache",
    "RedisKeyValueCache",
]
