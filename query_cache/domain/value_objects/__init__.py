"""Domain value objects (immutable, self-validating)."""

from query_cache.domain.value_objects.core import (
    CacheDecision,
    CacheEntry,
    CachePolicy,
    ContextualCacheKey,
)

__all__ = ["CacheDecision", "CacheEntry", "CachePolicy", "ContextualCacheKey"]
