"""Domain layer: cache enums, value objects and exceptions. No I/O."""

from query_cache.domain.enums import CacheScope, OperationType, SessionMode
from query_cache.domain.exceptions import (
    CacheConfigurationError,
    CacheContractViolation,
    CacheEntryDecodeError,
    KeySerializationError,
    QueryCacheException,
)
from query_cache.domain.value_objects import (
    CacheDecision,
    CacheEntry,
    CachePolicy,
    ContextualCacheKey,
)

__all__ = [
    "CacheScope",
    "OperationType",
    "SessionMode",
    "QueryCacheException",
    "KeySerializationError",
    "CacheConfigurationError",
    "CacheEntryDecodeError",
    "CacheContractViolation",
    "CachePolicy",
    "CacheEntry",
    "CacheDecision",
    "ContextualCacheKey",
]
