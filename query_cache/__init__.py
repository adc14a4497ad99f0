"""Whole-response cache for GraphQL query operations.

Decides, per request, under which key a result is looked up, whether a
cached result may be returned, and whether a fresh result is stored,
keeping PRIVATE results scoped to the exact session that produced them.
"""

from query_cache.application.dtos import (
    ExecutionResult,
    GraphQLRequest,
    GraphQLResponse,
    RequestContext,
)
from query_cache.application.options import CacheOptions
from query_cache.application.use_cases import (
    RequestCacheListener,
    ResponseCachePlugin,
    execute_operation,
)
from query_cache.domain import (
    CachePolicy,
    CacheScope,
    OperationType,
    SessionMode,
)
from query_cache.infrastructure.cache import (
    InMemoryKeyValueCache,
    KeyValueCache,
    RedisKeyValueCache,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "CacheOptions",
    "CachePolicy",
    "CacheScope",
    "ExecutionResult",
    "GraphQLRequest",
    "GraphQLResponse",
    "InMemoryKeyValueCache",
    "KeyValueCache",
    "OperationType",
    "RedisKeyValueCache",
    "RequestCacheListener",
    "RequestContext",
    "ResponseCachePlugin",
    "SessionMode",
    "execute_operation",
]
