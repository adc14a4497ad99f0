"""Application use cases: the response cache orchestrator and the request driver."""

from query_cache.application.use_cases.execute_operation import execute_operation
from query_cache.application.use_cases.response_cache import (
    RequestCacheListener,
    ResponseCachePlugin,
)

__all__ = ["execute_operation", "RequestCacheListener", "ResponseCachePlugin"]
