"""Application DTOs (request context and execution results)."""

from query_cache.application.dtos.request import (
    ExecutionResult,
    GraphQLRequest,
    GraphQLResponse,
    Headers,
    HTTPResponseMeta,
    RequestContext,
    RequestMetrics,
)

__all__ = [
    "ExecutionResult",
    "GraphQLRequest",
    "GraphQLResponse",
    "Headers",
    "HTTPResponseMeta",
    "RequestContext",
    "RequestMetrics",
]
