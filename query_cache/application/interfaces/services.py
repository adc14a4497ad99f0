"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators the cache does not own:
the query engine and the caller-supplied hooks.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias

if TYPE_CHECKING:
    from query_cache.application.dtos.request import (
        ExecutionResult,
        GraphQLRequest,
        RequestContext,
    )
    from query_cache.domain.enums import OperationType

# Hooks may answer synchronously or return an awaitable.
SessionIdHook: TypeAlias = "Callable[[RequestContext], str | None | Awaitable[str | None]]"
CacheKeyHook: TypeAlias = (
    "Callable[[RequestContext], Mapping[str, Any] | Awaitable[Mapping[str, Any]]]"
)
CachePredicate: TypeAlias = "Callable[[RequestContext], bool | Awaitable[bool]]"


# Query engine interface
class QueryEngine(Protocol):
    """Parses and executes operations; supplies the cache policy of each result."""

    def operation_type(self, request: GraphQLRequest) -> OperationType | None:
        """Return the top-level operation kind, or None if it cannot be resolved."""

    async def execute(self, context: RequestContext) -> ExecutionResult:
        """Execute the operation and return data/errors plus its cache policy."""
