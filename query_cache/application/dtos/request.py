"""DTOs for one GraphQL request as seen by the response cache.

RequestContext is created per request and never shared; the cache reads
the operation type and writes the response, policy and hit flag on it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from query_cache.domain.enums import OperationType
from query_cache.domain.value_objects import CachePolicy


class Headers:
    """Case-insensitive header map (names are stored lowercased)."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._items: dict[str, str] = {}
        for name, value in (initial or {}).items():
            self.set(name, value)

    def set(self, name: str, value: str) -> None:
        self._items[name.lower()] = value

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._items.get(name.lower(), default)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def to_dict(self) -> dict[str, str]:
        return dict(self._items)


@dataclass
class GraphQLRequest:
    """Incoming operation: document, operation name, variables and transport headers."""

    query: str
    operation_name: str | None = None
    variables: dict[str, Any] | None = None
    headers: Headers = field(default_factory=Headers)


@dataclass
class HTTPResponseMeta:
    """HTTP-level part of a response (headers only)."""

    headers: Headers = field(default_factory=Headers)


@dataclass
class GraphQLResponse:
    """Response sent to the client. Only data responses are ever cached."""

    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None
    http: HTTPResponseMeta = field(default_factory=HTTPResponseMeta)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"data": self.data}
        if self.errors:
            body["errors"] = self.errors
        return body


@dataclass(frozen=True)
class ExecutionResult:
    """What the query engine hands back after executing an operation."""

    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None
    cache_policy: CachePolicy | None = None


@dataclass
class RequestMetrics:
    """Per-request flags reported by the cache."""

    response_cache_hit: bool = False


@dataclass
class RequestContext:
    """Request-scoped state shared between the query engine, hooks and the cache.

    Attributes:
        request: The incoming operation.
        operation_type: Top-level operation kind, or None if the engine could not resolve it.
        response: Set once a cached or executed response exists.
        overall_cache_policy: Policy for the whole response (from engine, or restored on hit).
        metrics: Hit flag and other per-request metrics.
        logger: Caller's logging channel; the cache falls back to its own logger.
        state: Free-form values for hooks (e.g. authenticated user).
    """

    request: GraphQLRequest
    operation_type: OperationType | None = None
    response: GraphQLResponse | None = None
    overall_cache_policy: CachePolicy | None = None
    metrics: RequestMetrics = field(default_factory=RequestMetrics)
    logger: logging.Logger | None = None
    state: dict[str, Any] = field(default_factory=dict)

    @property
    def is_query(self) -> bool:
        return self.operation_type == OperationType.QUERY
