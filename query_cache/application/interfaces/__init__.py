"""Application ports: query engine protocol and hook signatures."""

from query_cache.application.interfaces.services import (
    CacheKeyHook,
    CachePredicate,
    QueryEngine,
    SessionIdHook,
)

__all__ = ["CacheKeyHook", "CachePredicate", "QueryEngine", "SessionIdHook"]
