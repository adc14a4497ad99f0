"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the response cache plugin and the query
engine, both built once in the lifespan and kept on app.state.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from query_cache.application.interfaces.services import QueryEngine
from query_cache.application.use_cases.response_cache import ResponseCachePlugin


def get_cache_plugin(request: Request) -> ResponseCachePlugin:
    """Response cache plugin created at startup."""
    plugin = getattr(request.app.state, "cache_plugin", None)
    if plugin is None:
        raise HTTPException(status_code=503, detail="Response cache not initialized")
    return plugin


def get_query_engine(request: Request) -> QueryEngine:
    """Query engine passed to create_app()."""
    engine = getattr(request.app.state, "query_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Query engine not configured")
    return engine
