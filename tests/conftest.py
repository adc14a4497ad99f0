"""Pytest configuration and fixtures for query_cache.

Redis is disabled for the whole test session; tests use the in-memory
store (wrapped to record calls) and a fake query engine that returns a
fixed ExecutionResult.
"""

import os
from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

from query_cache.application.options import CacheOptions  # noqa: E402
from query_cache.application.use_cases.response_cache import ResponseCachePlugin  # noqa: E402
from query_cache.core.config import get_settings  # noqa: E402
from query_cache.main import create_app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeEngine,
    RecordingCache,
    operation_name_key,
    public_result,
    session_from_header,
)

get_settings.cache_clear()


@pytest.fixture
def store() -> RecordingCache:
    return RecordingCache()


@pytest.fixture
def make_plugin(store: RecordingCache) -> Callable[..., ResponseCachePlugin]:
    """Build a plugin over the recording store; keyword args go to CacheOptions."""

    def _make(**overrides: Any) -> ResponseCachePlugin:
        overrides.setdefault("cache_key", operation_name_key)
        return ResponseCachePlugin(CacheOptions(**overrides), default_cache=store)

    return _make


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine(public_result())


@pytest.fixture
async def app(engine: FakeEngine, store: RecordingCache) -> FastAPI:
    """App wired to the fake engine and recording store, with startup/shutdown run."""
    application = create_app(
        engine,
        CacheOptions(
            cache_key=lambda ctx: {
                "operationName": ctx.request.operation_name,
                "variables": ctx.request.variables or {},
            },
            session_id=session_from_header,
            cache=store,
        ),
    )
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client for the app (ASGI, no network)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
