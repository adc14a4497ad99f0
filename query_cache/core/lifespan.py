"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Builds the key/value store
and the response cache plugin from settings plus the CacheOptions handed
to create_app(); no business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from query_cache.application.use_cases.response_cache import ResponseCachePlugin
from query_cache.core.config import get_settings
from query_cache.infrastructure.cache import InMemoryKeyValueCache, RedisKeyValueCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: telemetry (if enabled), key/value store (Redis if
    enabled, else in-memory), response cache plugin. Shutdown order:
    drain background writes, store disconnect, telemetry shutdown.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.telemetry_enabled:
        from query_cache.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        if settings.redis_enabled:
            telemetry.instrument_redis()
        logger.info("Telemetry initialized")

    options = app.state.cache_options.apply_settings(settings)
    if options.cache is not None:
        store = options.cache
    elif settings.redis_enabled:
        store = RedisKeyValueCache(settings=settings)
        await store.connect()
    else:
        store = InMemoryKeyValueCache(max_entries=settings.memory_cache_max_entries)
        logger.info("Redis disabled; using in-memory response cache")
    app.state.cache_store = store
    app.state.cache_plugin = ResponseCachePlugin(options, default_cache=store)

    yield

    # ---- Shutdown ----
    plugin = getattr(app.state, "cache_plugin", None)
    if plugin is not None:
        await plugin.drain()
        logger.info("Background cache writes drained")

    if isinstance(store, RedisKeyValueCache):
        await store.disconnect()
        logger.info("Cache disconnected")

    from query_cache.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
