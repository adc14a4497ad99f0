"""FastAPI application factory.

Wiring only: lifespan, exception handlers, routers. The query engine and
the cache hooks come from the caller; this package never parses or
executes GraphQL itself.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before building an app.
"""

from fastapi import FastAPI

from query_cache.api.v1 import api_router
from query_cache.application.interfaces.services import QueryEngine
from query_cache.application.options import CacheOptions
from query_cache.core.config import get_settings
from query_cache.core.exception_handlers import register_exception_handlers
from query_cache.core.lifespan import create_lifespan
from query_cache.shared.telemetry.logging import setup_logging


def create_app(engine: QueryEngine, options: CacheOptions) -> FastAPI:
    """Build the FastAPI application serving POST /api/v1/graphql through the response cache.

    Args:
        engine: Executes operations and reports their cache policy.
        options: Cache hooks; options.cache overrides the store picked from settings.
    """
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.query_engine = engine
    app.state.cache_options = options

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    return app
