"""Health check endpoints; used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from query_cache.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Store unavailable", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the response cache store is available, 503 otherwise.

    A store without is_available() (custom KeyValueCache) is assumed ready.
    """
    store = getattr(request.app.state, "cache_store", None)
    if store is None:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message="Response cache not initialized").model_dump(),
        )
    is_available = getattr(store, "is_available", None)
    if is_available is not None and not is_available():
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                message=f"{type(store).__name__} unavailable"
            ).model_dump(),
        )
    return ReadinessResponse(store=type(store).__name__)
