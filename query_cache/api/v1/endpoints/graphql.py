"""GraphQL endpoint: runs each operation through the response cache."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from query_cache.api.v1.dependencies import get_cache_plugin, get_query_engine
from query_cache.application.dtos.request import GraphQLRequest, Headers, RequestContext
from query_cache.application.interfaces.services import QueryEngine
from query_cache.application.use_cases.execute_operation import execute_operation
from query_cache.application.use_cases.response_cache import ResponseCachePlugin
from query_cache.schemas.graphql import GraphQLRequestBody, GraphQLResponseBody

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=GraphQLResponseBody)
async def graphql(
    body: GraphQLRequestBody,
    request: Request,
    plugin: Annotated[ResponseCachePlugin, Depends(get_cache_plugin)],
    engine: Annotated[QueryEngine, Depends(get_query_engine)],
) -> JSONResponse:
    """Execute a GraphQL operation; cached responses carry an age header."""
    context = RequestContext(
        request=GraphQLRequest(
            query=body.query,
            operation_name=body.operation_name,
            variables=body.variables,
            headers=Headers(dict(request.headers)),
        ),
        logger=logger,
    )
    response = await execute_operation(plugin, context, engine)
    return JSONResponse(
        content=response.to_dict(),
        headers=response.http.headers.to_dict(),
    )
