"""Drive one request through the response cache and the query engine."""

from __future__ import annotations

from query_cache.application.dtos.request import GraphQLResponse, RequestContext
from query_cache.application.interfaces.services import QueryEngine
from query_cache.application.use_cases.response_cache import ResponseCachePlugin
from query_cache.shared.telemetry.tracing import traced


@traced("query_cache.execute_operation")
async def execute_operation(
    plugin: ResponseCachePlugin,
    context: RequestContext,
    engine: QueryEngine,
) -> GraphQLResponse:
    """Serve from cache when possible, otherwise execute; then let the cache decide on a write.

    The engine's cache policy becomes the overall policy of a freshly executed
    response. A cached response carries the policy restored from the entry.
    """
    if context.operation_type is None:
        context.operation_type = engine.operation_type(context.request)

    listener = plugin.request_did_start(context)
    response = await listener.response_for_operation(context)
    if response is None:
        result = await engine.execute(context)
        response = GraphQLResponse(data=result.data, errors=result.errors)
        context.overall_cache_policy = result.cache_policy
    context.response = response

    await listener.will_send_response(context)
    return response
