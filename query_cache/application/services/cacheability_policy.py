"""Decides whether a finished response may be stored, and under which policy.

Errors are never cached: they often reflect transient failures, and only
the data part of a response has a stable shape worth storing.
"""

from __future__ import annotations

from query_cache.application.dtos.request import RequestContext
from query_cache.domain.value_objects import CacheDecision


class CacheabilityPolicy:
    """Stateless cacheability check over a request's response and overall policy."""

    def evaluate(self, context: RequestContext) -> CacheDecision:
        """Return CacheDecision.yes(policy) only for error-free query data with max_age > 0.

        Scope is taken verbatim from the overall policy; nothing is inferred.
        """
        if not context.is_query:
            return CacheDecision.no("not a query operation")
        response = context.response
        if response is None:
            return CacheDecision.no("no response")
        if response.errors:
            return CacheDecision.no("response has errors")
        if response.data is None:
            return CacheDecision.no("response has no data")
        policy = context.overall_cache_policy
        if policy is None:
            return CacheDecision.no("no cache policy")
        if policy.max_age <= 0:
            return CacheDecision.no("max_age is not positive")
        return CacheDecision.yes(policy)
