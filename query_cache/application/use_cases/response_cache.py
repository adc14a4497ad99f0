"""Whole-response cache for query operations.

ResponseCachePlugin is built once per server; request_did_start() hands out
a RequestCacheListener that owns all per-request state (session id, key
data, age) and is discarded when the request ends.

Per request:
    1. response_for_operation: capture session id and key data, then look
       up NoSession, or Private followed by AuthenticatedPublic, and return
       the first hit.
    2. will_send_response: on a hit, set the age header and stop. On a miss,
       check cacheability and schedule a background write under the
       contextual key matching the policy scope and session.

Private entries are only ever read or written under the exact session id
that produced them.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from query_cache.application.dtos.request import GraphQLResponse, RequestContext
from query_cache.application.options import CacheOptions
from query_cache.application.services.background_writer import BackgroundWriter
from query_cache.application.services.cacheability_policy import CacheabilityPolicy
from query_cache.application.services.key_derivation import KeyDerivationService
from query_cache.core.constants import AGE_HEADER
from query_cache.domain.exceptions import (
    CacheConfigurationError,
    CacheContractViolation,
    CacheEntryDecodeError,
    KeySerializationError,
)
from query_cache.domain.value_objects import CacheEntry, CachePolicy, ContextualCacheKey
from query_cache.infrastructure.cache.cache_protocol import KeyValueCache
from query_cache.infrastructure.cache.prefixing_cache import PrefixingKeyValueCache
from query_cache.shared.telemetry.tracing import TracedOperation, add_span_attributes
from query_cache.shared.utils.datetime import elapsed_seconds, to_epoch_ms, utc_now

logger = logging.getLogger(__name__)

_PRIVATE_WITHOUT_SESSION_HOOK = (
    "A response used cache hints with scope PRIVATE, but no session_id hook is "
    "configured for the response cache. Not caching."
)


async def _resolve(value: Any) -> Any:
    """Await hook results that are awaitable; pass plain values through."""
    if inspect.isawaitable(value):
        return await value
    return value


class ResponseCachePlugin:
    """Shared, stateless-per-request part of the response cache."""

    def __init__(
        self,
        options: CacheOptions,
        default_cache: KeyValueCache | None = None,
        key_service: KeyDerivationService | None = None,
        cacheability: CacheabilityPolicy | None = None,
    ) -> None:
        """Initialize the plugin.

        Args:
            options: Hooks, store override and limits.
            default_cache: Store used when options.cache is not set.
            key_service: Canonical key derivation (default SHA-256).
            cacheability: Cacheability check (default CacheabilityPolicy).

        Raises:
            CacheConfigurationError: If neither options.cache nor default_cache is given.
        """
        store = options.cache if options.cache is not None else default_cache
        if store is None:
            raise CacheConfigurationError(
                "No key/value store configured: pass options.cache or default_cache."
            )
        self.options = options
        self.cache = PrefixingKeyValueCache(store, options.key_prefix)
        self.keys = key_service or KeyDerivationService()
        self.cacheability = cacheability or CacheabilityPolicy()
        self.writer = BackgroundWriter(options.max_pending_writes)

    def request_did_start(self, context: RequestContext) -> RequestCacheListener:
        """Return a fresh listener for one request."""
        return RequestCacheListener(self)

    async def drain(self) -> None:
        """Wait for in-flight background writes (shutdown, tests)."""
        await self.writer.drain()


class RequestCacheListener:
    """Per-request cache state machine. Never reused across requests."""

    def __init__(self, plugin: ResponseCachePlugin) -> None:
        self._plugin = plugin
        self._options = plugin.options
        self.session_id: str | None = None
        self.cache_key: dict[str, Any] | None = None
        self.age: int | None = None
        self._key_captured = False
        self._caching_disabled = False

    async def response_for_operation(
        self, context: RequestContext
    ) -> GraphQLResponse | None:
        """Return a cached response, or None to let the engine execute."""
        context.metrics.response_cache_hit = False
        if not context.is_query:
            return None

        # Captured before the read gate so a skipped read can still be followed by a write.
        await self._capture_key_material(context)
        if self._caching_disabled:
            return None

        read_gate = self._options.should_read_from_cache
        if read_gate is not None and not await _resolve(read_gate(context)):
            return None

        with TracedOperation("query_cache.lookup"):
            for contextual in self._lookup_order():
                response = await self._cache_get(context, contextual)
                if response is not None:
                    add_span_attributes(
                        **{
                            "cache.hit": True,
                            "cache.session_mode": contextual.session_mode.name,
                        }
                    )
                    return response
            add_span_attributes(**{"cache.hit": False})
        return None

    async def will_send_response(self, context: RequestContext) -> None:
        """Set the age header after a hit, or decide on and schedule a write after a miss."""
        if not context.is_query:
            return
        if context.metrics.response_cache_hit:
            # Never write back what was just read.
            if context.response is not None and self.age is not None:
                context.response.http.headers.set(AGE_HEADER, str(self.age))
            return

        channel = context.logger or logger
        write_gate = self._options.should_write_to_cache
        if write_gate is not None and not await _resolve(write_gate(context)):
            return

        decision = self._plugin.cacheability.evaluate(context)
        if not decision.cacheable or decision.policy is None:
            channel.debug("Response not cached: %s", decision.reason)
            return

        if not self._key_captured:
            raise CacheContractViolation(
                "will_send_response reached a cacheable response, but "
                "response_for_operation never captured the cache key"
            )
        if self._caching_disabled:
            return

        policy = decision.policy
        if policy.is_private:
            if self._options.session_id is None:
                channel.warning(_PRIVATE_WITHOUT_SESSION_HOOK)
                return
            if self.session_id is None:
                # Private data is never cached for anonymous callers.
                return
            self._cache_set_in_background(
                context, ContextualCacheKey.private(self.session_id), policy
            )
        elif self.session_id is None:
            self._cache_set_in_background(context, ContextualCacheKey.no_session(), policy)
        else:
            self._cache_set_in_background(
                context, ContextualCacheKey.authenticated_public(), policy
            )

    async def _capture_key_material(self, context: RequestContext) -> None:
        if self._options.session_id is not None:
            session_id = await _resolve(self._options.session_id(context))
            # Only None and "" mean anonymous; ids like 0 still scope private entries.
            self.session_id = (
                None if session_id is None or session_id == "" else str(session_id)
            )

        key_data = await _resolve(self._options.cache_key(context))
        self._key_captured = True
        try:
            if not isinstance(key_data, Mapping):
                raise KeySerializationError(
                    f"cache_key hook returned {type(key_data).__name__}, expected a mapping"
                )
            self.cache_key = dict(key_data)
            # Fail now rather than at write time if the key data cannot be serialized.
            self._plugin.keys.derive_key(self.cache_key, ContextualCacheKey.no_session())
        except KeySerializationError as e:
            self._disable_caching(context, e)

    def _disable_caching(self, context: RequestContext, error: KeySerializationError) -> None:
        self._caching_disabled = True
        (context.logger or logger).warning(
            "Response caching skipped for this request: %s", error.message
        )

    def _lookup_order(self) -> list[ContextualCacheKey]:
        """Contextual keys to try, highest priority first."""
        if self.session_id is None:
            return [ContextualCacheKey.no_session()]
        return [
            ContextualCacheKey.private(self.session_id),
            ContextualCacheKey.authenticated_public(),
        ]

    async def _cache_get(
        self, context: RequestContext, contextual: ContextualCacheKey
    ) -> GraphQLResponse | None:
        channel = context.logger or logger
        if self.cache_key is None:
            return None
        key = self._plugin.keys.derive_key(self.cache_key, contextual)
        try:
            serialized = await self._plugin.cache.get(key)
        except CacheContractViolation:
            raise
        except Exception as e:
            # Fail-open: a broken store reads as a miss.
            channel.warning("Response cache read failed, treating as miss: %s", e)
            return None
        if serialized is None:
            channel.debug("Cache MISS: %s (%s)", key, contextual.session_mode.name)
            return None
        try:
            entry = CacheEntry.from_json(serialized)
        except CacheEntryDecodeError as e:
            channel.warning("Ignoring unreadable cache entry %s: %s", key, e.message)
            return None

        channel.debug("Cache HIT: %s (%s)", key, contextual.session_mode.name)
        context.overall_cache_policy = entry.cache_policy
        context.metrics.response_cache_hit = True
        self.age = elapsed_seconds(entry.cache_time, utc_now())
        return GraphQLResponse(data=entry.data)

    def _cache_set_in_background(
        self,
        context: RequestContext,
        contextual: ContextualCacheKey,
        policy: CachePolicy,
    ) -> bool:
        """Serialize now, write later.

        Key and value are computed before returning so later mutation of the
        response cannot change what is stored. Returns True if a write was scheduled.
        """
        channel = context.logger or logger
        if self.cache_key is None or context.response is None:
            return False
        with TracedOperation(
            "query_cache.write",
            {"cache.session_mode": contextual.session_mode.name, "cache.max_age": policy.max_age},
        ):
            try:
                key = self._plugin.keys.derive_key(self.cache_key, contextual)
                serialized = CacheEntry(
                    data=context.response.data,
                    cache_policy=policy,
                    cache_time=to_epoch_ms(utc_now()),
                ).to_json()
            except KeySerializationError as e:
                channel.warning("Response not cached: %s", e.message)
                return False
            except (TypeError, ValueError) as e:
                channel.warning("Response data is not JSON-serializable, not cached: %s", e)
                return False

            max_bytes = self._options.max_entry_bytes
            size = len(serialized.encode())
            if max_bytes is not None and size > max_bytes:
                channel.warning(
                    "Response not cached: entry is %s bytes, limit is %s", size, max_bytes
                )
                return False

            return self._plugin.writer.spawn(
                self._plugin.cache.set(key, serialized, ttl=policy.max_age),
                channel,
                "Response cache write",
            )
