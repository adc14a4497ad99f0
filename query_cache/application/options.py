"""Typed configuration for the response cache plugin.

Every optional behavior is an explicit field; a hook that is not configured
is None, never a stand-in default object.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from query_cache.application.interfaces.services import (
    CacheKeyHook,
    CachePredicate,
    SessionIdHook,
)
from query_cache.core.config import Settings
from query_cache.core.constants import (
    CACHE_KEY_PREFIX,
    DEFAULT_MAX_ENTRY_BYTES,
    DEFAULT_MAX_PENDING_WRITES,
)
from query_cache.infrastructure.cache.cache_protocol import KeyValueCache


@dataclass(frozen=True)
class CacheOptions:
    """Hooks, store override and limits for ResponseCachePlugin.

    Attributes:
        cache_key: Returns the caller's key data for a request (e.g. operation
            name and variables). Must be stable for the same logical request.
        session_id: Returns the session id of the current user, or None when
            anonymous. Required for PRIVATE responses to be cached at all.
        should_read_from_cache: When it returns False, the lookup is skipped;
            a write may still happen.
        should_write_to_cache: When it returns False, the write is skipped.
        cache: Store to use instead of the plugin's default store.
        key_prefix: Namespace prepended to every canonical key.
        max_entry_bytes: Serialized entries larger than this are not written (None = unbounded).
        max_pending_writes: Writes are dropped while this many are still in flight.
    """

    cache_key: CacheKeyHook
    session_id: SessionIdHook | None = None
    should_read_from_cache: CachePredicate | None = None
    should_write_to_cache: CachePredicate | None = None
    cache: KeyValueCache | None = None
    key_prefix: str = CACHE_KEY_PREFIX
    max_entry_bytes: int | None = DEFAULT_MAX_ENTRY_BYTES
    max_pending_writes: int = DEFAULT_MAX_PENDING_WRITES

    def __post_init__(self) -> None:
        if not callable(self.cache_key):
            raise TypeError("cache_key hook is required and must be callable")
        if not self.key_prefix:
            raise ValueError("key_prefix must be a non-empty string")
        if self.max_pending_writes <= 0:
            raise ValueError("max_pending_writes must be positive")
        if self.max_entry_bytes is not None and self.max_entry_bytes <= 0:
            raise ValueError("max_entry_bytes must be positive or None")

    def apply_settings(self, settings: Settings) -> CacheOptions:
        """Return options with prefix and limits taken from settings.

        Only fields still at their defaults are replaced; values the caller
        set explicitly win over settings.
        """
        overrides: dict[str, object] = {}
        if self.key_prefix == CACHE_KEY_PREFIX:
            overrides["key_prefix"] = settings.cache_key_prefix
        if self.max_entry_bytes == DEFAULT_MAX_ENTRY_BYTES:
            overrides["max_entry_bytes"] = settings.cache_max_entry_bytes
        if self.max_pending_writes == DEFAULT_MAX_PENDING_WRITES:
            overrides["max_pending_writes"] = settings.cache_max_pending_writes
        return replace(self, **overrides)
