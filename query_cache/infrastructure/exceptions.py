"""Infrastructure exceptions for key/value store operations.

Store errors extend QueryCacheException so callers can log them with the
same error_code/details shape as domain errors.
"""

from query_cache.domain.exceptions import QueryCacheException


class StoreError(QueryCacheException):
    """A key/value store command failed (after any reconnect attempt)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Cache store {operation} failed: {reason}",
            "STORE_ERROR",
            {"operation": operation, "reason": reason},
        )
