"""Domain exceptions for the response cache.

Only CacheContractViolation is meant to escape a request: the others are
caught by the orchestrator, logged, and turn into "no caching" for the
request that hit them.
"""

from typing import Any


class QueryCacheException(Exception):
    """Base exception for all response cache errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error body."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class KeySerializationError(QueryCacheException):
    """Raised when cache key material cannot be serialized canonically."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Cache key data is not serializable: {reason}",
            "KEY_SERIALIZATION_ERROR",
            {"reason": reason},
        )


class CacheConfigurationError(QueryCacheException):
    """Raised when the cache is wired incorrectly (e.g. no store available)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "CACHE_CONFIGURATION_ERROR")


class CacheEntryDecodeError(QueryCacheException):
    """Raised when a stored entry does not match the expected wire format."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Stored cache entry could not be decoded: {reason}",
            "CACHE_ENTRY_DECODE_ERROR",
            {"reason": reason},
        )


class CacheContractViolation(QueryCacheException):
    """Raised when a write is attempted without captured key material.

    Never caught by the cache itself: silently skipping it could hide a
    session-scoping bug.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, "CACHE_CONTRACT_VIOLATION")
