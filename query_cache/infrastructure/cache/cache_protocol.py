"""Key/value store protocol consumed by the response cache (DIP)."""

from typing import Protocol


class KeyValueCache(Protocol):
    """String-to-string store with per-key TTL (e.g. Redis, in-memory)."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Store value, expiring after ttl seconds when given."""
        ...
