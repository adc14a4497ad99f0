"""Redis-backed key/value store for cached responses.

Provides async Redis get/set with per-key TTL (SETEX). Values are stored as
the already-serialized strings handed in by the response cache; this module
does no JSON handling of its own.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import redis.asyncio as redis

from query_cache.core.config import Settings, get_settings
from query_cache.infrastructure.exceptions import StoreError

logger = logging.getLogger(__name__)


class RedisKeyValueCache:
    """Async Redis key/value store with TTL support.

    Call connect() at startup and disconnect() at shutdown. While
    disconnected, get() reports a miss and set() is skipped. Connection
    errors trigger one reconnect and retry; if that fails, StoreError is
    raised and the caller decides how to degrade. After a failed connect,
    get() and set() try again once the reconnect cooldown has passed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the store.

        Args:
            redis_client: Optional Redis client for testing or DI. Treated as connected.
            settings: Optional settings; defaults to get_settings().
            timer: Monotonic clock in seconds for the reconnect cooldown.
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None
        self._timer = timer
        # Earliest time of the next connect attempt; None until a connect fails.
        self._retry_after: float | None = None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=(
                self.settings.redis_password.get_secret_value()
                if self.settings.redis_password
                else None
            ),
            decode_responses=True,
            socket_connect_timeout=self.settings.redis_socket_connect_timeout,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Response cache disabled.", e)
            await client.aclose()
            self._connected = False
            self._retry_after = (
                self._timer() + self.settings.redis_reconnect_cooldown_seconds
            )
            return
        self.redis = client
        self._connected = True
        self._retry_after = None
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _ensure_connected(self) -> bool:
        """Return availability, retrying a failed connect once the cooldown has passed."""
        if self.is_available():
            return True
        if self._retry_after is None or self._timer() < self._retry_after:
            return False
        logger.info("Retrying Redis connection")
        await self.connect()
        return self.is_available()

    async def get(self, key: str) -> str | None:
        """Return the stored string, or None if missing or Redis is unavailable.

        Raises:
            StoreError: If the command fails, including after one reconnect.
        """
        if not await self._ensure_connected() or self.redis is None:
            return None
        try:
            return await self.redis.get(key)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect() and self.redis is not None:
                try:
                    return await self.redis.get(key)
                except redis.RedisError as retry_error:
                    raise StoreError("get", str(retry_error)) from retry_error
            raise StoreError("get", f"Redis disconnected ({e})") from e
        except redis.RedisError as e:
            raise StoreError("get", str(e)) from e

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Store value, with SETEX when ttl is given.

        Raises:
            StoreError: If the command fails, including after one reconnect.
        """
        if not await self._ensure_connected() or self.redis is None:
            logger.debug("Cache set skipped for key %s (Redis unavailable)", key)
            return
        try:
            await self._write(key, value, ttl)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect():
                try:
                    await self._write(key, value, ttl)
                    return
                except redis.RedisError as retry_error:
                    raise StoreError("set", str(retry_error)) from retry_error
            raise StoreError("set", f"Redis disconnected ({e})") from e
        except redis.RedisError as e:
            raise StoreError("set", str(e)) from e
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def _write(self, key: str, value: str, ttl: int | None) -> None:
        if self.redis is None:
            raise redis.ConnectionError("Redis client is not connected")
        if ttl is not None:
            await self.redis.setex(key, ttl, value)
        else:
            await self.redis.set(key, value)
