"""Fire-and-forget execution of cache writes.

The response path only spawns; it never awaits a write or sees its result.
Failures go to the error channel (a logger) supplied with each write.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from query_cache.core.constants import DEFAULT_MAX_PENDING_WRITES

logger = logging.getLogger(__name__)


class BackgroundWriter:
    """Tracks detached write tasks with a bound on how many may be in flight."""

    def __init__(self, max_pending: int = DEFAULT_MAX_PENDING_WRITES) -> None:
        if max_pending <= 0:
            raise ValueError("max_pending must be positive")
        self.max_pending = max_pending
        # Strong references; the event loop only keeps weak ones.
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(
        self,
        coro: Coroutine[Any, Any, Any],
        error_channel: logging.Logger | None = None,
        description: str = "cache write",
    ) -> bool:
        """Schedule coro as a detached task.

        Returns:
            True if scheduled; False if the in-flight limit was reached (coro is closed).
        """
        channel = error_channel or logger
        if len(self._tasks) >= self.max_pending:
            coro.close()
            channel.warning(
                "Dropping %s: %s background writes already in flight",
                description,
                len(self._tasks),
            )
            return False
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._on_done(t, channel, description))
        return True

    def _on_done(
        self, task: asyncio.Task[Any], channel: logging.Logger, description: str
    ) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            channel.debug("%s cancelled", description)
            return
        exc = task.exception()
        if exc is not None:
            channel.warning(
                "%s failed: %s", description, exc, exc_info=(type(exc), exc, exc.__traceback__)
            )

    async def drain(self) -> None:
        """Wait for all in-flight writes (failures are already logged by _on_done)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
