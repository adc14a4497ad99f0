"""Shared utilities: datetime helpers."""

from query_cache.shared.utils.datetime import (
    elapsed_seconds,
    to_epoch_ms,
    utc_now,
)

__all__ = [
    "utc_now",
    "to_epoch_ms",
    "elapsed_seconds",
]
