"""
UTC datetime utilities for consistent timezone handling.

Cache entries record their store time as epoch milliseconds; use these
helpers instead of datetime.now() or time.time() so tests can patch one place.
"""

import math
from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def to_epoch_ms(dt: datetime) -> int:
    """
    Convert a datetime to integer epoch milliseconds.
    Naive datetimes are assumed to be UTC.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        Milliseconds since the Unix epoch
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)


def elapsed_seconds(since_ms: int, now: datetime) -> int:
    """
    Whole seconds elapsed since an epoch-millis timestamp, rounded half-up.
    Clamped at 0 so clock skew between writers never yields a negative age.

    Args:
        since_ms: Earlier timestamp in epoch milliseconds
        now: Current time

    Returns:
        Non-negative whole seconds
    """
    return max(0, math.floor((to_epoch_ms(now) - since_ms) / 1000 + 0.5))
