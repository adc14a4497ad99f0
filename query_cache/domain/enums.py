"""Domain enumerations for the response cache.

SessionMode is part of every canonical key; CacheScope and OperationType
come from the query engine and are only consumed here.
"""

from enum import Enum, IntEnum


class SessionMode(IntEnum):
    """Session scope of a cache entry. Serialized as its integer value in keys."""

    NO_SESSION = 0
    PRIVATE = 1
    AUTHENTICATED_PUBLIC = 2


class CacheScope(str, Enum):
    """Privacy scope declared by a response's cache hint."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class OperationType(str, Enum):
    """Top-level operation kind; only QUERY is ever cached."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"
