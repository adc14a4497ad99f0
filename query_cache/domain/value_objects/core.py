"""Domain value objects for the response cache.

Value objects are immutable and validate themselves. CachePolicy and
CacheEntry also own the JSON wire format of stored entries, which stays
compatible with entries written by other implementations of the same
"fqc:" namespace.
"""

import json
from dataclasses import dataclass
from typing import Any

from query_cache.core.constants import (
    ENTRY_CACHE_POLICY_FIELD,
    ENTRY_CACHE_TIME_FIELD,
    ENTRY_DATA_FIELD,
    SESSION_ID_FIELD,
    SESSION_MODE_FIELD,
)
from query_cache.domain.enums import CacheScope, SessionMode
from query_cache.domain.exceptions import CacheEntryDecodeError


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class CachePolicy:
    """Cache hint for a whole response: privacy scope and max age in seconds."""

    scope: CacheScope
    max_age: int

    def __post_init__(self) -> None:
        if not isinstance(self.scope, CacheScope):
            raise ValueError(f"scope must be a CacheScope, got: {self.scope!r}")
        if not _is_int(self.max_age):
            raise ValueError(f"max_age must be an integer, got: {self.max_age!r}")

    @property
    def is_private(self) -> bool:
        return self.scope == CacheScope.PRIVATE

    def to_dict(self) -> dict[str, Any]:
        return {"maxAge": self.max_age, "scope": self.scope.value}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "CachePolicy":
        """Build from the stored {"maxAge", "scope"} mapping.

        Raises:
            ValueError: If scope is unknown or maxAge is missing or not an int.
        """
        try:
            scope = CacheScope(raw.get("scope", CacheScope.PUBLIC.value))
        except ValueError as e:
            raise ValueError(f"unknown cache scope {raw.get('scope')!r}") from e
        return cls(scope=scope, max_age=raw.get("maxAge"))


@dataclass(frozen=True)
class ContextualCacheKey:
    """Session-scoping fragment merged into every canonical key.

    Only PRIVATE carries a session id; the other modes must not.
    """

    session_mode: SessionMode
    session_id: str | None = None

    def __post_init__(self) -> None:
        if self.session_mode == SessionMode.PRIVATE:
            if not self.session_id:
                raise ValueError("session_id is required when session_mode is PRIVATE")
        elif self.session_id is not None:
            raise ValueError(
                f"session_id must be None when session_mode is {self.session_mode.name}"
            )

    @classmethod
    def no_session(cls) -> "ContextualCacheKey":
        return cls(SessionMode.NO_SESSION)

    @classmethod
    def private(cls, session_id: str) -> "ContextualCacheKey":
        return cls(SessionMode.PRIVATE, session_id)

    @classmethod
    def authenticated_public(cls) -> "ContextualCacheKey":
        return cls(SessionMode.AUTHENTICATED_PUBLIC)

    def as_dict(self) -> dict[str, Any]:
        """Key fields as merged into the base key data."""
        fields: dict[str, Any] = {SESSION_MODE_FIELD: int(self.session_mode)}
        if self.session_id is not None:
            fields[SESSION_ID_FIELD] = self.session_id
        return fields


@dataclass(frozen=True)
class CacheEntry:
    """Stored response: data, the policy it was cached under, and epoch-millis store time."""

    data: dict[str, Any]
    cache_policy: CachePolicy
    cache_time: int

    def to_json(self) -> str:
        """Serialize to the stored wire format.

        Raises:
            TypeError: If data is not JSON-serializable.
        """
        return json.dumps(
            {
                ENTRY_DATA_FIELD: self.data,
                ENTRY_CACHE_POLICY_FIELD: self.cache_policy.to_dict(),
                ENTRY_CACHE_TIME_FIELD: self.cache_time,
            }
        )

    @classmethod
    def from_json(cls, serialized: str) -> "CacheEntry":
        """Parse a stored entry.

        Raises:
            CacheEntryDecodeError: If the value is not a well-formed entry.
        """
        try:
            raw = json.loads(serialized)
        except (TypeError, ValueError) as e:
            raise CacheEntryDecodeError(f"invalid JSON ({e})") from e
        if not isinstance(raw, dict):
            raise CacheEntryDecodeError("entry is not a JSON object")
        data = raw.get(ENTRY_DATA_FIELD)
        policy = raw.get(ENTRY_CACHE_POLICY_FIELD)
        cache_time = raw.get(ENTRY_CACHE_TIME_FIELD)
        if not isinstance(data, dict):
            raise CacheEntryDecodeError("missing or non-object data")
        if not isinstance(policy, dict):
            raise CacheEntryDecodeError("missing or non-object cachePolicy")
        if not isinstance(cache_time, (int, float)) or isinstance(cache_time, bool):
            raise CacheEntryDecodeError("missing or non-numeric cacheTime")
        try:
            cache_policy = CachePolicy.from_dict(policy)
        except ValueError as e:
            raise CacheEntryDecodeError(str(e)) from e
        return cls(data=data, cache_policy=cache_policy, cache_time=int(cache_time))


@dataclass(frozen=True)
class CacheDecision:
    """Outcome of the cacheability check: either not cacheable, or a policy to store under."""

    cacheable: bool
    policy: CachePolicy | None = None
    reason: str | None = None

    @classmethod
    def no(cls, reason: str) -> "CacheDecision":
        return cls(cacheable=False, reason=reason)

    @classmethod
    def yes(cls, policy: CachePolicy) -> "CacheDecision":
        return cls(cacheable=True, policy=policy)
