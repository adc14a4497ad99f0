"""Tests for domain value objects (CachePolicy, ContextualCacheKey, CacheEntry, CacheDecision)."""

import json

import pytest

from query_cache.domain.enums import CacheScope, SessionMode
from query_cache.domain.exceptions import CacheEntryDecodeError
from query_cache.domain.value_objects import (
    CacheDecision,
    CacheEntry,
    CachePolicy,
    ContextualCacheKey,
)


class TestCachePolicy:
    """CachePolicy: CacheScope plus integer max_age; stored as {maxAge, scope}."""

    def test_to_dict(self) -> None:
        assert CachePolicy(CacheScope.PRIVATE, 30).to_dict() == {"maxAge": 30, "scope": "PRIVATE"}

    def test_is_private(self) -> None:
        assert CachePolicy(CacheScope.PRIVATE, 1).is_private is True
        assert CachePolicy(CacheScope.PUBLIC, 1).is_private is False

    def test_string_scope_rejected(self) -> None:
        with pytest.raises(ValueError, match="CacheScope"):
            CachePolicy("PUBLIC", 10)  # type: ignore[arg-type]

    def test_non_int_max_age_rejected(self) -> None:
        with pytest.raises(ValueError, match="integer"):
            CachePolicy(CacheScope.PUBLIC, 1.5)  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="integer"):
            CachePolicy(CacheScope.PUBLIC, True)  # type: ignore[arg-type]

    def test_from_dict_defaults_scope_to_public(self) -> None:
        assert CachePolicy.from_dict({"maxAge": 5}) == CachePolicy(CacheScope.PUBLIC, 5)

    def test_from_dict_unknown_scope_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown cache scope"):
            CachePolicy.from_dict({"maxAge": 5, "scope": "SHARED"})


class TestContextualCacheKey:
    """Only PRIVATE carries a session id."""

    def test_no_session(self) -> None:
        key = ContextualCacheKey.no_session()
        assert key.session_mode == SessionMode.NO_SESSION
        assert key.as_dict() == {"sessionMode": 0}

    def test_private(self) -> None:
        key = ContextualCacheKey.private("user-1")
        assert key.as_dict() == {"sessionMode": 1, "sessionId": "user-1"}

    def test_authenticated_public(self) -> None:
        assert ContextualCacheKey.authenticated_public().as_dict() == {"sessionMode": 2}

    def test_private_requires_session_id(self) -> None:
        with pytest.raises(ValueError, match="required"):
            ContextualCacheKey(SessionMode.PRIVATE)
        with pytest.raises(ValueError, match="required"):
            ContextualCacheKey(SessionMode.PRIVATE, "")

    def test_session_id_rejected_for_shared_modes(self) -> None:
        with pytest.raises(ValueError, match="must be None"):
            ContextualCacheKey(SessionMode.NO_SESSION, "user-1")
        with pytest.raises(ValueError, match="must be None"):
            ContextualCacheKey(SessionMode.AUTHENTICATED_PUBLIC, "user-1")


class TestCacheEntry:
    """CacheEntry wire format: {data, cachePolicy, cacheTime}."""

    def test_to_json_layout(self) -> None:
        entry = CacheEntry({"a": 1}, CachePolicy(CacheScope.PUBLIC, 10), 1700000000000)
        assert json.loads(entry.to_json()) == {
            "data": {"a": 1},
            "cachePolicy": {"maxAge": 10, "scope": "PUBLIC"},
            "cacheTime": 1700000000000,
        }

    def test_from_json_accepts_stored_entry(self) -> None:
        raw = '{"data":{"me":{"id":"1"}},"cachePolicy":{"maxAge":30,"scope":"PRIVATE"},"cacheTime":1700000000000}'
        entry = CacheEntry.from_json(raw)
        assert entry.data == {"me": {"id": "1"}}
        assert entry.cache_policy == CachePolicy(CacheScope.PRIVATE, 30)
        assert entry.cache_time == 1700000000000

    def test_from_json_float_cache_time_truncated(self) -> None:
        raw = '{"data":{},"cachePolicy":{"maxAge":1},"cacheTime":1700000000000.7}'
        assert CacheEntry.from_json(raw).cache_time == 1700000000000

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "[]",
            '{"cachePolicy":{"maxAge":1},"cacheTime":1}',
            '{"data":{},"cachePolicy":"PUBLIC","cacheTime":1}',
            '{"data":{},"cachePolicy":{"maxAge":1},"cacheTime":"1"}',
            '{"data":{},"cachePolicy":{"maxAge":1},"cacheTime":true}',
            '{"data":{},"cachePolicy":{"maxAge":"1"},"cacheTime":1}',
            '{"data":{},"cachePolicy":{"maxAge":1,"scope":"NOPE"},"cacheTime":1}',
        ],
    )
    def test_from_json_rejects_malformed(self, raw: str) -> None:
        with pytest.raises(CacheEntryDecodeError):
            CacheEntry.from_json(raw)

    def test_to_json_rejects_unserializable_data(self) -> None:
        entry = CacheEntry({"when": object()}, CachePolicy(CacheScope.PUBLIC, 1), 0)
        with pytest.raises(TypeError):
            entry.to_json()


class TestCacheDecision:
    """CacheDecision.no / .yes."""

    def test_no(self) -> None:
        decision = CacheDecision.no("response has errors")
        assert decision.cacheable is False
        assert decision.reason == "response has errors"
        assert decision.policy is None

    def test_yes(self) -> None:
        decision = CacheDecision.yes(CachePolicy(CacheScope.PRIVATE, 7))
        assert decision.cacheable is True
        assert decision.policy == CachePolicy(CacheScope.PRIVATE, 7)
