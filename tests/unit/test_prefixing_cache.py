"""Tests for PrefixingKeyValueCache."""

from unittest.mock import AsyncMock

import pytest

from query_cache.infrastructure.cache.prefixing_cache import PrefixingKeyValueCache


async def test_get_prefixes_key() -> None:
    inner = AsyncMock()
    inner.get.return_value = "value"
    cache = PrefixingKeyValueCache(inner)
    assert await cache.get("abc") == "value"
    inner.get.assert_awaited_once_with("fqc:abc")


async def test_set_prefixes_key_and_passes_ttl() -> None:
    inner = AsyncMock()
    cache = PrefixingKeyValueCache(inner, prefix="custom:")
    await cache.set("abc", "v", ttl=30)
    inner.set.assert_awaited_once_with("custom:abc", "v", ttl=30)


async def test_errors_propagate() -> None:
    inner = AsyncMock()
    inner.get.side_effect = RuntimeError("down")
    with pytest.raises(RuntimeError, match="down"):
        await PrefixingKeyValueCache(inner).get("abc")


def test_empty_prefix_rejected() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        PrefixingKeyValueCache(AsyncMock(), prefix="")
