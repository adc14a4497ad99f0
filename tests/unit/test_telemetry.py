"""Tests for telemetry wiring and tracing helpers (no exporter, no global provider)."""

import pytest

from query_cache.shared.telemetry import (
    TelemetryConfig,
    TracedOperation,
    get_telemetry,
    set_telemetry,
    traced,
)


def test_disabled_setup_returns_none() -> None:
    telemetry = TelemetryConfig("query-cache", "1.0.0", enabled=False)
    assert telemetry.setup_telemetry(exporter_type="console") is None
    assert telemetry.tracer_provider is None


def test_get_and_set_telemetry() -> None:
    telemetry = TelemetryConfig("query-cache", "1.0.0", enabled=False)
    set_telemetry(telemetry)
    try:
        assert get_telemetry() is telemetry
    finally:
        set_telemetry(None)
    assert get_telemetry() is None


async def test_traced_async_returns_result() -> None:
    @traced("test.async_op")
    async def op(count: int) -> int:
        return count * 2

    assert await op(count=3) == 6


async def test_traced_propagates_exceptions() -> None:
    @traced()
    async def op() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await op()


def test_traced_operation_context_manager() -> None:
    with TracedOperation("test.op", {"cache.max_age": 10}) as op:
        assert op.span is not None
    with pytest.raises(ValueError):
        with TracedOperation("test.failing"):
            raise ValueError("bad")
