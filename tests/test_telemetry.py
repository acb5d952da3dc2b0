"""Tests for the telemetry runtime."""

from __future__ import annotations

import pytest

from word_scramble.telemetry import (
    TelemetryConfig,
    TelemetryRuntime,
    configure_telemetry,
    get_telemetry,
)


@pytest.fixture
def disabled_runtime() -> TelemetryRuntime:
    return TelemetryRuntime(
        enabled=False, tracer=None, tracer_provider=None, meter_provider=None
    )


def test_default_runtime_is_disabled():
    """Test default runtime."""
    runtime = get_telemetry()

    assert not runtime.enabled
    assert get_telemetry() is runtime


def test_configure_disabled_returns_shared_runtime():
    """Test configuring disabled telemetry."""
    runtime = configure_telemetry(TelemetryConfig(enabled=False))

    assert runtime is get_telemetry()
    assert not runtime.enabled


def test_disabled_runtime_accepts_records(disabled_runtime):
    """Test disabled runtime accepts every record call."""
    with disabled_runtime.start_span("word_scramble.test", attributes={"a": 1}) as span:
        span.set_attribute("correct", True)
        span.record_exception(RuntimeError("ignored"))

    disabled_runtime.record_game_started(mode="solo")
    disabled_runtime.record_start_rejected(reason="not_enough_words")
    disabled_runtime.record_answer(correct=True, score_gained=200)
    disabled_runtime.record_timeout()
    disabled_runtime.record_auto_fill(use=1)


def test_shutdown_is_idempotent(disabled_runtime):
    """Test shutting down twice."""
    disabled_runtime.shutdown()
    disabled_runtime.shutdown()

    assert disabled_runtime.is_shutdown
