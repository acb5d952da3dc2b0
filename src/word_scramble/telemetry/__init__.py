"""Telemetry facade for word scramble instrumentation."""

from .runtime import (
    TelemetryConfig,
    TelemetryRuntime,
    TelemetrySpan,
    configure_telemetry,
    get_telemetry,
)

__all__ = [
    "TelemetryRuntime",
    "TelemetrySpan",
    "TelemetryConfig",
    "configure_telemetry",
    "get_telemetry",
]
