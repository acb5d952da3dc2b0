"""OpenTelemetry runtime wiring and game instrumentation helpers."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import Lock
from typing import cast

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.metrics import Counter, Histogram
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.trace import Span, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TelemetryConfig:
    """Normalized telemetry configuration used by runtime bootstrap."""

    enabled: bool = False
    service_name: str = "word-scramble"
    service_namespace: str = "word_scramble"
    environment: str = "dev"
    otlp_endpoint: str | None = None
    sample_ratio: float = 1.0
    export_metrics: bool = True
    metrics_export_interval_ms: int = 60_000
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class _NoopCounter:
    """No-op metric instrument implementation."""

    def add(
        self, amount: int | float, attributes: Mapping[str, str] | None = None
    ) -> None:
        """Accept metric updates without side effects."""


@dataclass(slots=True)
class _NoopHistogram:
    """No-op metric instrument implementation."""

    def record(
        self, amount: int | float, attributes: Mapping[str, str] | None = None
    ) -> None:
        """Accept metric updates without side effects."""


@dataclass(slots=True)
class TelemetrySpan:
    """Wrapper over OpenTelemetry span to avoid ad-hoc API usage."""

    _span: Span | None

    def set_attribute(self, key: str, value: str | bool | int | float) -> None:
        """Set a span attribute when a real span is present."""
        if self._span is not None:
            self._span.set_attribute(key, value)

    def record_exception(self, error: BaseException) -> None:
        """Record an exception and set error status."""
        if self._span is not None:
            self._span.record_exception(error)
            self._span.set_status(Status(StatusCode.ERROR, str(error)))


class TelemetryRuntime:
    """Process-wide telemetry runtime."""

    def __init__(
        self,
        *,
        enabled: bool,
        tracer: Tracer | None,
        tracer_provider: TracerProvider | None,
        meter_provider: MeterProvider | None,
    ) -> None:
        """Initialize runtime with concrete OTel providers/instruments."""
        self._enabled = enabled
        self._tracer = tracer
        self._tracer_provider = tracer_provider
        self._meter_provider = meter_provider
        self._shutdown = False

        if enabled:
            meter = metrics.get_meter("word_scramble.telemetry")
            self._games_started_total: Counter = meter.create_counter(
                name="word_scramble_games_started_total",
                unit="1",
                description="Games started by mode",
            )
            self._start_rejected_total: Counter = meter.create_counter(
                name="word_scramble_start_rejected_total",
                unit="1",
                description="Start actions rejected by reason",
            )
            self._answers_total: Counter = meter.create_counter(
                name="word_scramble_answers_total",
                unit="1",
                description="Submitted answers by outcome",
            )
            self._timeouts_total: Counter = meter.create_counter(
                name="word_scramble_timeouts_total",
                unit="1",
                description="Questions that ran out of time",
            )
            self._auto_fills_total: Counter = meter.create_counter(
                name="word_scramble_auto_fills_total",
                unit="1",
                description="Letters placed by auto-fill",
            )
            self._score_gained: Histogram = meter.create_histogram(
                name="word_scramble_score_gained",
                unit="1",
                description="Points gained per submitted answer",
            )
        else:
            self._games_started_total = cast(Counter, _NoopCounter())
            self._start_rejected_total = cast(Counter, _NoopCounter())
            self._answers_total = cast(Counter, _NoopCounter())
            self._timeouts_total = cast(Counter, _NoopCounter())
            self._auto_fills_total = cast(Counter, _NoopCounter())
            self._score_gained = cast(Histogram, _NoopHistogram())

    @property
    def enabled(self) -> bool:
        """Return whether telemetry is enabled."""
        return self._enabled

    @property
    def is_shutdown(self) -> bool:
        """Return whether providers were already shut down."""
        return self._shutdown

    @contextmanager
    def start_span(
        self,
        name: str,
        *,
        attributes: Mapping[str, str | bool | int | float] | None = None,
    ) -> Iterator[TelemetrySpan]:
        """Start a new internal span as current context."""
        if not self._enabled or self._tracer is None:
            yield TelemetrySpan(None)
            return

        with self._tracer.start_as_current_span(name, attributes=attributes) as span:
            yield TelemetrySpan(span)

    def record_game_started(self, *, mode: str) -> None:
        """Record a successful start action."""
        self._games_started_total.add(1, attributes={"mode": mode})

    def record_start_rejected(self, *, reason: str) -> None:
        """Record a rejected start action."""
        self._start_rejected_total.add(1, attributes={"reason": reason})

    def record_answer(self, *, correct: bool, score_gained: int) -> None:
        """Record a submitted answer and its score."""
        outcome = "correct" if correct else "wrong"
        self._answers_total.add(1, attributes={"outcome": outcome})
        self._score_gained.record(score_gained, attributes={"outcome": outcome})

    def record_timeout(self) -> None:
        """Record a question that ran out of time."""
        self._timeouts_total.add(1)

    def record_auto_fill(self, *, use: int) -> None:
        """Record an auto-fill; ``use`` is its 1-based ordinal in the question."""
        self._auto_fills_total.add(1, attributes={"use": str(use)})

    def shutdown(self) -> None:
        """Flush and shutdown telemetry providers."""
        if self._shutdown:
            return
        if self._tracer_provider is not None:
            self._tracer_provider.shutdown()
        if self._meter_provider is not None:
            self._meter_provider.shutdown()
        self._shutdown = True


_runtime_lock = Lock()
_runtime: TelemetryRuntime | None = None


def _disabled_runtime() -> TelemetryRuntime:
    return TelemetryRuntime(
        enabled=False,
        tracer=None,
        tracer_provider=None,
        meter_provider=None,
    )


def get_telemetry() -> TelemetryRuntime:
    """Return process telemetry runtime (disabled by default)."""
    global _runtime
    with _runtime_lock:
        if _runtime is None:
            _runtime = _disabled_runtime()
        return _runtime


def configure_telemetry(settings: TelemetryConfig) -> TelemetryRuntime:
    """Configure global telemetry runtime once per process."""
    global _runtime

    with _runtime_lock:
        if _runtime is not None and _runtime.enabled and not _runtime.is_shutdown:
            return _runtime

        if not settings.enabled:
            if _runtime is None:
                _runtime = _disabled_runtime()
            return _runtime

        resource = Resource.create(
            {
                "service.name": settings.service_name,
                "service.namespace": settings.service_namespace,
                "deployment.environment": settings.environment,
            }
        )

        sampler = ParentBased(TraceIdRatioBased(settings.sample_ratio))
        tracer_provider = TracerProvider(resource=resource, sampler=sampler)

        if settings.otlp_endpoint:
            trace_exporter = OTLPSpanExporter(
                endpoint=settings.otlp_endpoint.rstrip("/") + "/v1/traces",
                headers=dict(settings.headers),
            )
            tracer_provider.add_span_processor(BatchSpanProcessor(trace_exporter))

        meter_provider = MeterProvider(resource=resource)
        if settings.otlp_endpoint and settings.export_metrics:
            metric_exporter = OTLPMetricExporter(
                endpoint=settings.otlp_endpoint.rstrip("/") + "/v1/metrics",
                headers=dict(settings.headers),
            )
            metric_reader = PeriodicExportingMetricReader(
                exporter=metric_exporter,
                export_interval_millis=settings.metrics_export_interval_ms,
            )
            meter_provider = MeterProvider(
                resource=resource, metric_readers=[metric_reader]
            )

        trace.set_tracer_provider(tracer_provider)
        metrics.set_meter_provider(meter_provider)
        tracer = trace.get_tracer("word_scramble.telemetry")

        _runtime = TelemetryRuntime(
            enabled=True,
            tracer=tracer,
            tracer_provider=tracer_provider,
            meter_provider=meter_provider,
        )

        logger.info(
            "OpenTelemetry enabled",
            extra={
                "service_name": settings.service_name,
                "environment": settings.environment,
                "otlp_endpoint": settings.otlp_endpoint,
                "export_metrics": settings.export_metrics,
            },
        )
        return _runtime
