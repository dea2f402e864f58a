"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from __future__ import annotations

from typing import TYPE_CHECKING

from portal_search.observability.context import (
    get_trace_context,
    search_context,
    set_trace_context,
    trace_context,
)
from portal_search.observability.logging import JsonFormatter, configure_logging
from portal_search.observability.metrics import (
    SEARCH_ERRORS,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    SEARCH_RESULTS,
    get_metrics,
    get_metrics_content_type,
    init_metrics,
    track_latency,
)
from portal_search.observability.tracing import create_span, get_tracer, init_tracing, set_tracer


if TYPE_CHECKING:
    from opentelemetry.sdk.metrics.export import MetricReader
    from opentelemetry.sdk.trace.export import SpanProcessor

    from portal_search.config import Settings


def configure_observability(
    settings: Settings,
    *,
    span_processors: list[SpanProcessor] | None = None,
    metric_readers: list[MetricReader] | None = None,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Bootstrap logging, tracing and metrics from settings.

    Called once by the hosting process. Tracing and metrics providers are only
    installed when enabled in ``settings``.
    """
    configure_logging(settings.log_level, settings.log_json, logger_levels=logger_levels)
    if settings.tracing_enabled:
        init_tracing(settings.service_name, span_processors=span_processors)
    if settings.metrics_enabled:
        init_metrics(settings.service_name, metric_readers=metric_readers)


__all__ = [
    "SEARCH_ERRORS",
    "SEARCH_LATENCY",
    "SEARCH_REQUESTS",
    "SEARCH_RESULTS",
    "JsonFormatter",
    "configure_logging",
    "configure_observability",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "search_context",
    "set_trace_context",
    "set_tracer",
    "trace_context",
    "track_latency",
]
