"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from symbol_search.observability.context import (
    bind_search_context,
    get_trace_context,
    set_trace_context,
    trace_context,
)
from symbol_search.observability.logging import JsonFormatter, configure_logging
from symbol_search.observability.metrics import (
    SEARCH_COUNT,
    SEARCH_ERRORS,
    SEARCH_LATENCY,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from symbol_search.observability.tracing import create_span, get_tracer, init_tracing, use_tracer_provider


__all__ = [
    "SEARCH_COUNT",
    "SEARCH_ERRORS",
    "SEARCH_LATENCY",
    "JsonFormatter",
    "bind_search_context",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
    "use_tracer_provider",
]
