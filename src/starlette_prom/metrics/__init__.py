"""Metrics — Prometheus HTTP request instrumentation and exposure."""

from __future__ import annotations

from starlette_prom.metrics.builder import PrometheusMetricsBuilder
from starlette_prom.metrics.collector import CONTENT_TYPE, PrometheusMetricsRegistry
from starlette_prom.metrics.middleware import (
    DEFAULT_BUCKETS,
    DEFAULT_ENDPOINT,
    MetricsConfiguration,
    PendingObservation,
    PrometheusMetrics,
    PrometheusMiddleware,
)

__all__ = [
    "CONTENT_TYPE",
    "DEFAULT_BUCKETS",
    "DEFAULT_ENDPOINT",
    "MetricsConfiguration",
    "PendingObservation",
    "PrometheusMetrics",
    "PrometheusMetricsBuilder",
    "PrometheusMetricsRegistry",
    "PrometheusMiddleware",
]
