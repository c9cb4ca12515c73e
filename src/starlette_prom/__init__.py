"""starlette-prom — Prometheus request metrics middleware for Starlette/FastAPI."""

from __future__ import annotations

from starlette_prom.metrics import (
    DEFAULT_BUCKETS,
    DEFAULT_ENDPOINT,
    PrometheusMetrics,
    PrometheusMetricsBuilder,
    PrometheusMetricsRegistry,
    PrometheusMiddleware,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BUCKETS",
    "DEFAULT_ENDPOINT",
    "PrometheusMetrics",
    "PrometheusMetricsBuilder",
    "PrometheusMetricsRegistry",
    "PrometheusMiddleware",
    "__version__",
]
