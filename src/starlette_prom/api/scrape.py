"""Scrape endpoint — serves the registry in Prometheus text format.

The middleware never routes requests itself; the host app mounts this
endpoint (normally at :data:`DEFAULT_ENDPOINT`) with GET.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import Response

from starlette_prom.metrics.collector import CONTENT_TYPE
from starlette_prom.metrics.middleware import DEFAULT_ENDPOINT

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI

    from starlette_prom.metrics.collector import PrometheusMetricsRegistry


def metrics_endpoint(handle: PrometheusMetricsRegistry) -> Callable[[], Awaitable[Response]]:
    """Return an endpoint rendering ``handle``'s registry."""

    async def _metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(content=handle.metrics(), media_type=CONTENT_TYPE)

    return _metrics


def add_metrics_route(
    app: FastAPI,
    handle: PrometheusMetricsRegistry,
    path: str = DEFAULT_ENDPOINT,
) -> None:
    """Mount the scrape endpoint on ``app`` at ``path`` (GET only)."""
    app.add_api_route(
        path,
        metrics_endpoint(handle),
        methods=["GET"],
        include_in_schema=False,
        tags=["base"],
    )
