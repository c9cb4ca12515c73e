"""Shared test fixtures for the starlette-prom test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI, HTTPException
from prometheus_client import CollectorRegistry

from starlette_prom.api.scrape import add_metrics_route
from starlette_prom.metrics.builder import PrometheusMetricsBuilder
from starlette_prom.metrics.middleware import PrometheusMiddleware
from tests.helpers import NAMESPACE

if TYPE_CHECKING:
    from starlette_prom.metrics.collector import PrometheusMetricsRegistry
    from starlette_prom.metrics.middleware import PrometheusMetrics


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def prometheus_pair(
    registry: CollectorRegistry,
) -> tuple[PrometheusMetrics, PrometheusMetricsRegistry]:
    return PrometheusMetricsBuilder(NAMESPACE).registry(registry).pair()


@pytest.fixture
def instrumented_app(
    prometheus_pair: tuple[PrometheusMetrics, PrometheusMetricsRegistry],
) -> FastAPI:
    """A FastAPI app with a few routes, the scrape route and the middleware."""
    prometheus, handle = prometheus_pair
    app = FastAPI()

    @app.get("/users/{user_id}")
    async def get_user(user_id: int) -> dict[str, int]:
        return {"id": user_id}

    @app.post("/users")
    async def create_user() -> dict[str, str]:
        return {"created": "yes"}

    @app.get("/missing/{item}")
    async def missing(item: str) -> None:
        raise HTTPException(status_code=404, detail=f"{item} not found")

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("handler failed")

    add_metrics_route(app, handle)
    app.add_middleware(PrometheusMiddleware, metrics=prometheus)
    return app

