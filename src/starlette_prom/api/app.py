"""FastAPI example application instrumented with request metrics."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from starlette_prom import __version__
from starlette_prom.api.scrape import add_metrics_route
from starlette_prom.config.settings import AppSettings
from starlette_prom.metrics.builder import PrometheusMetricsBuilder
from starlette_prom.metrics.middleware import PrometheusMiddleware

logger = logging.getLogger(__name__)


def create_app(*, settings: AppSettings | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        settings: Optional AppSettings. If *None*, settings are read from
            environment variables.

    Raises:
        ConfigurationError: The metrics settings are invalid.
        RegistrationError: The HTTP series could not be registered.
    """
    if settings is None:
        settings = AppSettings()

    app = FastAPI(
        title="starlette-prom",
        version=__version__,
        description="Example app instrumented with Prometheus request metrics",
        debug=settings.debug,
    )
    app.state.settings = settings

    # Fail before serving any traffic if the metrics cannot be built
    prometheus, registry = PrometheusMetricsBuilder.from_settings(settings.metrics).pair()
    # Custom series can be registered on app.state.metrics_registry.registry
    app.state.metrics_registry = registry

    # -- Base routes --
    @app.get("/", tags=["base"], response_class=PlainTextResponse)
    async def root() -> str:
        return "Hello, World!"

    @app.get("/hello/{name}", tags=["base"], response_class=PlainTextResponse)
    async def hello(name: str) -> str:
        return f"Hello {name}!"

    @app.get("/health", tags=["base"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    if prometheus.endpoint is not None:
        add_metrics_route(app, registry, prometheus.endpoint)

    # -- Prometheus request metrics middleware --
    app.add_middleware(PrometheusMiddleware, metrics=prometheus)

    logger.info("Request metrics enabled for namespace %s", prometheus.namespace)
    return app
