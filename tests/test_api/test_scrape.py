"""Tests for the scrape endpoint helpers."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from starlette_prom.api.scrape import add_metrics_route, metrics_endpoint
from starlette_prom.metrics.builder import PrometheusMetricsBuilder
from starlette_prom.metrics.collector import CONTENT_TYPE


class TestScrape:
    async def test_metrics_endpoint_response(self) -> None:
        prometheus, handle = PrometheusMetricsBuilder("myapp").pair()
        prometheus.update_metrics("/", "GET", 200, 0.0)

        response = await metrics_endpoint(handle)()
        assert response.status_code == 200
        assert response.media_type == CONTENT_TYPE
        assert response.body.decode("utf-8") == handle.metrics()

    def test_add_metrics_route_default_path(self) -> None:
        _, handle = PrometheusMetricsBuilder("myapp").pair()
        app = FastAPI()
        add_metrics_route(app, handle)

        client = TestClient(app)
        resp = client.get("/metrics")
        assert resp.status_code == 200
        assert resp.headers["content-type"] == CONTENT_TYPE
        assert client.post("/metrics").status_code == 405

    def test_add_metrics_route_hidden_from_schema(self) -> None:
        _, handle = PrometheusMetricsBuilder("myapp").pair()
        app = FastAPI()
        add_metrics_route(app, handle, "/stats")
        assert "/stats" not in app.openapi()["paths"]
