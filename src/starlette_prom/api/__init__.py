"""API — scrape endpoint wiring and the example application."""

from starlette_prom.api.scrape import add_metrics_route, metrics_endpoint

__all__ = ["add_metrics_route", "metrics_endpoint"]
