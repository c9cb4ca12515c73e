"""Registry handle — owns the Prometheus registry and renders the scrape body.

The handle lives independently of the middleware so the scrape route can be
mounted anywhere (or not at all) and so custom series can be registered next
to the HTTP ones.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, generate_latest

from starlette_prom.errors.prom_errors import EncodingError

# Prometheus text exposition format
CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


class PrometheusMetricsRegistry:
    """Handle over the :class:`CollectorRegistry` holding the HTTP series."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry, for custom metrics."""
        return self._registry

    def metrics(self) -> str:
        """Gather every registered series and encode it as exposition text.

        Raises:
            EncodingError: If the registry cannot be collected or encoded.
        """
        try:
            body = generate_latest(self._registry)
            return body.decode("utf-8")
        except Exception as exc:
            raise EncodingError(f"failed to encode metrics: {exc}") from exc
