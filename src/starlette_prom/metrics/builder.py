"""Builder — configures and registers the HTTP request series exactly once."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from prometheus_client import CollectorRegistry, Counter, Histogram

from starlette_prom.errors.prom_errors import ConfigurationError, RegistrationError
from starlette_prom.metrics.collector import PrometheusMetricsRegistry
from starlette_prom.metrics.middleware import (
    DEFAULT_BUCKETS,
    DEFAULT_ENDPOINT,
    HTTP_LABELS,
    MetricsConfiguration,
    PrometheusMetrics,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from starlette_prom.config.settings import MetricsSettings

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
_LABEL_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _validate_buckets(buckets: tuple[float, ...]) -> None:
    if not buckets:
        raise ConfigurationError("histogram buckets must not be empty")
    for lower, upper in zip(buckets, buckets[1:]):
        if not lower < upper:
            raise ConfigurationError(
                f"histogram buckets must be strictly ascending, got {list(buckets)}"
            )


def _validate_const_labels(labels: Mapping[str, str]) -> None:
    for name in labels:
        if name in HTTP_LABELS:
            raise ConfigurationError(f"constant label {name!r} collides with a request label")
        if not _LABEL_RE.match(name) or name.startswith("__"):
            raise ConfigurationError(f"invalid constant label name: {name!r}")


class PrometheusMetricsBuilder:
    """Fluent builder for :class:`PrometheusMetrics` and its registry handle.

    Example::

        prometheus, registry = PrometheusMetricsBuilder("myapp").pair()
        app.add_middleware(PrometheusMiddleware, metrics=prometheus)
    """

    def __init__(self, namespace: str) -> None:
        self._namespace = namespace
        self._endpoint: str | None = DEFAULT_ENDPOINT
        self._const_labels: dict[str, str] = {}
        self._registry: CollectorRegistry | None = None
        self._buckets: tuple[float, ...] = DEFAULT_BUCKETS

    @classmethod
    def from_settings(cls, settings: MetricsSettings) -> Self:
        """Construct a builder pre-configured from :class:`MetricsSettings`."""
        return (
            cls(settings.namespace)
            .endpoint(settings.endpoint)
            .buckets(settings.buckets)
            .const_labels(settings.const_labels)
        )

    def endpoint(self, value: str | None) -> Self:
        """Set the scrape endpoint path; ``None`` disables self-exclusion."""
        self._endpoint = value
        return self

    def buckets(self, values: Iterable[float]) -> Self:
        """Set the histogram bucket boundaries (validated on :meth:`pair`)."""
        self._buckets = tuple(float(v) for v in values)
        return self

    def const_labels(self, values: Mapping[str, str]) -> Self:
        """Set labels added to every sample of both series."""
        self._const_labels = dict(values)
        return self

    def registry(self, value: CollectorRegistry) -> Self:
        """Use an external registry instead of a private one."""
        self._registry = value
        return self

    def pair(self) -> tuple[PrometheusMetrics, PrometheusMetricsRegistry]:
        """Create, register and return the middleware state and registry handle.

        Raises:
            ConfigurationError: Invalid buckets, namespace or constant labels.
            RegistrationError: The series already exist in the target registry.
        """
        if self._namespace and not _NAME_RE.match(self._namespace):
            raise ConfigurationError(f"invalid metrics namespace: {self._namespace!r}")
        _validate_buckets(self._buckets)
        _validate_const_labels(self._const_labels)

        config = MetricsConfiguration(
            namespace=self._namespace,
            endpoint=self._endpoint,
            const_labels=MappingProxyType(dict(self._const_labels)),
            buckets=self._buckets,
        )
        handle = PrometheusMetricsRegistry(self._registry)

        try:
            http_requests_total = Counter(
                "http_requests_total",
                "Total number of HTTP requests",
                config.label_names,
                namespace=config.namespace,
                registry=None,
            )
            http_requests_duration_seconds = Histogram(
                "http_requests_duration_seconds",
                "HTTP request duration in seconds for all requests",
                config.label_names,
                namespace=config.namespace,
                buckets=config.buckets,
                registry=None,
            )
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        registry = handle.registry
        try:
            registry.register(http_requests_total)
        except ValueError as exc:
            raise RegistrationError(str(exc)) from exc
        try:
            registry.register(http_requests_duration_seconds)
        except ValueError as exc:
            registry.unregister(http_requests_total)
            raise RegistrationError(str(exc)) from exc

        logger.info(
            "Registered HTTP request metrics (namespace=%s, endpoint=%s)",
            config.namespace,
            config.endpoint,
        )

        metrics = PrometheusMetrics(
            config,
            http_requests_total=http_requests_total,
            http_requests_duration_seconds=http_requests_duration_seconds,
        )
        return metrics, handle

    build = pair
