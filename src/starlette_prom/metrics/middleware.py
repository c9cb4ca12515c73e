"""Prometheus HTTP request metrics middleware for Starlette/FastAPI.

Tracks, per ``(endpoint, method, status)``:
- ``<namespace>_http_requests_total`` (counter) — total requests
- ``<namespace>_http_requests_duration_seconds`` (histogram) — request duration

``endpoint`` is the matched route template (``/users/{user_id}``) whenever the
router resolved one, so path parameters never reach the label set. Requests
without a matched route fall back to the literal URL path.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from prometheus_client import Counter, Histogram
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp, Scope

    RequestHandler = Callable[[Request], Awaitable[Response]]

DEFAULT_ENDPOINT = "/metrics"

# Same boundaries as prometheus_client's defaults, minus the implicit +Inf
DEFAULT_BUCKETS: tuple[float, ...] = (
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
)

HTTP_LABELS = ("endpoint", "method", "status")


@dataclass(frozen=True)
class MetricsConfiguration:
    """Immutable snapshot of the builder settings used for one build."""

    namespace: str
    endpoint: str | None = DEFAULT_ENDPOINT
    const_labels: Mapping[str, str] = field(default_factory=dict)
    buckets: tuple[float, ...] = DEFAULT_BUCKETS

    @property
    def label_names(self) -> tuple[str, ...]:
        """Variable labels followed by the constant label names."""
        return (*HTTP_LABELS, *self.const_labels)

    @property
    def const_values(self) -> tuple[str, ...]:
        """Constant label values, in label-name order."""
        return tuple(self.const_labels.values())


def _route_template(scope: Scope, root_path: str = "") -> str | None:
    """Return the full template of the route the router matched, if any.

    Mounts append their matched prefix to ``scope["root_path"]``; that prefix
    (relative to ``root_path`` at entry) goes in front of the inner template.
    """
    route = scope.get("route")
    if route is None:
        return None
    prefix = scope.get("root_path", "")[len(root_path) :]
    if isinstance(route, Mount):
        # no route matched inside the mount, or the mounted app has no router
        return prefix or None
    template = getattr(route, "path_format", None) or getattr(route, "path", None)
    if template is None:
        return None
    return prefix + template


class PrometheusMetrics:
    """The pair of HTTP series plus the configuration they were built with.

    Instances are produced by
    :meth:`~starlette_prom.metrics.builder.PrometheusMetricsBuilder.pair` and
    shared read-only by every request.
    """

    def __init__(
        self,
        config: MetricsConfiguration,
        *,
        http_requests_total: Counter,
        http_requests_duration_seconds: Histogram,
    ) -> None:
        self._config = config
        self._http_requests_total = http_requests_total
        self._http_requests_duration_seconds = http_requests_duration_seconds

    @property
    def config(self) -> MetricsConfiguration:
        """Return the configuration snapshot the series were built with."""
        return self._config

    @property
    def namespace(self) -> str:
        """Return the metric name prefix."""
        return self._config.namespace

    @property
    def endpoint(self) -> str | None:
        """Path of the scrape endpoint; ``None`` disables self-exclusion."""
        return self._config.endpoint

    @property
    def const_labels(self) -> Mapping[str, str]:
        """Return the labels added to every sample (read-only)."""
        return self._config.const_labels

    @property
    def buckets(self) -> tuple[float, ...]:
        """Return the histogram bucket boundaries."""
        return self._config.buckets

    @property
    def http_requests_total(self) -> Counter:
        """Return the request counter."""
        return self._http_requests_total

    @property
    def http_requests_duration_seconds(self) -> Histogram:
        """Return the request duration histogram."""
        return self._http_requests_duration_seconds

    def matches(self, path: str, method: str) -> bool:
        """Return True for a GET on the scrape endpoint, which is not recorded."""
        if self._config.endpoint is None:
            return False
        return path == self._config.endpoint and method == "GET"

    def update_metrics(self, path: str, method: str, status: int, start: float) -> None:
        """Record one finished request started at ``start`` (``perf_counter``)."""
        duration = time.perf_counter() - start
        values = (path, method, str(status), *self._config.const_values)

        self._http_requests_duration_seconds.labels(*values).observe(duration)
        self._http_requests_total.labels(*values).inc()

    def observe(self, request: Request) -> PendingObservation:
        """Start timing ``request``; the returned observation records on resolve."""
        return PendingObservation(
            metrics=self,
            scope=request.scope,
            method=request.method,
            path=request.url.path,
            root_path=request.scope.get("root_path", ""),
            start=time.perf_counter(),
        )

    def layer(self, app: ASGIApp) -> PrometheusMiddleware:
        """Wrap any ASGI application with the metrics middleware."""
        return PrometheusMiddleware(app, metrics=self)


@dataclass
class PendingObservation:
    """One in-flight request awaiting its response.

    Consumed exactly once: either :meth:`resolve` records the request, or
    :meth:`discard` drops it when no response was produced. Further calls are
    no-ops.
    """

    metrics: PrometheusMetrics
    scope: Scope
    method: str
    path: str
    start: float
    root_path: str = ""
    done: bool = False

    @property
    def route(self) -> str:
        """Label-safe path: the matched route template, else the literal path.

        The router fills ``scope["route"]`` while dispatching, so this is only
        meaningful once the inner handler has run.
        """
        return _route_template(self.scope, self.root_path) or self.path

    def resolve(self, status: int) -> bool:
        """Record the request with ``status``. Returns True if it was recorded."""
        if self.done:
            return False
        self.done = True

        route = self.route
        if self.metrics.matches(route, self.method):
            return False
        self.metrics.update_metrics(route, self.method, status, self.start)
        return True

    def discard(self) -> None:
        """Consume the observation without recording anything."""
        self.done = True


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that records request count and duration.

    Purely observational: the request and response pass through unchanged and
    errors raised by the inner handler propagate without being recorded.
    """

    def __init__(self, app: ASGIApp, *, metrics: PrometheusMetrics) -> None:
        super().__init__(app)
        self._metrics = metrics

    @property
    def metrics(self) -> PrometheusMetrics:
        return self._metrics

    async def dispatch(self, request: Request, call_next: RequestHandler) -> Response:
        """Wrap each request with timing and counting."""
        pending = self._metrics.observe(request)

        try:
            response: Response = await call_next(request)
        except BaseException:
            # no response, no status to label with
            pending.discard()
            raise

        pending.resolve(response.status_code)
        return response
