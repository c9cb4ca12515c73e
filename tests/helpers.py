"""Sample lookups shared by the metrics tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prometheus_client import CollectorRegistry

NAMESPACE = "myapp"


def request_count(
    registry: CollectorRegistry,
    endpoint: str,
    method: str = "GET",
    status: str = "200",
    namespace: str = NAMESPACE,
) -> float | None:
    """Value of the request counter for one label tuple (None if never recorded)."""
    return registry.get_sample_value(
        f"{namespace}_http_requests_total",
        {"endpoint": endpoint, "method": method, "status": status},
    )


def duration_count(
    registry: CollectorRegistry,
    endpoint: str,
    method: str = "GET",
    status: str = "200",
    namespace: str = NAMESPACE,
) -> float | None:
    """Number of observations in the duration histogram for one label tuple."""
    return registry.get_sample_value(
        f"{namespace}_http_requests_duration_seconds_count",
        {"endpoint": endpoint, "method": method, "status": status},
    )
