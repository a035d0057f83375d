# core/metrics.py
from typing import Iterator, Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    disable_created_metrics,
    generate_latest,
)
from prometheus_client.metrics_core import Metric

# Counters and histograms expose only _total/_bucket/_sum/_count series.
disable_created_metrics()

REQUEST_DURATION_BUCKETS = (0.1, 0.5, 1, 2, 5)


def create_registry(include_default_metrics: bool = True) -> CollectorRegistry:
    """Create a registry, optionally pre-loaded with process/runtime collectors."""
    registry = CollectorRegistry()
    if include_default_metrics:
        ProcessCollector(registry=registry)
        PlatformCollector(registry=registry)
        GCCollector(registry=registry)
    return registry


class RequestMetrics:
    """HTTP request instruments bound to one registry.

    A single instance is created at startup and handed to both the
    instrumentation middleware (writer) and the /metrics endpoint (reader).
    Registering a second instance on the same registry raises ``ValueError``
    because the series names are already taken.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else create_registry()

        self.requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "route", "status_code"],
            registry=self.registry,
        )

        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            ["method", "route"],
            buckets=REQUEST_DURATION_BUCKETS,
            registry=self.registry,
        )

    def increment(self, method: str, route: str, status_code: int) -> None:
        self.requests_total.labels(method=method, route=route, status_code=str(status_code)).inc()

    def observe(self, method: str, route: str, duration: float) -> None:
        self.request_duration.labels(method=method, route=route).observe(duration)

    def observe_request(self, method: str, route: str, status_code: int, duration: float) -> None:
        """Record one finished request in both instruments."""
        self.observe(method, route, duration)
        self.increment(method, route, status_code)

    def collect(self) -> Iterator[Metric]:
        return self.registry.collect()

    def render(self) -> bytes:
        return generate_latest(self.registry)
