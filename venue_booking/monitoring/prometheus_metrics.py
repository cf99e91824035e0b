# venue_booking/monitoring/prometheus_metrics.py
"""
Prometheus metrics module for the venue booking API.

Service timings come from the @measure_operation decorators; cache counters
come from VersionedCache. Everything lives in a dedicated registry so tests
and the default process collectors never collide.
"""

from typing import Optional, cast

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Create a custom registry to avoid conflicts with default metrics
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "venue_booking_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "venue_booking_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "venue_booking_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

cache_events_total = Counter(
    "venue_booking_cache_events_total",
    "Versioned cache events (hit, miss, set, delete, error, token_bump)",
    ["event"],
    registry=REGISTRY,
)

CACHE_EVENTS = ("hits", "misses", "sets", "deletes", "errors", "token_bumps")


class PrometheusMetrics:
    """Thin recording helpers over the module-level collectors."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record a service operation.

        Args:
            service: Service class name
            operation: Operation name passed to @measure_operation
            duration: Wall time in seconds
            status: "success" or "error"
            error_type: Exception class name when status is "error"
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            max(duration, 0.0)
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()

        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_cache_event(event: str) -> None:
        """Increment the cache counter for ``event`` (one of ``CACHE_EVENTS``)."""
        cache_events_total.labels(event=event).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Current metrics in the Prometheus text exposition format."""
        return cast(bytes, generate_latest(REGISTRY))

    @staticmethod
    def get_content_type() -> str:
        return cast(str, CONTENT_TYPE_LATEST)


# Singleton instance
prometheus_metrics = PrometheusMetrics()

# Pre-create the cache series so every event shows up at zero before the first request.
for _event in CACHE_EVENTS:
    cache_events_total.labels(event=_event)
