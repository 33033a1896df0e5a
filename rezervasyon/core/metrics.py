"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Trip metrics
trip_operations = Counter(
    'trip_operations_total',
    'Trip write operations',
    ['operation', 'result']  # create/delete, ok/invalid
)

# Reservation metrics
reservation_attempts = Counter(
    'reservation_attempts_total',
    'Total reservation confirmation attempts',
    ['status']  # success, conflict, contention, invalid
)

reservation_latency = Histogram(
    'reservation_latency_seconds',
    'Reservation confirmation latency',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

reservation_retries = Counter(
    'reservation_retry_attempts_total',
    'Reservation retries due to trip version conflicts'
)

reserved_seats = Counter(
    'reserved_seats_total',
    'Seats reserved across all trips',
    ['trip_type']
)

# Cache metrics
cache_operations = Counter(
    'cache_operations_total',
    'Cache operations',
    ['operation', 'result']  # get/set, hit/miss
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_trip_operation(operation: str, ok: bool):
    """Record trip write. Operation: create, delete"""
    trip_operations.labels(operation=operation, result="ok" if ok else "invalid").inc()


def record_reservation_attempt(status: str):
    """Record reservation attempt. Status: success, conflict, invalid"""
    reservation_attempts.labels(status=status).inc()


def record_reserved_seats(trip_type: str, count: int):
    reserved_seats.labels(trip_type=trip_type).inc(count)


def record_cache_operation(operation: str, hit: bool):
    """Record cache operation."""
    result = "hit" if hit else "miss"
    cache_operations.labels(operation=operation, result=result).inc()
