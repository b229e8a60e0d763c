"""
Prometheus metrics for Horizon API.

Tracks HTTP traffic and signatures issued.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "horizon_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "horizon_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0),
)

# Signing metrics
signatures_issued_total = Counter(
    "horizon_signatures_issued_total",
    "Total signatures issued",
    ["kind"],
)

rate_limit_rejections_total = Counter(
    "horizon_rate_limit_rejections_total",
    "Requests rejected by the rate limiter",
)


def track_request_metrics(method: str, endpoint: str, status_code: int, duration: float):
    """Track HTTP request metrics."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def track_signature(kind: str) -> None:
    signatures_issued_total.labels(kind=kind).inc()


async def metrics_endpoint() -> Response:
    """Prometheus exposition endpoint body."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
