"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Quota decision metrics
quota_checks = Counter(
    'quota_checks_total',
    'Total quota decisions',
    ['check', 'result']  # check: reached/over_quota, result: admitted/rejected/unlimited
)

quota_check_errors = Counter(
    'quota_check_errors_total',
    'Quota checks that could not be decided',
    ['check', 'error']
)

quota_check_latency = Histogram(
    'quota_check_latency_seconds',
    'Quota check latency, store round trips included',
    ['check'],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_quota_check(check: str, reached: bool, unlimited: bool = False):
    """Record a quota decision."""
    if unlimited:
        result = "unlimited"
    else:
        result = "rejected" if reached else "admitted"
    quota_checks.labels(check=check, result=result).inc()


def record_quota_error(check: str, error: Exception):
    """Record a quota check that failed with an error."""
    quota_check_errors.labels(check=check, error=type(error).__name__).inc()
