"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Auth metrics
registration_attempts = Counter(
    'registration_attempts_total',
    'Total registration attempts',
    ['result']  # success, conflict
)

login_attempts = Counter(
    'login_attempts_total',
    'Total login attempts',
    ['result']  # success, failure
)

password_hash_latency = Histogram(
    'password_hash_latency_seconds',
    'Time spent hashing or verifying a password',
    ['operation'],  # hash, verify
    buckets=[0.001, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

# Store metrics
store_errors = Counter(
    'store_errors_total',
    'Key-value store failures surfaced to callers',
    ['operation']
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint, mounted at /metrics by the health router."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_registration(result: str):
    """Record registration outcome. Result: success, conflict"""
    registration_attempts.labels(result=result).inc()


def record_login(result: str):
    """Record login outcome. Result: success, failure"""
    login_attempts.labels(result=result).inc()


def record_store_error(operation: str):
    store_errors.labels(operation=operation).inc()
