"""
Prometheus metrics for request validation.

Counters and histograms are registered once on the default ``prometheus_client``
registry at import time and shared by every worker thread. ``metrics_response``
renders the registry for the ``/metrics`` endpoint.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Histogram,
    generate_latest,
)
from flask import Response


# Outcome of the middleware for one request: passed, rejected, malformed, skipped
validation_requests = Counter(
    'request_validation_total',
    'Total number of request bodies processed by the validation middleware',
    ['outcome']
)

validation_failures = Counter(
    'request_validation_failures_total',
    'Total number of failed format checks by rule',
    ['rule']
)

validation_duration = Histogram(
    'request_validation_duration_seconds',
    'Time spent walking and validating a request body',
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25)
)

error_counter = Counter(
    'request_validator_errors_total',
    'Total number of application errors by type',
    ['error_type', 'error_category', 'endpoint']
)


def record_outcome(outcome: str) -> None:
    validation_requests.labels(outcome=outcome).inc()


def record_rule_failures(rules) -> None:
    """Increment the failure counter once per failed rule occurrence."""
    for rule in rules:
        validation_failures.labels(rule=rule).inc()


def metrics_response() -> Response:
    """Render the default registry in the Prometheus text exposition format."""
    return Response(generate_latest(REGISTRY), mimetype=CONTENT_TYPE_LATEST)
