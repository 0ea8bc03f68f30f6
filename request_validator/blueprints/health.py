"""
Health check and metrics endpoints.

- ``GET /health``: liveness, always 200 while the process serves requests
- ``GET /health/ready``: readiness, 200 once the validator registry and the
  middleware are in place, 503 otherwise
- ``GET /metrics``: Prometheus exposition of the validation metrics
"""

import os
from datetime import datetime, timezone

import structlog
from flask import Blueprint, current_app, jsonify

from request_validator.monitoring.metrics import metrics_response
from request_validator.validation.dispatcher import VALIDATOR_REGISTRY

logger = structlog.get_logger(__name__)

health_bp = Blueprint('health', __name__, url_prefix='')


class HealthStatus:
    HEALTHY = 'healthy'
    UNHEALTHY = 'unhealthy'


@health_bp.route('/health', methods=['GET'])
def basic_health():
    return jsonify({
        'status': HealthStatus.HEALTHY,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'application': {
            'name': current_app.config.get('APP_NAME'),
            'version': current_app.config.get('APP_VERSION'),
            'pid': os.getpid()
        }
    }), 200


@health_bp.route('/health/ready', methods=['GET'])
def readiness_probe():
    """
    Readiness probe.

    The service is ready when the validation middleware is registered and the
    validator registry holds at least one rule.
    """
    middleware_registered = 'request_validator' in current_app.extensions
    rules = [rule.name for rule in VALIDATOR_REGISTRY]
    ready = middleware_registered and bool(rules)

    if not ready:
        logger.warning("Readiness probe failed", middleware_registered=middleware_registered, rules=rules)

    return jsonify({
        'status': HealthStatus.HEALTHY if ready else HealthStatus.UNHEALTHY,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'ready': ready,
        'validation': {
            'enabled': current_app.config.get('REQUEST_VALIDATION_ENABLED', False),
            'middleware_registered': middleware_registered,
            'rules': rules
        }
    }), 200 if ready else 503


@health_bp.route('/metrics', methods=['GET'])
def prometheus_metrics():
    return metrics_response()
