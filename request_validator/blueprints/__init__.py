"""Blueprint registration for the request validation service."""

from typing import List

import structlog
from flask import Flask

from request_validator.blueprints.api import api_bp
from request_validator.blueprints.health import health_bp

logger = structlog.get_logger(__name__)


def register_blueprints(app: Flask) -> List[str]:
    """Register every blueprint on ``app`` and return their names."""
    registered = []
    for blueprint in (health_bp, api_bp):
        app.register_blueprint(blueprint)
        registered.append(blueprint.name)

    logger.info("Blueprints registered", blueprints=registered)
    return registered


__all__ = ['register_blueprints', 'api_bp', 'health_bp']
