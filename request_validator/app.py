"""
Flask application factory.

Assembles configuration, structured logging, request logging, the request
validation middleware, error handlers and blueprints into one application.
Hook order matters: request logging registers its ``before_request`` hook first
so a correlation ID exists before the validation middleware can reject a
request.
"""

from typing import Optional

import structlog
from flask import Flask

from request_validator.blueprints import register_blueprints
from request_validator.config.settings import BaseConfig, get_config
from request_validator.middleware import RequestValidationMiddleware
from request_validator.monitoring.logging import init_request_logging, setup_structured_logging
from request_validator.utils.exceptions import register_error_handlers

logger = structlog.get_logger(__name__)


class FlaskApplicationFactory:
    """
    Application factory wiring the validation service together.
    """

    def create_application(
        self,
        config_name: Optional[str] = None,
        config_object: Optional[BaseConfig] = None
    ) -> Flask:
        """
        Create a configured Flask application.

        Args:
            config_name: Environment name passed to ``get_config``
            config_object: Ready-made configuration, takes precedence over ``config_name``

        Raises:
            ConfigurationError: When the configuration cannot be loaded
        """
        config = config_object or get_config(config_name)

        app = Flask(__name__)
        app.config.from_object(config)

        app_logger = setup_structured_logging(app)
        init_request_logging(app, app_logger)

        self._configure_validation(app)
        register_error_handlers(app)
        register_blueprints(app)

        app_logger.info(
            "Application created",
            environment=app.config.get('ENVIRONMENT'),
            validation_enabled=app.config.get('REQUEST_VALIDATION_ENABLED'),
            reject_malformed_json=app.config.get('REJECT_MALFORMED_JSON')
        )
        return app

    def _configure_validation(self, app: Flask) -> RequestValidationMiddleware:
        return RequestValidationMiddleware(app)


_factory = FlaskApplicationFactory()


def create_app(config_name: Optional[str] = None, config_object: Optional[BaseConfig] = None) -> Flask:
    """Create the Flask application for ``config_name`` (defaults to ``FLASK_ENV``)."""
    return _factory.create_application(config_name, config_object)
