"""
WSGI entry point for the request validation service.

Usage:
    # Production
    gunicorn --config gunicorn.conf.py "app:application"

    # Development server
    FLASK_ENV=development python app.py
"""

import logging
import os
import sys

from request_validator.app import create_app
from request_validator.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_wsgi_application(config_name=None):
    """
    Create the WSGI application, exiting the process on configuration errors.

    A bad configuration or an invalid validation pattern must stop the worker
    at boot rather than surface on the first request.
    """
    try:
        return create_app(config_name)
    except ConfigurationError as e:
        logger.critical("Configuration validation failed: %s", e)
        sys.exit(1)


application = get_wsgi_application()


if __name__ == '__main__':
    application.run(
        host=application.config.get('HOST', '0.0.0.0'),
        port=application.config.get('PORT', 8000),
        debug=application.config.get('DEBUG', False)
    )
