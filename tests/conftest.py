"""
Shared pytest fixtures.

Applications are built with ``TestingConfig`` and no ``.env`` discovery so the
suite does not depend on the developer's environment.
"""

import pytest
import structlog
from flask import Flask

from request_validator.app import create_app
from request_validator.config.settings import TestingConfig

logger = structlog.get_logger("tests")


@pytest.fixture
def testing_config():
    """Testing configuration isolated from any local .env file."""
    return TestingConfig(env_file='')


@pytest.fixture
def app(testing_config) -> Flask:
    """Fully assembled application from the factory."""
    application = create_app(config_object=testing_config)
    application.config['TESTING'] = True
    yield application


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def post_json(client):
    """POST a raw JSON string to ``path`` on the factory application."""

    def _post(path, body, **headers):
        return client.post(path, data=body, content_type='application/json', headers=headers)

    return _post
