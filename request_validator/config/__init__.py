"""Configuration package for the request validation service."""

from request_validator.config.settings import (
    BaseConfig,
    DevelopmentConfig,
    EnvironmentManager,
    ProductionConfig,
    TestingConfig,
    get_config,
)

__all__ = [
    'BaseConfig',
    'DevelopmentConfig',
    'EnvironmentManager',
    'ProductionConfig',
    'TestingConfig',
    'get_config',
]
