"""
Application configuration module.

Environment-specific configuration classes backed by python-dotenv. Values are
read from the process environment (optionally seeded from a ``.env`` file) with
type coercion, and exposed as upper-case attributes so they can be loaded with
``app.config.from_object``.

Request validation settings:
- REQUEST_VALIDATION_ENABLED: turn the middleware on or off
- REQUEST_VALIDATION_EXEMPT_PATHS: comma-separated paths that skip validation
- REQUEST_VALIDATION_METHODS: comma-separated HTTP methods whose bodies are validated
- REJECT_MALFORMED_JSON: answer undecodable bodies with 400 instead of passing them on
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import find_dotenv, load_dotenv

from request_validator.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_EXEMPT_PATHS = '/health,/health/ready,/metrics'
DEFAULT_VALIDATED_METHODS = 'POST,PUT,PATCH,DELETE'


class EnvironmentManager:
    """
    Environment variable access using python-dotenv with type validation.
    """

    def __init__(self, env_file: Optional[str] = None):
        """
        Args:
            env_file: Optional path to .env file, defaults to auto-discovery
        """
        self.env_file = env_file if env_file is not None else find_dotenv(usecwd=True)
        self.logger = logging.getLogger(f"{__name__}.EnvironmentManager")
        self._load_environment_variables()

    def _load_environment_variables(self) -> None:
        if not self.env_file:
            return

        if not Path(self.env_file).is_file():
            raise ConfigurationError(f"Environment file '{self.env_file}' does not exist")

        # override=False keeps values already present in the process environment
        load_dotenv(self.env_file, override=False)
        self.logger.info("Environment variables loaded from %s", self.env_file)

    @staticmethod
    def _coerce(key: str, value: str, var_type: type) -> Any:
        try:
            if var_type == bool:
                return value.strip().lower() in ('true', '1', 'yes', 'on')
            if var_type == list:
                return [item.strip() for item in value.split(',') if item.strip()]
            return var_type(value)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Environment variable '{key}' has invalid type: {e}") from e

    def get_required_env(self, key: str, var_type: type = str) -> Any:
        """
        Get a required environment variable.

        Raises:
            ConfigurationError: When the variable is missing or cannot be coerced
        """
        value = os.getenv(key)
        if value is None:
            raise ConfigurationError(f"Required environment variable '{key}' not found")
        return self._coerce(key, value, var_type)

    def get_optional_env(self, key: str, default: Any = None, var_type: type = str) -> Any:
        """Get an optional environment variable, falling back to ``default`` when unset or invalid."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return self._coerce(key, value, var_type)
        except ConfigurationError:
            self.logger.warning("Invalid type for '%s', using default: %s", key, default)
            return default


class BaseConfig:
    """
    Base configuration shared by every environment.
    """

    def __init__(self, env_file: Optional[str] = None):
        self.env_manager = EnvironmentManager(env_file)
        self._configure_base_settings()
        self._configure_validation_settings()
        self._configure_logging_settings()
        self._validate_configuration()

    def _configure_base_settings(self) -> None:
        env = self.env_manager
        self.APP_NAME = env.get_optional_env('APP_NAME', 'request-validator')
        self.APP_VERSION = env.get_optional_env('APP_VERSION', '1.0.0')
        self.ENVIRONMENT = env.get_optional_env('FLASK_ENV', 'production')
        self.DEBUG = env.get_optional_env('FLASK_DEBUG', False, bool)
        self.TESTING = False

        self.HOST = env.get_optional_env('FLASK_HOST', '0.0.0.0')
        self.PORT = env.get_optional_env('FLASK_PORT', 8000, int)

        # Request bodies are buffered in memory for replay
        self.MAX_CONTENT_LENGTH = env.get_optional_env('MAX_CONTENT_LENGTH', 1024 * 1024, int)

    def _configure_validation_settings(self) -> None:
        env = self.env_manager
        self.REQUEST_VALIDATION_ENABLED = env.get_optional_env('REQUEST_VALIDATION_ENABLED', True, bool)
        self.REQUEST_VALIDATION_EXEMPT_PATHS = env.get_optional_env(
            'REQUEST_VALIDATION_EXEMPT_PATHS', DEFAULT_EXEMPT_PATHS.split(','), list
        )
        self.REQUEST_VALIDATION_METHODS = [
            method.upper() for method in env.get_optional_env(
                'REQUEST_VALIDATION_METHODS', DEFAULT_VALIDATED_METHODS.split(','), list
            )
        ]
        self.REJECT_MALFORMED_JSON = env.get_optional_env('REJECT_MALFORMED_JSON', True, bool)

    def _configure_logging_settings(self) -> None:
        env = self.env_manager
        self.LOG_LEVEL = env.get_optional_env('LOG_LEVEL', 'INFO').upper()
        self.LOG_FORMAT = env.get_optional_env('LOG_FORMAT', 'json').lower()

    def _validate_configuration(self) -> None:
        if self.LOG_FORMAT not in ('json', 'console'):
            raise ConfigurationError(f"LOG_FORMAT must be 'json' or 'console', got '{self.LOG_FORMAT}'")

        if logging.getLevelName(self.LOG_LEVEL) == f"Level {self.LOG_LEVEL}":
            raise ConfigurationError(f"Unknown LOG_LEVEL '{self.LOG_LEVEL}'")

        if self.MAX_CONTENT_LENGTH <= 0:
            raise ConfigurationError("MAX_CONTENT_LENGTH must be a positive number of bytes")

        for path in self.REQUEST_VALIDATION_EXEMPT_PATHS:
            if not path.startswith('/'):
                raise ConfigurationError(f"Exempt path '{path}' must start with '/'")

    def to_dict(self) -> Dict[str, Any]:
        """Return the upper-case settings as a plain dictionary."""
        return {key: value for key, value in vars(self).items() if key.isupper()}


class DevelopmentConfig(BaseConfig):
    """Development configuration with debug output and console logs."""

    def __init__(self, env_file: Optional[str] = None):
        super().__init__(env_file)
        self.DEBUG = True
        self.ENVIRONMENT = 'development'
        self.LOG_LEVEL = 'DEBUG'
        self.LOG_FORMAT = self.env_manager.get_optional_env('LOG_FORMAT', 'console').lower()
        logger.info("Development configuration loaded")


class TestingConfig(BaseConfig):
    """Testing configuration used by the pytest fixtures."""

    def __init__(self, env_file: Optional[str] = None):
        super().__init__(env_file)
        self.TESTING = True
        self.DEBUG = False
        self.ENVIRONMENT = 'testing'
        self.REQUEST_VALIDATION_ENABLED = True
        self.REJECT_MALFORMED_JSON = True
        self.LOG_FORMAT = 'console'


class ProductionConfig(BaseConfig):
    """Production configuration; debug is always off."""

    def __init__(self, env_file: Optional[str] = None):
        super().__init__(env_file)
        self.DEBUG = False
        self.ENVIRONMENT = 'production'
        self.LOG_FORMAT = 'json'
        self._validate_production_requirements()

    def _validate_production_requirements(self) -> None:
        if not self.REQUEST_VALIDATION_ENABLED:
            logger.warning("Request validation is disabled in production")


CONFIG_MAPPING = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(config_name: Optional[str] = None, env_file: Optional[str] = None) -> BaseConfig:
    """
    Configuration factory returning the settings for an environment.

    Args:
        config_name: Environment name, defaults to ``FLASK_ENV`` or 'production'
        env_file: Optional .env file to load first

    Raises:
        ConfigurationError: When the environment name is unknown
    """
    config_name = (config_name or os.getenv('FLASK_ENV', 'production')).lower()

    config_class = CONFIG_MAPPING.get(config_name)
    if not config_class:
        available_configs = ', '.join(CONFIG_MAPPING)
        raise ConfigurationError(
            f"Invalid configuration name '{config_name}'. "
            f"Available configurations: {available_configs}"
        )

    config_instance = config_class(env_file)
    logger.info("Configuration '%s' loaded", config_name)
    return config_instance


__all__ = [
    'BaseConfig',
    'DevelopmentConfig',
    'TestingConfig',
    'ProductionConfig',
    'EnvironmentManager',
    'get_config',
]
