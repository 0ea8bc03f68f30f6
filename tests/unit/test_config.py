"""Configuration loading tests."""

import pytest

from request_validator.config.settings import (
    DevelopmentConfig,
    EnvironmentManager,
    ProductionConfig,
    TestingConfig,
    get_config,
)
from request_validator.utils.exceptions import ConfigurationError

VALIDATION_ENV_VARS = (
    'REQUEST_VALIDATION_ENABLED',
    'REQUEST_VALIDATION_EXEMPT_PATHS',
    'REQUEST_VALIDATION_METHODS',
    'REJECT_MALFORMED_JSON',
    'LOG_FORMAT',
    'LOG_LEVEL',
    'MAX_CONTENT_LENGTH',
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    # setenv then delenv so monkeypatch removes values a .env file loads during the test
    for name in VALIDATION_ENV_VARS:
        monkeypatch.setenv(name, 'placeholder')
        monkeypatch.delenv(name)


class TestDefaults:

    def test_testing_config_defaults(self):
        config = TestingConfig(env_file='')
        assert config.TESTING is True
        assert config.REQUEST_VALIDATION_ENABLED is True
        assert config.REJECT_MALFORMED_JSON is True
        assert config.REQUEST_VALIDATION_METHODS == ['POST', 'PUT', 'PATCH', 'DELETE']
        assert '/health' in config.REQUEST_VALIDATION_EXEMPT_PATHS
        assert '/metrics' in config.REQUEST_VALIDATION_EXEMPT_PATHS

    def test_development_config_enables_debug(self):
        config = DevelopmentConfig(env_file='')
        assert config.DEBUG is True
        assert config.LOG_LEVEL == 'DEBUG'
        assert config.LOG_FORMAT == 'console'

    def test_production_config_forces_json_logs(self, monkeypatch):
        monkeypatch.setenv('LOG_FORMAT', 'console')
        config = ProductionConfig(env_file='')
        assert config.DEBUG is False
        assert config.LOG_FORMAT == 'json'

    def test_to_dict_only_contains_settings(self):
        settings = TestingConfig(env_file='').to_dict()
        assert 'REQUEST_VALIDATION_ENABLED' in settings
        assert 'env_manager' not in settings


class TestEnvironmentOverrides:

    def test_lists_are_split_and_trimmed(self, monkeypatch):
        monkeypatch.setenv('REQUEST_VALIDATION_EXEMPT_PATHS', '/status, /internal/ping ,')
        monkeypatch.setenv('REQUEST_VALIDATION_METHODS', 'post,put')
        config = TestingConfig(env_file='')
        assert config.REQUEST_VALIDATION_EXEMPT_PATHS == ['/status', '/internal/ping']
        assert config.REQUEST_VALIDATION_METHODS == ['POST', 'PUT']

    @pytest.mark.parametrize('raw, expected', [('false', False), ('0', False), ('yes', True), ('ON', True)])
    def test_booleans(self, monkeypatch, raw, expected):
        monkeypatch.setenv('REQUEST_VALIDATION_ENABLED', raw)
        assert get_config('production', env_file='').REQUEST_VALIDATION_ENABLED is expected

    def test_invalid_integer_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv('MAX_CONTENT_LENGTH', 'lots')
        assert TestingConfig(env_file='').MAX_CONTENT_LENGTH == 1024 * 1024

    def test_dotenv_file_is_loaded(self, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text('REJECT_MALFORMED_JSON=false\nREQUEST_VALIDATION_METHODS=POST\n')
        config = ProductionConfig(env_file=str(env_file))
        assert config.REJECT_MALFORMED_JSON is False
        assert config.REQUEST_VALIDATION_METHODS == ['POST']

    def test_process_environment_wins_over_dotenv(self, monkeypatch, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text('REQUEST_VALIDATION_METHODS=DELETE\n')
        monkeypatch.setenv('REQUEST_VALIDATION_METHODS', 'PATCH')
        assert ProductionConfig(env_file=str(env_file)).REQUEST_VALIDATION_METHODS == ['PATCH']


class TestConfigurationErrors:

    def test_unknown_environment(self):
        with pytest.raises(ConfigurationError, match='Invalid configuration name'):
            get_config('staging-eu', env_file='')

    def test_missing_env_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            EnvironmentManager(str(tmp_path / 'missing.env'))

    def test_required_variable_missing(self, monkeypatch):
        monkeypatch.delenv('REQUEST_VALIDATOR_SECRET', raising=False)
        with pytest.raises(ConfigurationError, match='REQUEST_VALIDATOR_SECRET'):
            EnvironmentManager('').get_required_env('REQUEST_VALIDATOR_SECRET')

    def test_bad_log_format(self, monkeypatch):
        monkeypatch.setenv('LOG_FORMAT', 'xml')
        with pytest.raises(ConfigurationError, match='LOG_FORMAT'):
            TestingConfig(env_file='')

    def test_bad_log_level(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'chatty')
        with pytest.raises(ConfigurationError, match='LOG_LEVEL'):
            TestingConfig(env_file='')

    def test_relative_exempt_path(self, monkeypatch):
        monkeypatch.setenv('REQUEST_VALIDATION_EXEMPT_PATHS', 'health')
        with pytest.raises(ConfigurationError, match='Exempt path'):
            TestingConfig(env_file='')
