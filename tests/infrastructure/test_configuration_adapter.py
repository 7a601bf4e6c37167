"""Tests for the configuration adapter.

These tests verify that the configuration adapter correctly
loads and validates configuration from environment variables.
"""

import os
from unittest.mock import patch

import pytest
from quote_server.domain.exceptions import ConfigurationException
from quote_server.domain.models import ServiceConfiguration, ValidationLevel
from quote_server.infrastructure.configuration_adapter import EnvironmentConfigurationAdapter


class TestEnvironmentConfigurationAdapter:
    """Test cases for EnvironmentConfigurationAdapter."""

    @pytest.fixture
    def adapter(self) -> EnvironmentConfigurationAdapter:
        """Create a configuration adapter instance."""
        return EnvironmentConfigurationAdapter()

    def test_load_default_configuration(self, adapter: EnvironmentConfigurationAdapter) -> None:
        """Test loading configuration with default values."""
        # Arrange - Use empty environment
        with patch.dict(os.environ, {}, clear=True):
            # Act
            config = adapter.load_configuration()

            # Assert
            assert config.api_port == 8000
            assert config.log_level == "INFO"
            assert config.environment == "development"
            assert config.api_key_allowlist == ()
            assert config.api_key_exempt_paths == ("/submit",)

    def test_load_configuration_from_environment(
        self, adapter: EnvironmentConfigurationAdapter
    ) -> None:
        """Test loading configuration from environment variables."""
        # Arrange
        env_vars = {
            "API_PORT": "9000",
            "LOG_LEVEL": "debug",
            "ENVIRONMENT": "Production",
            "API_KEY_ALLOWLIST": "0xaaa, 0xbbb,,",
            "API_KEY_EXEMPT_PATHS": "/submit,/rfqm/v2/sign",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            # Act
            config = adapter.load_configuration()

            # Assert
            assert config.api_port == 9000
            assert config.log_level == "DEBUG"
            assert config.environment == "production"
            assert config.api_key_allowlist == ("0xaaa", "0xbbb")
            assert config.api_key_exempt_paths == ("/submit", "/rfqm/v2/sign")

    def test_empty_exempt_paths_disable_exemptions(
        self, adapter: EnvironmentConfigurationAdapter
    ) -> None:
        """Test that an explicitly empty exemption list is honoured."""
        with patch.dict(os.environ, {"API_KEY_EXEMPT_PATHS": ""}, clear=True):
            config = adapter.load_configuration()

            assert config.api_key_exempt_paths == ()

    def test_invalid_log_level_raises_exception(
        self, adapter: EnvironmentConfigurationAdapter
    ) -> None:
        """Test that invalid log levels raise ConfigurationException."""
        # Arrange
        with patch.dict(os.environ, {"LOG_LEVEL": "INVALID"}, clear=True):
            # Act & Assert
            with pytest.raises(ConfigurationException) as exc_info:
                adapter.load_configuration()

            assert "Invalid log level: INVALID" in str(exc_info.value)

    def test_invalid_environment_raises_exception(
        self, adapter: EnvironmentConfigurationAdapter
    ) -> None:
        """Test that unknown environments raise ConfigurationException."""
        with patch.dict(os.environ, {"ENVIRONMENT": "moon"}, clear=True):
            with pytest.raises(ConfigurationException) as exc_info:
                adapter.load_configuration()

            assert "Invalid environment: moon" in str(exc_info.value)

    def test_invalid_port_raises_exception(self, adapter: EnvironmentConfigurationAdapter) -> None:
        """Test that a non-numeric port raises ConfigurationException."""
        with patch.dict(os.environ, {"API_PORT": "http"}, clear=True):
            with pytest.raises(ConfigurationException) as exc_info:
                adapter.load_configuration()

            assert exc_info.value.error_code == "CONFIGURATION_ERROR"

    def test_relative_exempt_path_fails_validation(
        self, adapter: EnvironmentConfigurationAdapter
    ) -> None:
        """Test that exempt paths must be absolute."""
        with patch.dict(os.environ, {"API_KEY_EXEMPT_PATHS": "submit"}, clear=True):
            with pytest.raises(ConfigurationException) as exc_info:
                adapter.load_configuration()

            assert "Exempt path 'submit' must start with '/'" in str(exc_info.value)

    def test_production_without_allowlist_warns(
        self, adapter: EnvironmentConfigurationAdapter
    ) -> None:
        """Test that production without an allow-list is valid but warned about."""
        # Arrange
        config = ServiceConfiguration(api_port=8000, log_level="INFO", environment="production")

        # Act
        result = adapter.validate_configuration(config)

        # Assert
        assert result.is_valid
        warnings = result.get_issues_by_level(ValidationLevel.WARNING)
        assert len(warnings) == 1
        assert warnings[0].category == "ACCESS"

    def test_development_configuration_has_no_issues(
        self, adapter: EnvironmentConfigurationAdapter, service_config: ServiceConfiguration
    ) -> None:
        """Test that the default development configuration is clean."""
        result = adapter.validate_configuration(service_config)

        assert result.is_valid
        assert result.issues == []
