"""Configuration adapter implementation.

Concrete implementation of the ConfigurationPort interface.
Loads configuration from environment variables.
"""

from __future__ import annotations

import os
from typing import Literal, cast

from ..domain.constants import DEFAULT_API_KEY_EXEMPT_PATHS
from ..domain.exceptions import ConfigurationException
from ..domain.models import ServiceConfiguration, ValidationIssue, ValidationLevel, ValidationResult
from ..ports.configuration import ConfigurationPort


def _split_list(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


class EnvironmentConfigurationAdapter(ConfigurationPort):
    """Adapter that loads configuration from environment variables."""

    def load_configuration(self) -> ServiceConfiguration:
        """Load service configuration from environment variables.

        Returns:
            ServiceConfiguration: Validated configuration

        Raises:
            ConfigurationException: If configuration is invalid
        """
        try:
            api_port = int(os.getenv("API_PORT", "8000"))
            log_level = os.getenv("LOG_LEVEL", "INFO").upper()
            environment = os.getenv("ENVIRONMENT", "development").lower()
            api_key_allowlist = _split_list(os.getenv("API_KEY_ALLOWLIST", ""))
            exempt_paths_raw = os.getenv("API_KEY_EXEMPT_PATHS")
            api_key_exempt_paths = (
                DEFAULT_API_KEY_EXEMPT_PATHS
                if exempt_paths_raw is None
                else _split_list(exempt_paths_raw)
            )

            # Validate and convert to proper types
            if log_level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
                raise ValueError(f"Invalid log level: {log_level}")

            if environment not in ["development", "staging", "production"]:
                raise ValueError(f"Invalid environment: {environment}")

            config = ServiceConfiguration(
                api_port=api_port,
                log_level=cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level),
                environment=cast(Literal["development", "staging", "production"], environment),
                api_key_allowlist=api_key_allowlist,
                api_key_exempt_paths=api_key_exempt_paths,
            )

            validation_result = self.validate_configuration(config)
            if not validation_result.is_valid:
                error_messages = [
                    issue.message
                    for issue in validation_result.get_issues_by_level(ValidationLevel.ERROR)
                ]
                raise ConfigurationException(
                    f"Configuration validation failed: {'; '.join(error_messages)}"
                )
            return config

        except Exception as e:
            raise ConfigurationException(f"Failed to load configuration: {str(e)}") from e

    def validate_configuration(self, config: ServiceConfiguration) -> ValidationResult:
        """Validate a configuration object.

        Args:
            config: Configuration to validate

        Returns:
            ValidationResult: Result with validation status and any issues
        """
        result = ValidationResult(context="ServiceConfiguration")

        for path in config.api_key_exempt_paths:
            if not path.startswith("/"):
                result.add_issue(
                    ValidationIssue(
                        level=ValidationLevel.ERROR,
                        category="ACCESS",
                        message=f"Exempt path '{path}' must start with '/'",
                        resolution="Use absolute request paths such as /submit",
                        details={"path": path},
                    )
                )

        # Presence-only key checks are acceptable outside production.
        if config.environment == "production" and not config.api_key_allowlist:
            result.add_issue(
                ValidationIssue(
                    level=ValidationLevel.WARNING,
                    category="ACCESS",
                    message="No API key allow-list configured; any API key will be accepted",
                    resolution="Set API_KEY_ALLOWLIST to a comma separated list of keys",
                )
            )

        return result
