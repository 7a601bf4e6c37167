"""Infrastructure factory for creating adapters and dependencies.

This module follows the Factory pattern to centralize the creation of
infrastructure components, promoting loose coupling and testability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..application.quote_service import QuoteService
from .api.access_control import ApiKeyGate
from .configuration_adapter import EnvironmentConfigurationAdapter

if TYPE_CHECKING:
    from ..domain.models import ServiceConfiguration
    from ..ports.configuration import ConfigurationPort
    from ..ports.quoter import Quoter


class InfrastructureFactory:
    """Factory for creating infrastructure adapters following hexagonal architecture."""

    @staticmethod
    def create_configuration_port() -> ConfigurationPort:
        """Create a configuration port adapter.

        Returns:
            ConfigurationPort implementation
        """
        return EnvironmentConfigurationAdapter()

    @staticmethod
    def create_api_key_gate(config: ServiceConfiguration) -> ApiKeyGate:
        """Create the API key gate described by the configuration.

        Args:
            config: Service configuration

        Returns:
            ApiKeyGate enforcing the configured exemptions and allow-list
        """
        return ApiKeyGate(
            exempt_paths=config.api_key_exempt_paths,
            allowlist=config.api_key_allowlist,
        )

    @staticmethod
    def create_quote_service(quoter: Quoter) -> QuoteService:
        """Create the quote service around an injected quoter.

        Args:
            quoter: Quoter port implementation supplied by the market maker

        Returns:
            QuoteService bound to the quoter
        """
        return QuoteService(quoter)
