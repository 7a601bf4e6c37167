"""Infrastructure layer - HTTP surface and configuration adapters."""

from .configuration_adapter import EnvironmentConfigurationAdapter
from .factory import InfrastructureFactory

__all__ = ["EnvironmentConfigurationAdapter", "InfrastructureFactory"]
