"""Ports layer - Interfaces for external collaborators."""

from .configuration import ConfigurationPort
from .quoter import Quoter

__all__ = ["ConfigurationPort", "Quoter"]
