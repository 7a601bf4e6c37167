"""Quote server - HTTP translation layer for request-for-quote taker traffic."""

from .main import create_app
from .ports.quoter import Quoter

__all__ = ["Quoter", "create_app"]
__version__ = "0.1.0"
