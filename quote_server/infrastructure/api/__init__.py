"""HTTP API - routes, access control and error handlers."""

from .access_control import ApiKeyGate, ApiKeyMiddleware
from .error_handlers import register_error_handlers
from .routes import router

__all__ = ["ApiKeyGate", "ApiKeyMiddleware", "register_error_handlers", "router"]
