"""Composition root for the quote server.

This module assembles the FastAPI application using hexagonal architecture:
the market maker supplies a Quoter implementation, and ``create_app`` binds it
to the routes behind the API key gate.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from .infrastructure.api.access_control import ApiKeyMiddleware
from .infrastructure.api.error_handlers import register_error_handlers
from .infrastructure.api.routes import router
from .infrastructure.factory import InfrastructureFactory

if TYPE_CHECKING:
    from .domain.models import ServiceConfiguration
    from .ports.quoter import Quoter

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str = "INFO") -> None:
    """Configure root logging for the service."""
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan manager."""
    config: ServiceConfiguration = app.state.config
    logger.info("Starting quote server")
    logger.info(f"Service configured for environment: {config.environment}")
    logger.info(f"API Port: {config.api_port}")
    logger.info(f"Log Level: {config.log_level}")
    logger.info(f"API key exempt paths: {', '.join(config.api_key_exempt_paths) or 'none'}")
    logger.info(f"API key allow-list: {len(config.api_key_allowlist)} keys")
    try:
        yield
    finally:
        logger.info("Shutting down quote server")


def create_app(quoter: Quoter, config: ServiceConfiguration | None = None) -> FastAPI:
    """Create the quote server application.

    Args:
        quoter: Quoter port implementation supplied by the market maker
        config: Service configuration; loaded from the environment when omitted

    Returns:
        FastAPI application serving the RFQ taker endpoints

    Raises:
        ConfigurationException: If the environment configuration is invalid
    """
    if config is None:
        config = InfrastructureFactory.create_configuration_port().load_configuration()
    configure_logging(config.log_level)

    app = FastAPI(
        title="Quote Server",
        description="Request-for-quote taker API in front of a market maker's quoter",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config
    app.state.quote_service = InfrastructureFactory.create_quote_service(quoter)

    app.add_middleware(ApiKeyMiddleware, gate=InfrastructureFactory.create_api_key_gate(config))

    # Register error handlers
    register_error_handlers(app)

    app.include_router(router)
    return app
