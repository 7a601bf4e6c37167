"""Centralized error handling for the API layer.

This module provides consistent error handling across all API endpoints,
mapping domain exceptions to appropriate HTTP responses. Every error body has
the shape ``{"errors": [message, ...]}``; internal details never leave the
process.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...domain.exceptions import (
    ConfigurationException,
    DomainException,
    MalformedRequestBodyException,
    ProtocolVersionMismatchException,
    SchemaNotRegisteredException,
)

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response model."""

    model_config = ConfigDict(strict=True, frozen=True)

    errors: list[str] = Field(..., description="User-facing error messages")


# Mapping of domain exception types to HTTP status codes
EXCEPTION_STATUS_MAP = {
    MalformedRequestBodyException: status.HTTP_400_BAD_REQUEST,
    ProtocolVersionMismatchException: status.HTTP_501_NOT_IMPLEMENTED,
    SchemaNotRegisteredException: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationException: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_error_response(status_code: int, errors: list[str]) -> JSONResponse:
    """Create a standardized error response.

    Args:
        status_code: HTTP status code
        errors: Error messages to return

    Returns:
        JSONResponse with error information
    """
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(errors=errors).model_dump(),
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Handle domain-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The domain exception

    Returns:
        JSONResponse with appropriate status code and error details
    """
    logger.warning(
        f"Domain exception on {request.method} {request.url.path}: "
        f"{exc.message} (code: {exc.error_code})"
    )

    status_code = EXCEPTION_STATUS_MAP.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return create_error_response(status_code, [exc.message])


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing and framework HTTP exceptions with consistent format.

    Args:
        request: The request that caused the exception
        exc: The HTTP exception

    Returns:
        JSONResponse with error details
    """
    logger.info(
        f"HTTP exception on {request.method} {request.url.path}: {exc.status_code} - {exc.detail}"
    )
    return create_error_response(exc.status_code, [str(exc.detail)])


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions, including quoter failures.

    Args:
        request: The request that caused the exception
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, ["An internal server error occurred"]
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
