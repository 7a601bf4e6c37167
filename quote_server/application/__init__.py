"""Application layer - Request parsing, schema validation and quoter orchestration."""

from .quote_service import QuoteService
from .request_parser import parse_sign_request, parse_submit_request, parse_taker_request
from .schema_validator import (
    SchemaError,
    SchemaValidationResult,
    SchemaValidator,
    create_schema_validator,
)

__all__ = [
    "QuoteService",
    "SchemaError",
    "SchemaValidationResult",
    "SchemaValidator",
    "create_schema_validator",
    "parse_sign_request",
    "parse_submit_request",
    "parse_taker_request",
]
