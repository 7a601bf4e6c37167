"""Domain exceptions for the quote server.

Custom exceptions that represent domain-specific errors.
"""


class DomainException(Exception):
    """Base exception for all domain-related errors."""

    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationException(DomainException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")


class SchemaNotRegisteredException(DomainException):
    """Raised when a schema, or a sub-schema it references, is not registered."""

    def __init__(self, schema_id: str):
        super().__init__(f"Schema '{schema_id}' is not registered", "SCHEMA_NOT_REGISTERED")
        self.key = schema_id


class ProtocolVersionMismatchException(DomainException):
    """Raised when the quoter answers with a different protocol version than requested."""

    def __init__(self, requested_version: str, response_version: str):
        super().__init__(
            "Server does not support the requested protocol version",
            "PROTOCOL_VERSION_MISMATCH",
        )
        self.requested_version = requested_version
        self.response_version = response_version


class MalformedRequestBodyException(DomainException):
    """Raised when a request body cannot be decoded as JSON."""

    def __init__(self, message: str = "Request body must be valid JSON"):
        super().__init__(message, "MALFORMED_REQUEST_BODY")
