"""Schema registry and generic payload validator.

Validation is synchronous and side-effect free. A payload either validates,
yielding the validated schema instance, or fails with one ``SchemaError`` per
violated constraint in schema traversal order. Once its schemas are
registered a validator is only read, so one instance is shared by all
requests.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..domain.exceptions import SchemaNotRegisteredException
from ..domain.schemas import ALL_SCHEMAS, PayloadSchema

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pydantic_core import ErrorDetails

logger = logging.getLogger(__name__)

_TYPE_MESSAGES = {
    "string_type": "should be string",
    "bool_type": "should be boolean",
    "int_type": "should be integer",
    "model_type": "should be object",
    "model_attributes_type": "should be object",
    "dict_type": "should be object",
}


class SchemaError(BaseModel):
    """A single violated schema constraint."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Dotted path into the payload, empty for the root")
    message: str = Field(..., description="Human-readable constraint description")

    def __str__(self) -> str:
        return f"{self.path} {self.message}" if self.path else self.message


class SchemaValidationResult(BaseModel):
    """Outcome of validating one payload against one schema."""

    model_config = ConfigDict(frozen=True)

    errors: tuple[SchemaError, ...] = ()
    value: Any = None

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _format_path(loc: tuple[int | str, ...]) -> str:
    return "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in loc)


def _to_schema_error(error: ErrorDetails) -> SchemaError:
    loc = tuple(error["loc"])
    error_type = error["type"]
    ctx = error.get("ctx", {})

    # Missing keys are reported on the object that lacks them.
    if error_type == "missing" and loc:
        return SchemaError(
            path=_format_path(loc[:-1]), message=f"should have required property '{loc[-1]}'"
        )

    if error_type == "string_pattern_mismatch":
        message = f'should match pattern "{ctx["pattern"]}"'
    elif error_type == "literal_error":
        message = "should be equal to one of the allowed values"
    else:
        message = _TYPE_MESSAGES.get(error_type, error["msg"])
    return SchemaError(path=_format_path(loc), message=message)


def _iter_annotation_types(annotation: Any) -> Iterator[Any]:
    yield annotation
    for arg in get_args(annotation):
        yield from _iter_annotation_types(arg)


def referenced_schemas(schema: type[PayloadSchema]) -> list[type[PayloadSchema]]:
    """List the sub-schemas a schema nests, in field order."""
    found: list[type[PayloadSchema]] = []
    for field in schema.model_fields.values():
        for candidate in _iter_annotation_types(field.annotation):
            if (
                isinstance(candidate, type)
                and issubclass(candidate, PayloadSchema)
                and candidate not in found
            ):
                found.append(candidate)
    return found


class SchemaValidator:
    """Registry of payload schemas plus the validation entry point."""

    def __init__(self) -> None:
        self._schemas: dict[str, type[PayloadSchema]] = {}

    def add_schema(self, schema: type[PayloadSchema]) -> None:
        """Register a schema.

        Args:
            schema: Schema to register

        Raises:
            SchemaNotRegisteredException: If a sub-schema it references is not registered
        """
        for sub_schema in referenced_schemas(schema):
            if sub_schema.schema_id not in self._schemas:
                raise SchemaNotRegisteredException(sub_schema.schema_id)
        self._schemas[schema.schema_id] = schema
        logger.debug(f"Registered schema {schema.schema_id}")

    def has_schema(self, schema_id: str) -> bool:
        return schema_id in self._schemas

    def get_schema(self, schema_id: str) -> type[PayloadSchema]:
        try:
            return self._schemas[schema_id]
        except KeyError:
            raise SchemaNotRegisteredException(schema_id) from None

    def validate(
        self, payload: Any, schema: type[PayloadSchema] | str
    ) -> SchemaValidationResult:
        """Validate a raw payload against a registered schema.

        Args:
            payload: Mapping parsed from a query string or JSON body
            schema: Schema class or schema id

        Returns:
            SchemaValidationResult: Validated instance, or every violated constraint

        Raises:
            SchemaNotRegisteredException: If the schema is not registered
        """
        schema_id = schema if isinstance(schema, str) else schema.schema_id
        schema_cls = self.get_schema(schema_id)
        try:
            value = schema_cls.model_validate(payload)
        except ValidationError as e:
            return SchemaValidationResult(errors=tuple(_to_schema_error(err) for err in e.errors()))
        return SchemaValidationResult(value=value)

    def schema_documents(self) -> dict[str, dict[str, Any]]:
        """Export every registered schema as a JSON Schema document keyed by id."""
        return {
            schema_id: schema.model_json_schema(by_alias=True)
            for schema_id, schema in self._schemas.items()
        }


def create_schema_validator() -> SchemaValidator:
    """Create a validator with every payload schema registered."""
    validator = SchemaValidator()
    for schema in ALL_SCHEMAS:
        validator.add_schema(schema)
    return validator
