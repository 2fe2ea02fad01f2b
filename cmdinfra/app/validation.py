"""
Schema validation for command input, output and configuration.

This module adapts pydantic to the framework's validation contract: given a
schema and raw data, produce either a validated value or a list of
field-path/message errors. Schemas are pydantic models or any type that
pydantic's TypeAdapter accepts (TypedDict, dataclass, ``dict[str, int]``...).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pydantic
from pydantic import BaseModel, TypeAdapter

from ..exceptions import ValidationError
from .errors import FieldError


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool
    value: Any = None
    errors: list[FieldError] = field(default_factory=list)

    def add_error(self, path: tuple[str | int, ...], message: str) -> None:
        """Add an error and mark the result invalid."""
        self.errors.append(FieldError(path, message))
        self.is_valid = False

    @property
    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    def unwrap(self) -> Any:
        """
        Return the validated value.

        Raises:
            ValidationError: If validation failed, carrying the field errors
        """
        if not self.is_valid:
            raise ValidationError("validation failed", self.errors)
        return self.value


@dataclass(frozen=True)
class SchemaField:
    """A single top-level field of a schema, as shown in help output."""

    name: str
    type: str
    required: bool
    description: str = ""
    default: Any = None


def _is_model(schema: Any) -> bool:
    return isinstance(schema, type) and issubclass(schema, BaseModel)


def _convert_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    """Convert pydantic's error list into field errors."""
    return [FieldError(tuple(err["loc"]), err["msg"]) for err in exc.errors()]


class SchemaValidator:
    """Validates raw data against a schema."""

    def validate(self, schema: Any, data: Any) -> ValidationResult:
        """
        Validate data against a schema.

        Args:
            schema: Pydantic model class or any TypeAdapter-compatible type
            data: Raw data (usually a mapping)

        Returns:
            ValidationResult: the validated value, or the field errors
        """
        try:
            if _is_model(schema):
                value = schema.model_validate(data)
            else:
                value = TypeAdapter(schema).validate_python(data)
        except pydantic.ValidationError as e:
            return ValidationResult(is_valid=False, errors=_convert_errors(e))
        return ValidationResult(is_valid=True, value=value)

    def is_valid(self, schema: Any, data: Any) -> bool:
        """Check whether data satisfies a schema."""
        return self.validate(schema, data).is_valid


def _json_schema(schema: Any) -> dict[str, Any] | None:
    """Build the JSON schema of a schema, or None when it has none."""
    try:
        if _is_model(schema):
            return schema.model_json_schema()
        return TypeAdapter(schema).json_schema()
    except pydantic.PydanticUserError:
        return None


def _type_name(prop: Mapping[str, Any]) -> str:
    """Short type label for a JSON schema property."""
    if "type" in prop:
        return str(prop["type"])
    for key in ("anyOf", "oneOf"):
        if key in prop:
            names = [_type_name(p) for p in prop[key] if p.get("type") != "null"]
            return "|".join(n for n in names if n) or "value"
    if "enum" in prop:
        return "|".join(str(v) for v in prop["enum"])
    return "value"


def schema_fields(schema: Any) -> list[SchemaField]:
    """
    List the top-level fields of an object schema.

    Args:
        schema: Pydantic model class or TypeAdapter-compatible type

    Returns:
        Fields in declaration order; empty for non-object schemas
    """
    js = _json_schema(schema)
    if not js or "properties" not in js:
        return []

    required = set(js.get("required", []))
    return [
        SchemaField(
            name=name,
            type=_type_name(prop),
            required=name in required,
            description=prop.get("description", ""),
            default=prop.get("default"),
        )
        for name, prop in js["properties"].items()
    ]


__all__ = [
    "SchemaField",
    "SchemaValidator",
    "ValidationResult",
    "schema_fields",
]
