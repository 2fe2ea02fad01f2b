"""
Tests for app/validation.py.

Tests key functionality including:
- Validating against pydantic models and TypeAdapter types
- Conversion of pydantic errors to field errors
- ValidationResult helpers
- Schema field introspection for help
"""

from dataclasses import dataclass
from typing import Any

import pytest
from pydantic import BaseModel, Field

from cmdinfra.app.errors import FieldError
from cmdinfra.app.validation import (
    SchemaField,
    SchemaValidator,
    ValidationResult,
    schema_fields,
)
from cmdinfra.exceptions import ValidationError


class Server(BaseModel):
    host: str = "localhost"
    port: int


class AppConfig(BaseModel):
    server: Server
    debug: bool = False


@dataclass
class Point:
    x: int
    y: int


@pytest.fixture
def validator() -> SchemaValidator:
    return SchemaValidator()


# =============================================================================
# Test Validation
# =============================================================================


@pytest.mark.unit
class TestSchemaValidator:
    """Test validating data against schemas."""

    def test_model_valid(self, validator):
        result = validator.validate(Server, {"port": "8080"})

        assert result.is_valid
        assert result.value == Server(port=8080)
        assert result.errors == []

    def test_lax_boolean_coercion(self, validator):
        result = validator.validate(AppConfig, {"server": {"port": 1}, "debug": "true"})

        assert result.value.debug is True

    def test_nested_error_path(self, validator):
        result = validator.validate(AppConfig, {"server": {"port": "x"}})

        assert not result.is_valid
        assert result.errors[0].path == ("server", "port")
        assert result.errors[0].dotted == "server.port"

    def test_multiple_errors(self, validator):
        result = validator.validate(Point, {"x": "a"})

        assert {e.path for e in result.errors} == {("x",), ("y",)}

    def test_type_adapter_schema(self, validator):
        assert validator.validate(dict[str, int], {"a": "1"}).value == {"a": 1}

    def test_non_mapping_data(self, validator):
        result = validator.validate(Server, "not a mapping")

        assert not result.is_valid
        assert result.errors[0].path == ()

    def test_is_valid(self, validator):
        assert validator.is_valid(Server, {"port": 1})
        assert not validator.is_valid(Server, {})


@pytest.mark.unit
class TestValidationResult:
    """Test ValidationResult helpers."""

    def test_add_error(self):
        result = ValidationResult(is_valid=True)
        result.add_error(("a",), "bad")

        assert not result.is_valid
        assert result.has_errors
        assert result.errors == [FieldError(("a",), "bad")]

    def test_unwrap_valid(self):
        assert ValidationResult(is_valid=True, value=5).unwrap() == 5

    def test_unwrap_invalid(self):
        result = ValidationResult(is_valid=False, errors=[FieldError(("a",), "bad")])

        with pytest.raises(ValidationError) as exc_info:
            result.unwrap()
        assert exc_info.value.errors == result.errors


@pytest.mark.unit
class TestFieldError:
    """Test FieldError rendering."""

    def test_str_with_path(self):
        assert str(FieldError(("a", 0, "b"), "bad")) == "a.0.b: bad"

    def test_str_root(self):
        assert str(FieldError((), "bad")) == "bad"


# =============================================================================
# Test Schema Fields
# =============================================================================


class Described(BaseModel):
    name: str = Field(description="Who to greet")
    count: int = 3
    mode: str | None = None


@pytest.mark.unit
class TestSchemaFields:
    """Test schema introspection."""

    def test_model_fields(self):
        fields = schema_fields(Described)

        assert fields[0] == SchemaField("name", "string", True, "Who to greet")
        assert fields[1] == SchemaField("count", "integer", False, "", 3)
        assert fields[2].type == "string"
        assert not fields[2].required

    def test_dataclass(self):
        assert [f.name for f in schema_fields(Point)] == ["x", "y"]

    def test_non_object_schema(self):
        assert schema_fields(dict[str, Any]) == []
        assert schema_fields(int) == []

    def test_schema_without_json_schema(self):
        class Opaque:
            pass

        assert schema_fields(Opaque) == []
