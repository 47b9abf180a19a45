"""JSON Schema parsing with lossless ``const`` handling for JSON and YAML documents."""

from .exceptions import (
    ConstValidationError,
    DecodeError,
    ParseError,
    SchemaParserError,
    ValidationError,
)
from .models import ConstValue, Property, RawSchema, Schema, SchemaDumper, SchemaType, validate_const
from .models.parsing import Parser, Settings

__all__ = [
    "ConstValidationError",
    "DecodeError",
    "ParseError",
    "SchemaParserError",
    "ValidationError",
    "ConstValue",
    "Property",
    "RawSchema",
    "Schema",
    "SchemaDumper",
    "SchemaType",
    "validate_const",
    "Parser",
    "Settings",
]
