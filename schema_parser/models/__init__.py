"""Schema data model: const values, raw schema nodes and parsed schemas."""

from .const import ConstValue, SchemaDumper
from .const_validator import validate_const
from .raw_schema import RawProperty, RawSchema
from .schema import Property, Schema, SchemaType

__all__ = [
    "ConstValue",
    "SchemaDumper",
    "validate_const",
    "RawProperty",
    "RawSchema",
    "Property",
    "Schema",
    "SchemaType",
]
