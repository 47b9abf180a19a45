# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Untyped schema node representation, decoded from YAML nodes or JSON data."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import yaml

from ..exceptions import DecodeError, ParseError, SchemaParserError, ValidationError
from ..file_io.source_location import SourceLocation, join_pointer
from .const import ConstValue
from .yaml_json import ConversionError, STR_TAG, dump_canonical, short_tag, yaml_node_to_json

_STRING_FIELDS = ("type", "format", "description")


def node_location(node: Any, pointer: str) -> SourceLocation:
    mark = getattr(node, "start_mark", None)
    if mark is None:
        return SourceLocation(pointer=pointer)
    return SourceLocation(pointer=pointer, line=mark.line + 1, column=mark.column + 1)


def _scalar_str(node: yaml.Node, key: str) -> str:
    if not isinstance(node, yaml.ScalarNode) or node.tag != STR_TAG:
        raise ValidationError(f"'{key}' must be a string, got {short_tag(node)}")
    return node.value


@dataclass
class RawProperty:
    name: str
    schema: "RawSchema"


@dataclass
class RawSchema:
    """Schema node before semantic parsing.

    ``const`` is None when the document has no ``const`` key. ``enum`` holds
    canonical JSON bytes for each allowed value.
    """

    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    properties: List[RawProperty] = field(default_factory=list)
    required: List[str] = field(default_factory=list)
    items: Optional["RawSchema"] = None
    enum: Optional[List[bytes]] = None
    const: Optional[ConstValue] = None
    pointer: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    # -------------------------
    # YAML
    # -------------------------

    @classmethod
    def from_yaml_node(
        cls,
        node: yaml.Node,
        *,
        pointer: str = "",
        errors: Optional[List[ParseError]] = None,
    ) -> "RawSchema":
        """Decode a schema mapping node.

        If ``errors`` is given, field failures are appended to it and decoding
        continues with sibling fields; otherwise the first failure is raised.
        """
        if not isinstance(node, yaml.MappingNode):
            raise ParseError(f"schema must be a mapping, got {short_tag(node)}", location=node_location(node, pointer))

        raw = cls(pointer=pointer)
        for key_node, value_node in node.value:
            key = getattr(key_node, "value", None)
            if not isinstance(key, str):
                continue
            field_pointer = join_pointer(pointer, key)
            try:
                raw._decode_yaml_field(key, value_node, field_pointer, errors)
            except ParseError as exc:
                if errors is None:
                    raise
                errors.append(exc)
            except SchemaParserError as exc:
                err = ParseError(f"decode {key!r}: {exc}", location=node_location(value_node, field_pointer), cause=exc)
                if errors is None:
                    raise err from exc
                errors.append(err)
        return raw

    def _decode_yaml_field(
        self,
        key: str,
        node: yaml.Node,
        pointer: str,
        errors: Optional[List[ParseError]],
    ) -> None:
        if key in _STRING_FIELDS:
            setattr(self, key, _scalar_str(node, key))
        elif key == "const":
            self.const = ConstValue.from_yaml_node(node)
        elif key == "enum":
            if not isinstance(node, yaml.SequenceNode):
                raise ValidationError(f"'enum' must be a sequence, got {short_tag(node)}")
            values = []
            for item in node.value:
                try:
                    values.append(yaml_node_to_json(item))
                except ConversionError as exc:
                    raise DecodeError(str(exc), target_type="enum", tag=short_tag(item), node=item) from exc
            self.enum = values
        elif key == "required":
            if not isinstance(node, yaml.SequenceNode):
                raise ValidationError(f"'required' must be a sequence, got {short_tag(node)}")
            self.required = [_scalar_str(item, "required") for item in node.value]
        elif key == "properties":
            if not isinstance(node, yaml.MappingNode):
                raise ValidationError(f"'properties' must be a mapping, got {short_tag(node)}")
            for name_node, schema_node in node.value:
                name = _scalar_str(name_node, "properties")
                prop_pointer = join_pointer(pointer, name)
                try:
                    prop_schema = RawSchema.from_yaml_node(schema_node, pointer=prop_pointer, errors=errors)
                except ParseError as exc:
                    if errors is None:
                        raise
                    errors.append(exc)
                    continue
                self.properties.append(RawProperty(name=name, schema=prop_schema))
        elif key == "items":
            self.items = RawSchema.from_yaml_node(node, pointer=pointer, errors=errors)
        else:
            self.extra[key] = node

    # -------------------------
    # JSON
    # -------------------------

    @classmethod
    def from_json(
        cls,
        data: Union[str, bytes, Dict[str, Any]],
        *,
        pointer: str = "",
        errors: Optional[List[ParseError]] = None,
    ) -> "RawSchema":
        """Decode a schema from JSON text or an already decoded JSON object.

        Errors carry a pointer but no line/column; see ``from_yaml_node``
        for the ``errors`` semantics.
        """
        if isinstance(data, (str, bytes)):
            data = json.loads(data)
        return cls._from_json_value(data, pointer=pointer, errors=errors)

    @classmethod
    def _from_json_value(
        cls,
        data: Any,
        *,
        pointer: str,
        errors: Optional[List[ParseError]],
    ) -> "RawSchema":
        if not isinstance(data, dict):
            raise ParseError(f"schema must be an object, got {type(data).__name__}", location=SourceLocation(pointer=pointer))

        raw = cls(pointer=pointer)
        for key, value in data.items():
            field_pointer = join_pointer(pointer, key)
            try:
                raw._decode_json_field(key, value, field_pointer, errors)
            except ParseError as exc:
                if errors is None:
                    raise
                errors.append(exc)
            except (SchemaParserError, ValueError) as exc:
                err = ParseError(f"decode {key!r}: {exc}", location=SourceLocation(pointer=field_pointer), cause=exc)
                if errors is None:
                    raise err from exc
                errors.append(err)
        return raw

    def _decode_json_field(
        self,
        key: str,
        value: Any,
        pointer: str,
        errors: Optional[List[ParseError]],
    ) -> None:
        if key in _STRING_FIELDS:
            if not isinstance(value, str):
                raise ValidationError(f"'{key}' must be a string, got {type(value).__name__}")
            setattr(self, key, value)
        elif key == "const":
            self.const = ConstValue.from_json(dump_canonical(value))
        elif key == "enum":
            if not isinstance(value, list):
                raise ValidationError(f"'enum' must be an array, got {type(value).__name__}")
            self.enum = [dump_canonical(item) for item in value]
        elif key == "required":
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ValidationError("'required' must be an array of strings")
            self.required = list(value)
        elif key == "properties":
            if not isinstance(value, dict):
                raise ValidationError(f"'properties' must be an object, got {type(value).__name__}")
            for name, prop_value in value.items():
                prop_pointer = join_pointer(pointer, name)
                try:
                    prop_schema = RawSchema._from_json_value(prop_value, pointer=prop_pointer, errors=errors)
                except ParseError as exc:
                    if errors is None:
                        raise
                    errors.append(exc)
                    continue
                self.properties.append(RawProperty(name=name, schema=prop_schema))
        elif key == "items":
            self.items = RawSchema._from_json_value(value, pointer=pointer, errors=errors)
        else:
            self.extra[key] = value
