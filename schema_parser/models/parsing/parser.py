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

"""Schema parser: raw schema nodes to the parsed ``Schema`` model."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, List, Optional, TypeVar, Union

import yaml

from ...config import parser_config
from ...exceptions import ParseError, SchemaParserError, ValidationError
from ...file_io.source_location import SourceLocation, SourceMap, join_pointer, source_from_settings
from ...file_io.yaml_loader import yaml_loader
from ..raw_schema import RawSchema
from ..schema import Property, Schema, SchemaType
from ..yaml_json import decode_json_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Settings:
    """Parser settings.

    Args:
        file_path: Document path, used in error locations.
        source_map: JSON pointer -> line/column map of the document.
        strict: Raise on the first error instead of collecting them.
    """
    file_path: Optional[Path] = None
    source_map: Optional[SourceMap] = None
    strict: bool = field(default_factory=lambda: parser_config.strict)


class Parser:
    """Parses raw schema nodes into ``Schema`` objects.

    In strict mode the first error is raised as ``ParseError``. Otherwise
    errors are collected in ``errors``, the failing field is left unset and
    parsing continues with sibling fields and schemas.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.errors: List[ParseError] = []

    # -------------------------
    # Loading
    # -------------------------

    def load(self, content: Union[str, bytes]) -> RawSchema:
        """Load a YAML or JSON schema document from string content."""
        root, source_map = yaml_loader.load_string_with_source(content)
        self.settings.source_map = source_map
        return self.load_node(root)

    def load_file(self, file_path: Union[str, Path]) -> RawSchema:
        """Load a YAML or JSON schema document file."""
        root, source_map = yaml_loader.load_file_with_source(file_path)
        self.settings.file_path = Path(file_path)
        self.settings.source_map = source_map
        return self.load_node(root)

    def load_node(self, root: yaml.Node) -> RawSchema:
        collected: Optional[List[ParseError]] = None if self.settings.strict else []
        try:
            raw = RawSchema.from_yaml_node(root, errors=collected)
        except ParseError as exc:
            self._locate(exc)
            raise

        for err in collected or ():
            self._record(self._locate(err))
        return raw

    # -------------------------
    # Parsing
    # -------------------------

    def parse(self, raw: RawSchema) -> Schema:
        """Parse a raw schema tree."""
        schema = self._parse(raw)
        logger.debug(f"Parsed schema{' ' + str(self.settings.file_path) if self.settings.file_path else ''}")
        return schema

    def parse_content(self, content: Union[str, bytes]) -> Schema:
        return self.parse(self.load(content))

    def parse_file(self, file_path: Union[str, Path]) -> Schema:
        return self.parse(self.load_file(file_path))

    def _parse(self, raw: RawSchema) -> Schema:
        schema = Schema(
            format=raw.format or "",
            description=raw.description or "",
            pointer=raw.pointer,
        )

        schema.type = self._guard(raw, "type", lambda: _parse_type(raw.type), SchemaType.EMPTY)

        required = set(raw.required)
        for prop in raw.properties:
            schema.properties.append(
                Property(name=prop.name, schema=self._parse(prop.schema), required=prop.name in required)
            )

        if raw.items is not None:
            schema.items = self._parse(raw.items)

        if raw.enum is not None:
            schema.enum = self._guard(raw, "enum", lambda: [decode_json_value(v) for v in raw.enum], [])

        if raw.const is not None and raw.const.is_set:
            schema.const = raw.const.value()
            schema.const_set = True

        return schema

    def _guard(self, raw: RawSchema, key: str, fn: Callable[[], T], default: T) -> T:
        try:
            return fn()
        except (SchemaParserError, ValueError) as exc:
            pointer = join_pointer(raw.pointer, key)
            err = self._locate(ParseError(f"parse {key!r}: {exc}", cause=exc, location=SourceLocation(pointer=pointer)))
            if self.settings.strict:
                raise err from exc
            self._record(err)
            return default

    # -------------------------
    # Errors
    # -------------------------

    def _locate(self, err: ParseError) -> ParseError:
        """Fill in the file path and, when missing, line/column from the source map."""
        loc = err.location or SourceLocation()
        located = source_from_settings(self.settings, loc.pointer)
        if loc.line is not None:
            located = replace(located, line=loc.line, column=loc.column)
        if loc.file_path is not None:
            located = replace(located, file_path=loc.file_path)
        err.location = located
        return err

    def _record(self, err: ParseError) -> None:
        logger.warning(str(err))
        self.errors.append(err)


def _parse_type(value: Optional[str]) -> SchemaType:
    if value is None:
        return SchemaType.EMPTY
    try:
        return SchemaType(value)
    except ValueError:
        raise ValidationError(
            f"unexpected schema type {value!r}, valid types: {SchemaType.get_all_types()}"
        ) from None
