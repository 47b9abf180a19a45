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

"""Parsed schema data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SchemaType(str, Enum):
    EMPTY = ""
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"

    @classmethod
    def get_all_types(cls) -> List[str]:
        return [t.value for t in cls if t is not cls.EMPTY]


@dataclass
class Property:
    name: str
    schema: Optional["Schema"]
    required: bool = False


@dataclass
class Schema:
    """A parsed schema node.

    ``const_set`` records whether the document had a ``const`` key, so that
    ``const: null`` (``const_set=True, const=None``) is distinct from no const.
    ``enum`` is parsed independently of ``const``.
    """

    type: SchemaType = SchemaType.EMPTY
    format: str = ""
    description: str = ""
    properties: List[Property] = field(default_factory=list)
    items: Optional["Schema"] = None
    enum: List[Any] = field(default_factory=list)
    const: Any = None
    const_set: bool = False
    pointer: str = ""

    def get_property(self, name: str) -> Optional[Property]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def walk(self):
        """Yield this schema and every nested schema, depth first."""
        yield self
        for prop in self.properties:
            if prop.schema is not None:
                yield from prop.schema.walk()
        if self.items is not None:
            yield from self.items.walk()

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.type is not SchemaType.EMPTY:
            out["type"] = self.type.value
        if self.format:
            out["format"] = self.format
        if self.description:
            out["description"] = self.description
        if self.properties:
            out["properties"] = {
                prop.name: prop.schema.to_dict() if prop.schema is not None else {}
                for prop in self.properties
            }
            required = [prop.name for prop in self.properties if prop.required]
            if required:
                out["required"] = required
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.enum:
            out["enum"] = list(self.enum)
        if self.const_set:
            out["const"] = self.const
        return out
