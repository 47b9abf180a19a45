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

"""JSON Schema ``const`` value container."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

import yaml

from ..exceptions import DecodeError
from .const_validator import validate_const
from .yaml_json import (
    ConversionError,
    decode_json_value,
    dump_canonical,
    json_to_yaml_node,
    short_tag,
    yaml_node_to_value,
)

logger = logging.getLogger(__name__)


class ConstValue:
    """Holds exactly one JSON value as canonical JSON bytes.

    The container starts empty and is populated by ``decode_json`` or
    ``decode_yaml``. A failed decode leaves the previous state untouched.
    """

    TYPE_NAME = "ConstValue"

    __slots__ = ("_raw",)

    def __init__(self) -> None:
        self._raw: Optional[bytes] = None

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "ConstValue":
        const = cls()
        const.decode_json(data)
        return const

    @classmethod
    def from_yaml_node(cls, node: yaml.Node) -> "ConstValue":
        const = cls()
        const.decode_yaml(node)
        return const

    @property
    def is_set(self) -> bool:
        return self._raw is not None

    @property
    def raw(self) -> Optional[bytes]:
        return self._raw

    def to_json(self) -> bytes:
        """Return the stored canonical bytes verbatim."""
        if self._raw is None:
            raise ValueError("const value is not set")
        return self._raw

    def decode_json(self, data: Union[bytes, str]) -> None:
        """Validate JSON text and store it verbatim.

        Raises:
            json.JSONDecodeError: If ``data`` is not valid JSON (propagated unchanged).
            DecodeError: If ``data`` uses NaN/Infinity constants or a number overflows a double.
            ConstValidationError: If the value has a disallowed shape.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            value = decode_json_value(data)
        except ConversionError as exc:
            raise DecodeError(str(exc), target_type=self.TYPE_NAME, tag="JSON") from exc

        validate_const(value)
        self._raw = bytes(data)

    def to_yaml_node(self) -> yaml.Node:
        return json_to_yaml_node(self.to_json())

    def decode_yaml(self, node: yaml.Node) -> None:
        """Convert a YAML node to canonical JSON, validate it, then store it.

        Raises:
            DecodeError: If the node has no JSON representation.
            ConstValidationError: If the value has a disallowed shape.
        """
        try:
            raw = dump_canonical(yaml_node_to_value(node))
            # Validate what will be stored; integers beyond a double's range fail here.
            value = decode_json_value(raw)
        except ConversionError as exc:
            raise DecodeError(str(exc), target_type=self.TYPE_NAME, tag=short_tag(node), node=node) from exc

        validate_const(value)
        self._raw = raw
        logger.debug(f"Decoded const from {short_tag(node)} node: {raw!r}")

    def value(self) -> Any:
        """Decode the stored bytes into native Python values."""
        return decode_json_value(self.to_json())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstValue):
            return NotImplemented
        if self._raw is None or other._raw is None:
            return self._raw is other._raw
        # Compare logical values, not formatting.
        return dump_canonical(self.value()) == dump_canonical(other.value())

    __hash__ = None

    def __repr__(self) -> str:
        if self._raw is None:
            return "ConstValue()"
        return f"ConstValue({self._raw.decode('utf-8')})"


class SchemaDumper(yaml.SafeDumper):
    """SafeDumper that knows how to represent schema model values."""


def _represent_const(dumper: yaml.SafeDumper, data: ConstValue) -> yaml.Node:
    return data.to_yaml_node()


SchemaDumper.add_representer(ConstValue, _represent_const)
