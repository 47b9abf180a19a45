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

"""Conversion between PyYAML node trees and canonical JSON bytes.

Canonical JSON is compact UTF-8 (``separators=(",", ":")``) with mapping key
order preserved. Number lexemes coming from JSON are carried into YAML nodes
verbatim so that re-encoding never loses precision.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Dict, List, Set, Union

import yaml
from yaml.constructor import SafeConstructor


TAG_PREFIX = "tag:yaml.org,2002:"
NULL_TAG = TAG_PREFIX + "null"
BOOL_TAG = TAG_PREFIX + "bool"
INT_TAG = TAG_PREFIX + "int"
FLOAT_TAG = TAG_PREFIX + "float"
STR_TAG = TAG_PREFIX + "str"
SEQ_TAG = TAG_PREFIX + "seq"
MAP_TAG = TAG_PREFIX + "map"
MERGE_TAG = TAG_PREFIX + "merge"
TIMESTAMP_TAG = TAG_PREFIX + "timestamp"
BINARY_TAG = TAG_PREFIX + "binary"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Only the stateless scalar constructors are used.
_scalars = SafeConstructor()


class SchemaLoader(yaml.SafeLoader):
    """SafeLoader that also resolves JSON exponent numbers (``1e5``, ``2E-3``) as floats.

    The YAML 1.1 float resolver requires a dot and a signed exponent.
    """


SchemaLoader.add_implicit_resolver(
    FLOAT_TAG,
    re.compile(r"^-?(?:0|[1-9][0-9]*)(?:\.[0-9]*)?[eE][-+]?[0-9]+$"),
    list("-0123456789"),
)


class ConversionError(ValueError):
    """Raised when a node or JSON text has no JSON-compatible representation."""

    def __init__(self, message: str, node: Any = None):
        super().__init__(message)
        self.node = node


def short_tag(node: yaml.Node) -> str:
    tag = getattr(node, "tag", None) or ""
    if tag.startswith(TAG_PREFIX):
        return "!!" + tag[len(TAG_PREFIX):]
    return tag


def dump_canonical(value: Any) -> bytes:
    try:
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        return text.encode("utf-8")
    except ValueError as exc:
        # UnicodeEncodeError (lone surrogates) is a ValueError as well.
        raise ConversionError(str(exc)) from exc


def _reject_constant(name: str) -> Any:
    raise ConversionError(f"JSON constant {name} has no JSON-compatible value")


def _finite_float(text: str) -> float:
    number = float(text)
    if math.isinf(number):
        raise ConversionError(f"number {text} overflows a 64-bit float")
    return number


def _int64_or_float(text: str) -> Union[int, float]:
    number = int(text)
    if INT64_MIN <= number <= INT64_MAX:
        return number
    return _finite_float(text)


def decode_json_value(raw: Union[bytes, str]) -> Any:
    """Decode JSON into native values: int64-range integers stay ``int``, other numbers are ``float``.

    Numbers that overflow a double raise ``ConversionError``, as NaN/Infinity do.
    """
    return json.loads(
        raw,
        parse_int=_int64_or_float,
        parse_float=_finite_float,
        parse_constant=_reject_constant,
    )


# -------------------------
# YAML node -> JSON
# -------------------------

def _join_surrogates(text: str) -> str:
    # PyYAML decodes an escaped UTF-16 surrogate pair into two separate code points.
    try:
        return text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeError:
        # Lone surrogates are kept; dump_canonical rejects them.
        return text


def _scalar_to_value(node: yaml.ScalarNode) -> Any:
    tag = node.tag
    if tag == STR_TAG:
        return _join_surrogates(node.value)
    if tag == NULL_TAG:
        return None
    if tag in (TIMESTAMP_TAG, BINARY_TAG):
        return node.value

    try:
        if tag == BOOL_TAG:
            return _scalars.construct_yaml_bool(node)
        if tag == INT_TAG:
            return _scalars.construct_yaml_int(node)
        if tag == FLOAT_TAG:
            value = _scalars.construct_yaml_float(node)
            if math.isinf(value) or math.isnan(value):
                raise ConversionError(f"float {node.value!r} has no JSON equivalent", node)
            return value
    except (KeyError, ValueError) as exc:
        if isinstance(exc, ConversionError):
            raise
        raise ConversionError(f"invalid {short_tag(node)} scalar {node.value!r}", node) from exc

    raise ConversionError(f"unsupported tag {short_tag(node)}", node)


def _mapping_key(key_node: yaml.Node) -> str:
    if not isinstance(key_node, yaml.ScalarNode):
        raise ConversionError("mapping keys must be scalars", key_node)
    if key_node.tag == MERGE_TAG:
        raise ConversionError("merge keys are not supported", key_node)
    if key_node.tag == NULL_TAG:
        raise ConversionError("mapping keys must not be null", key_node)
    # Non-string scalar keys keep their source text.
    return _join_surrogates(key_node.value)


def _node_to_value(node: yaml.Node, active: Set[int]) -> Any:
    if isinstance(node, yaml.ScalarNode):
        return _scalar_to_value(node)

    if id(node) in active:
        raise ConversionError("recursive alias", node)

    active.add(id(node))
    try:
        if isinstance(node, yaml.SequenceNode):
            if node.tag != SEQ_TAG:
                raise ConversionError(f"unsupported tag {short_tag(node)}", node)
            return [_node_to_value(item, active) for item in node.value]

        if isinstance(node, yaml.MappingNode):
            if node.tag != MAP_TAG:
                raise ConversionError(f"unsupported tag {short_tag(node)}", node)
            result: Dict[str, Any] = {}
            for key_node, value_node in node.value:
                key = _mapping_key(key_node)
                if key in result:
                    raise ConversionError(f"duplicate mapping key {key!r}", key_node)
                result[key] = _node_to_value(value_node, active)
            return result
    finally:
        active.discard(id(node))

    raise ConversionError(f"unsupported node kind {type(node).__name__}", node)


def yaml_node_to_value(node: yaml.Node) -> Any:
    """Convert a YAML node into plain JSON-compatible Python values."""
    return _node_to_value(node, set())


def yaml_node_to_json(node: yaml.Node) -> bytes:
    return dump_canonical(yaml_node_to_value(node))


# -------------------------
# JSON -> YAML node
# -------------------------

class _NumberLiteral(str):
    tag = FLOAT_TAG


class _IntLiteral(_NumberLiteral):
    tag = INT_TAG


class _FloatLiteral(_NumberLiteral):
    tag = FLOAT_TAG


def _value_to_node(value: Any) -> yaml.Node:
    if value is None:
        return yaml.ScalarNode(NULL_TAG, "null")
    if isinstance(value, bool):
        return yaml.ScalarNode(BOOL_TAG, "true" if value else "false")
    if isinstance(value, _NumberLiteral):
        return yaml.ScalarNode(value.tag, str(value))
    if isinstance(value, str):
        return yaml.ScalarNode(STR_TAG, value)
    if isinstance(value, list):
        items: List[yaml.Node] = [_value_to_node(item) for item in value]
        return yaml.SequenceNode(SEQ_TAG, items)
    if isinstance(value, dict):
        pairs = [(yaml.ScalarNode(STR_TAG, key), _value_to_node(item)) for key, item in value.items()]
        return yaml.MappingNode(MAP_TAG, pairs)
    raise ConversionError(f"unsupported JSON value of type {type(value).__name__}")


def json_to_yaml_node(raw: Union[bytes, str]) -> yaml.Node:
    """Build an explicitly tagged YAML node tree from JSON text.

    Raises:
        json.JSONDecodeError: If ``raw`` is not valid JSON.
        ConversionError: If ``raw`` uses NaN/Infinity constants.
    """
    value = json.loads(
        raw,
        parse_int=_IntLiteral,
        parse_float=_FloatLiteral,
        parse_constant=_reject_constant,
    )
    return _value_to_node(value)
