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

"""Schema document loader producing YAML node trees with source maps."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import yaml

from ..config import parser_config
from ..exceptions import ValidationError
from ..models.yaml_json import ConversionError, SchemaLoader, json_to_yaml_node
from .source_location import SourceMap, join_pointer

logger = logging.getLogger(__name__)


class YamlLoader:
    """Loads YAML or JSON schema documents as PyYAML nodes.

    JSON documents go through the YAML composer first so that nodes carry
    line/column marks. Text the composer rejects (e.g. tab-indented JSON) is
    retried as strict JSON, without marks.
    """

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize the loader.

        Args:
            cache_enabled: Whether to cache per-path results. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else parser_config.cache_enabled
        self._cache: Dict[Path, Tuple[yaml.Node, SourceMap]] = {}

    @staticmethod
    def build_source_map(root: Optional[yaml.Node]) -> SourceMap:
        """Map JSON pointers to 1-based line/column of every node under ``root``."""
        source_map: SourceMap = {}
        if root is None:
            return source_map

        def _walk(node: yaml.Node, pointer: str, active: set) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is not None:
                # PyYAML uses 0-based line/column
                source_map[pointer] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

            if id(node) in active:
                return
            active.add(id(node))
            if isinstance(node, yaml.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if not isinstance(key, str):
                        continue
                    _walk(value_node, join_pointer(pointer, key), active)
            elif isinstance(node, yaml.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, join_pointer(pointer, idx), active)
            active.discard(id(node))

        _walk(root, "", set())
        return source_map

    def _compose(self, content: str, origin: str) -> yaml.Node:
        try:
            root = yaml.compose(content, Loader=SchemaLoader)
        except yaml.YAMLError as exc:
            if not content.lstrip().startswith(("{", "[")):
                raise ValidationError(f"Failed to parse schema document {origin}: {exc}") from exc
            logger.debug(f"YAML composer rejected {origin}, retrying as JSON: {exc}")
            try:
                root = json_to_yaml_node(content)
            except (json.JSONDecodeError, ConversionError) as json_exc:
                raise ValidationError(f"Failed to parse schema document {origin}: {json_exc}") from json_exc

        if root is None:
            raise ValidationError(f"Empty schema document: {origin}")
        return root

    def load_string_with_source(self, content: Union[str, bytes]) -> Tuple[yaml.Node, SourceMap]:
        """Load a schema document from string content and return (root node, source_map)."""
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        root = self._compose(content, "<string>")
        return root, self.build_source_map(root)

    def load_file_with_source(self, file_path: Union[str, Path]) -> Tuple[yaml.Node, SourceMap]:
        """Load a schema document file and return (root node, source_map).

        Raises:
            ValidationError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise ValidationError(f"Schema file not found: {path}")

        if not path.is_file():
            raise ValidationError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading schema document from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading schema document: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ValidationError(f"Failed to read schema file {path}: {exc}") from exc

        root = self._compose(content, str(path))
        result = (root, self.build_source_map(root))
        if self.cache_enabled:
            self._cache[path] = result
        return result

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.debug("Schema document cache cleared")


# Global loader instance
yaml_loader = YamlLoader()
