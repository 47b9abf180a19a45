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

"""CLI entry point for parsing schema documents and reporting const values."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import parser_config
from .exceptions import SchemaParserError
from .file_io.yaml_loader import yaml_loader
from .models.meta_schema import check_meta_schema
from .models.parsing import Parser, Settings
from .models.yaml_json import ConversionError, yaml_node_to_value

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".json", ".yaml", ".yml")


def find_schema_files(paths: List[str]) -> List[Path]:
    """Find all schema documents in given paths."""
    files = []
    for path_str in paths:
        path = Path(path_str)
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            for ext in SCHEMA_EXTENSIONS:
                files.extend(path.rglob(f"*{ext}"))
        else:
            logger.warning(f"Path does not exist: {path}")
    return sorted(set(files))


def process_file(path: Path, *, strict: bool, check_meta: bool) -> Dict[str, Any]:
    """Parse one document and return its report entry."""
    result: Dict[str, Any] = {"file": str(path), "errors": [], "consts": {}}
    parser = Parser(Settings(strict=strict))

    try:
        root, source_map = yaml_loader.load_file_with_source(path)
        parser.settings.file_path = path
        parser.settings.source_map = source_map
        schema = parser.parse(parser.load_node(root))
    except SchemaParserError as exc:
        result["errors"].append(str(exc))
        return result

    result["errors"].extend(str(err) for err in parser.errors)

    for node in schema.walk():
        if node.const_set:
            result["consts"][node.pointer or "/"] = node.const

    if check_meta:
        try:
            document = yaml_node_to_value(root)
        except ConversionError as exc:
            result["errors"].append(f"meta-schema check skipped: {exc}")
        else:
            for issue in check_meta_schema(document):
                result["errors"].append(f"{issue.message} (pointer={issue.pointer or '/'})")

    return result


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the schema parser CLI."""
    parser = argparse.ArgumentParser(description="Parse JSON/YAML schema documents and report const values")
    parser.add_argument("paths", nargs="*", help="Schema files or directories (default: current directory)")
    parser.add_argument("--format", choices=["human", "json"], default="human", help="Output format (default: human)")
    parser.add_argument("--lenient", action="store_true", help="Collect errors instead of stopping at the first one")
    parser.add_argument("--check-meta", action="store_true", help="Also lint documents against the JSON Schema meta-schema")
    args = parser.parse_args(argv)

    parser_config.set_logging()

    files = find_schema_files(args.paths or ["."])
    if not files:
        logger.error("No schema documents found.")
        sys.exit(1)

    strict = parser_config.strict and not args.lenient
    results = [process_file(path, strict=strict, check_meta=args.check_meta) for path in files]

    if args.format == "json":
        output = {
            "files": len(results),
            "errors": sum(len(r["errors"]) for r in results),
            "results": results,
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        for result in results:
            print(f"{result['file']}:")
            for pointer, value in result["consts"].items():
                print(f"  const {pointer} = {json.dumps(value, ensure_ascii=False)}")
            for error in result["errors"]:
                print(f"  ERROR: {error}")

    if any(r["errors"] for r in results):
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
