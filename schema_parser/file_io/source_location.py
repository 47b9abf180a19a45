from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Dict, Optional


SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    pointer: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def join_pointer(base: Optional[str], token: Any) -> str:
    return f"{base or ''}/{json_pointer_escape(str(token))}"


def lookup_source(source_map: Optional[SourceMap], pointer: Optional[str]) -> SourceLocation:
    if not source_map or pointer is None:
        return SourceLocation(pointer=pointer)

    entry = source_map.get(pointer)
    if not entry:
        return SourceLocation(pointer=pointer)

    return SourceLocation(
        pointer=pointer,
        line=entry.get("line"),
        column=entry.get("column"),
    )


def source_from_settings(settings: Any, pointer: Optional[str]) -> SourceLocation:
    """Create a SourceLocation using a Settings-like object (file_path + optional source_map)."""

    file_path = getattr(settings, "file_path", None)
    source_map = getattr(settings, "source_map", None)

    loc = lookup_source(source_map, pointer)
    return SourceLocation(
        file_path=Path(file_path) if file_path is not None else None,
        pointer=loc.pointer,
        line=loc.line,
        column=loc.column,
    )


def _infer_source_root() -> Optional[Path]:
    env_root = os.environ.get("SCHEMA_PARSER_SOURCE_ROOT")
    if env_root:
        return Path(env_root)
    return None


def _format_file_path(path: Path) -> str:
    root = _infer_source_root()
    if not root:
        return str(path)

    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        file_path = _format_file_path(loc.file_path)
        if loc.line is not None and loc.column is not None:
            parts.append(f"source= {file_path}:{loc.line}:{loc.column} ")
        elif loc.line is not None:
            parts.append(f"source= {file_path}:{loc.line} ")
        else:
            parts.append(f"source= {file_path} ")
    elif loc.line is not None:
        parts.append(f"line= {loc.line}:{loc.column or 1} ")

    if loc.pointer:
        parts.append(f"pointer={loc.pointer}")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
