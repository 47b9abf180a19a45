"""File I/O related utilities.

This package groups small modules that read schema documents and format
file-backed diagnostics.
"""

from .source_location import (
    SourceLocation,
    SourceMap,
    format_source,
    join_pointer,
    json_pointer_escape,
    lookup_source,
    source_from_settings,
)

__all__ = [
    "SourceLocation",
    "SourceMap",
    "format_source",
    "join_pointer",
    "json_pointer_escape",
    "lookup_source",
    "source_from_settings",
]
