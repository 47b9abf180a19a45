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

"""Custom exceptions for the schema parser."""

from typing import Any, Optional

from .file_io.source_location import SourceLocation, format_source


class SchemaParserError(Exception):
    """Base exception for schema-parser related errors."""
    pass


class DecodeError(SchemaParserError):
    """Exception raised when input cannot be represented as JSON-compatible data.

    The lower-level failure is kept as ``__cause__``.
    """

    def __init__(self, message: str, *, target_type: str, tag: Optional[str] = None, node: Any = None):
        super().__init__(f"cannot unmarshal {tag or 'value'} into {target_type}: {message}")
        self.target_type = target_type
        self.tag = tag
        self.node = node


class ValidationError(SchemaParserError):
    """Exception raised for validation errors."""
    pass


class ConstValidationError(ValidationError):
    """Exception raised when a const value has a disallowed shape."""

    def __init__(self, message: str, *, rule: str, value: Any = None):
        super().__init__(message)
        self.rule = rule
        self.value = value


class ParseError(SchemaParserError):
    """Exception raised for a schema error tied to a source location.

    The location suffix is rendered on ``str()`` so callers may refine
    ``location`` (e.g. add the file path) after the error is created.
    """

    def __init__(self, message: str, *, location: Optional[SourceLocation] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.location = location
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.message}{format_source(self.location)}"
