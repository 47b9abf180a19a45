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

"""Structural lint of schema documents against the JSON Schema meta-schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from jsonschema import Draft202012Validator

from ..file_io.source_location import json_pointer_escape


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    pointer: Optional[str] = None


_META_VALIDATOR = Draft202012Validator(Draft202012Validator.META_SCHEMA)


def _error_pointer(path) -> str:
    return "".join(f"/{json_pointer_escape(str(p))}" for p in path)


def check_meta_schema(data: Any) -> List[SchemaIssue]:
    """Validate a decoded schema document against the Draft 2020-12 meta-schema.

    This checks the document's keywords, not any instance against the schema.

    Returns:
        List of SchemaIssue objects, ordered by pointer
    """
    issues = [
        SchemaIssue(message=error.message, pointer=_error_pointer(error.absolute_path))
        for error in _META_VALIDATOR.iter_errors(data)
    ]
    return sorted(issues, key=lambda issue: issue.pointer or "")
