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

"""Shape rules for const values, applied to the decoded value before it is stored."""

import json
from typing import Any

from ..exceptions import ConstValidationError

EMPTY_OBJECT_RULE = "empty_object"
LITERAL_STRING_RULE = "literal_string"

# Exact-match literal; "100.0", "1000" and the number 100 are accepted.
# TODO: revisit once numeric-looking string consts get a general policy.
REJECTED_STRING = "100"


def validate_const(value: Any) -> None:
    """Reject disallowed const shapes. First matching rule wins."""
    if isinstance(value, dict) and len(value) == 0:
        raise ConstValidationError("const cannot be an empty object", rule=EMPTY_OBJECT_RULE, value=value)

    if isinstance(value, str) and value == REJECTED_STRING:
        raise ConstValidationError(
            f"const cannot be the string {json.dumps(value)}",
            rule=LITERAL_STRING_RULE,
            value=value,
        )
