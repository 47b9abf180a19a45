import pytest

from schema_parser.exceptions import ConstValidationError, ValidationError
from schema_parser.models.const_validator import (
    EMPTY_OBJECT_RULE,
    LITERAL_STRING_RULE,
    validate_const,
)


def test_empty_object_is_rejected() -> None:
    with pytest.raises(ConstValidationError) as exc_info:
        validate_const({})
    assert exc_info.value.rule == EMPTY_OBJECT_RULE
    assert str(exc_info.value) == "const cannot be an empty object"


def test_literal_string_100_is_rejected() -> None:
    with pytest.raises(ConstValidationError) as exc_info:
        validate_const("100")
    assert exc_info.value.rule == LITERAL_STRING_RULE
    assert str(exc_info.value) == 'const cannot be the string "100"'


def test_rejection_is_a_validation_error() -> None:
    with pytest.raises(ValidationError):
        validate_const({})


@pytest.mark.parametrize(
    "value",
    [
        "100.0",
        "1000",
        " 100",
        100,
        100.0,
        "",
        None,
        True,
        False,
        0,
        [],
        [{}],
        {"a": {}},
        {"status": "100"},
        "active",
    ],
)
def test_other_values_are_accepted(value) -> None:
    validate_const(value)
