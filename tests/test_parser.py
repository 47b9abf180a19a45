from pathlib import Path

import pytest

from schema_parser import Parser, Settings
from schema_parser.exceptions import ConstValidationError, DecodeError, ParseError
from schema_parser.models.raw_schema import RawSchema
from schema_parser.models.schema import SchemaType


def _parse(content: str, *, strict: bool = True):
    parser = Parser(Settings(strict=strict))
    return parser, parser.parse_content(content)


@pytest.mark.parametrize(
    "raw, expected_type, expected_const",
    [
        ('{"type": "string", "const": "active"}', SchemaType.STRING, "active"),
        ('{"type": "integer", "const": 42}', SchemaType.INTEGER, 42),
        ('{"type": "number", "const": 3.14}', SchemaType.NUMBER, 3.14),
        ('{"type": "boolean", "const": true}', SchemaType.BOOLEAN, True),
        ('{"type": "boolean", "const": false}', SchemaType.BOOLEAN, False),
        ('{"type": "null", "const": null}', SchemaType.NULL, None),
        ('{"type": "array", "const": [1, "a"]}', SchemaType.ARRAY, [1, "a"]),
        ('{"type": "object", "const": {"k": "v"}}', SchemaType.OBJECT, {"k": "v"}),
    ],
)
def test_const_parsing(raw, expected_type, expected_const) -> None:
    _, schema = _parse(raw)
    assert schema.type is expected_type
    assert schema.const_set is True
    assert schema.const == expected_const
    assert type(schema.const) is type(expected_const)


def test_missing_const_is_not_set() -> None:
    _, schema = _parse('{"type": "string"}')
    assert schema.const_set is False
    assert schema.const is None


def test_const_in_nested_property() -> None:
    _, schema = _parse(
        """{
            "type": "object",
            "properties": {
                "status": {"type": "string", "const": "active"}
            }
        }"""
    )
    assert schema.const_set is False
    assert [prop.name for prop in schema.properties] == ["status"]
    status = schema.get_property("status").schema
    assert status.const_set is True
    assert status.const == "active"
    assert status.pointer == "/properties/status"


def test_const_with_enum_are_independent() -> None:
    _, schema = _parse('{"type": "string", "const": "active", "enum": ["active", "inactive"]}')
    assert schema.const_set is True
    assert schema.const == "active"
    assert schema.enum == ["active", "inactive"]


def test_yaml_document() -> None:
    _, schema = _parse(
        "type: object\n"
        "required: [mode]\n"
        "properties:\n"
        "  mode:\n"
        "    type: string\n"
        "    const: '100.0'\n"
        "  tags:\n"
        "    type: array\n"
        "    items:\n"
        "      type: integer\n"
        "      const: 0x10\n"
    )
    mode = schema.get_property("mode")
    assert mode.required is True
    assert mode.schema.const == "100.0"
    tags = schema.get_property("tags")
    assert tags.required is False
    assert tags.schema.items.const == 16


def test_empty_object_const_fails_with_location() -> None:
    with pytest.raises(ParseError) as exc_info:
        _parse('{"type": "object", "const": {}}')
    err = exc_info.value
    assert "empty object" in str(err)
    assert isinstance(err.cause, ConstValidationError)
    assert err.location.pointer == "/const"
    assert err.location.line == 1


def test_literal_string_const_fails() -> None:
    with pytest.raises(ParseError, match='const cannot be the string "100"'):
        _parse('{"type": "string", "const": "100"}')


def test_nested_error_points_at_the_field() -> None:
    content = (
        "type: object\n"
        "properties:\n"
        "  status:\n"
        "    type: string\n"
        "    const: {}\n"
    )
    with pytest.raises(ParseError) as exc_info:
        _parse(content)
    loc = exc_info.value.location
    assert loc.pointer == "/properties/status/const"
    assert loc.line == 5


def test_unconvertible_const_is_a_decode_error() -> None:
    with pytest.raises(ParseError) as exc_info:
        _parse("const: .nan\n")
    assert isinstance(exc_info.value.cause, DecodeError)


def test_unknown_type_is_rejected() -> None:
    with pytest.raises(ParseError) as exc_info:
        _parse('{"type": "decimal"}')
    assert exc_info.value.location.pointer == "/type"
    assert exc_info.value.location.line == 1


def test_lenient_mode_collects_errors_and_continues() -> None:
    parser, schema = _parse(
        "type: object\n"
        "properties:\n"
        "  bad:\n"
        "    const: '100'\n"
        "  empty:\n"
        "    const: {}\n"
        "  good:\n"
        "    const: ok\n"
        "  typo:\n"
        "    type: strin\n",
        strict=False,
    )
    assert len(parser.errors) == 3
    assert [err.location.pointer for err in parser.errors] == [
        "/properties/bad/const",
        "/properties/empty/const",
        "/properties/typo/type",
    ]
    assert schema.get_property("bad").schema.const_set is False
    assert schema.get_property("empty").schema.const_set is False
    assert schema.get_property("good").schema.const == "ok"
    assert schema.get_property("typo").schema.type is SchemaType.EMPTY


def test_file_errors_include_path_and_position(write_schema, monkeypatch) -> None:
    monkeypatch.delenv("SCHEMA_PARSER_SOURCE_ROOT", raising=False)
    path = write_schema("status.yaml", "type: string\nconst: '100'\n")
    with pytest.raises(ParseError) as exc_info:
        Parser(Settings(strict=True)).parse_file(path)
    message = str(exc_info.value)
    assert f"{path}:2:8" in message
    assert "pointer=/const" in message


def test_tab_indented_json_is_accepted() -> None:
    _, schema = _parse('{\n\t"type": "string",\n\t"const": "x"\n}\n')
    assert schema.const == "x"


def test_raw_schema_from_json() -> None:
    raw = RawSchema.from_json('{"type": "integer", "const": 42, "enum": [1, 42]}')
    assert raw.const.to_json() == b"42"
    schema = Parser().parse(raw)
    assert schema.const == 42
    assert schema.enum == [1, 42]


def test_raw_schema_from_json_rejects_empty_object() -> None:
    with pytest.raises(ParseError) as exc_info:
        RawSchema.from_json('{"properties": {"a": {"const": {}}}}')
    assert exc_info.value.location.pointer == "/properties/a/const"
    assert isinstance(exc_info.value.cause, ConstValidationError)


def test_to_dict_keeps_null_const() -> None:
    _, schema = _parse('{"type": "null", "const": null, "properties": {"a": {"type": "string"}}}')
    assert schema.to_dict() == {
        "type": "null",
        "properties": {"a": {"type": "string"}},
        "const": None,
    }


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"type": "number", "const": 1e5}', 100000.0),
        ('{"type": "number", "const": 1.5e10}', 1.5e10),
        ('{"type": "number", "const": 2E-3}', 0.002),
        ('{"type": "number", "const": -1e2}', -100.0),
    ],
)
def test_exponent_numbers_are_floats(raw, expected) -> None:
    _, schema = _parse(raw)
    assert schema.const == expected
    assert type(schema.const) is float


def test_exponent_numbers_in_enum() -> None:
    _, schema = _parse('{"enum": [1e3, 2]}')
    assert schema.enum == [1000.0, 2]
    assert type(schema.enum[0]) is float


def test_escaped_surrogate_pair_is_one_character() -> None:
    _, schema = _parse('{"type": "string", "const": "\\ud83d\\ude00"}')
    assert schema.const == "\U0001F600"


def test_lone_surrogate_is_a_decode_error() -> None:
    with pytest.raises(ParseError) as exc_info:
        _parse('{"type": "string", "const": "\\ud83d"}')
    assert isinstance(exc_info.value.cause, DecodeError)
    assert exc_info.value.location.pointer == "/const"


def test_number_overflowing_a_double_is_rejected() -> None:
    with pytest.raises(ParseError) as exc_info:
        _parse('{"type": "number", "const": 1e400}')
    assert isinstance(exc_info.value.cause, DecodeError)


def test_errors_use_file_path_from_settings(monkeypatch) -> None:
    monkeypatch.delenv("SCHEMA_PARSER_SOURCE_ROOT", raising=False)
    parser = Parser(Settings(file_path=Path("schemas/status.yaml"), strict=True))
    with pytest.raises(ParseError) as exc_info:
        parser.parse_content("type: string\nconst: '100'\n")
    loc = exc_info.value.location
    assert loc.file_path == Path("schemas/status.yaml")
    assert (loc.line, loc.column) == (2, 8)
    assert "schemas/status.yaml:2:8" in str(exc_info.value)
