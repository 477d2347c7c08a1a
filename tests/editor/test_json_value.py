from __future__ import annotations

import pytest

from omdb_field.editor.json_value import format_field_value, parse_field_input


@pytest.mark.parametrize("data", [None, ""])
def test_empty_input(data) -> None:  # noqa: ANN001
    parsed = parse_field_input(data)
    assert parsed.empty is True
    assert parsed.valid is True


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("{}", {}),
        ("[]", []),
        ('{"Title": "Heat"}', {"Title": "Heat"}),
        ("42", 42),
    ],
)
def test_valid_json_text(text, expected) -> None:  # noqa: ANN001
    parsed = parse_field_input(text)
    assert parsed.empty is False
    assert parsed.valid is True
    assert parsed.value == expected


@pytest.mark.parametrize(
    "text",
    ["{", "{'Title': 'Heat'}", "not json", "   ", "NaN", "Infinity", '{"a": -Infinity}'],
)
def test_invalid_json_text(text) -> None:  # noqa: ANN001
    parsed = parse_field_input(text)
    assert parsed.empty is False
    assert parsed.valid is False


def test_objects_are_valid_without_parsing() -> None:
    record = {"Title": "Heat", "Response": "True"}
    assert parse_field_input(record).value is record
    assert parse_field_input({}).valid is True
    assert parse_field_input({}).empty is False


def test_format_field_value() -> None:
    assert format_field_value(None) == ""
    assert format_field_value({}) == "{}"
    assert format_field_value({"Title": "Heat"}) == '{"Title": "Heat"}'
