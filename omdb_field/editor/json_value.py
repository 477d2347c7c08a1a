from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


@dataclass(frozen=True)
class ParsedFieldValue:
    empty: bool
    valid: bool
    value: Any = None


def parse_field_input(data: Any) -> ParsedFieldValue:
    """
    Classify an edit of the derived JSON field.

    - None or "" -> empty
    - dict/list input -> valid as-is
    - text -> valid when it parses as strict JSON (no NaN or Infinity), otherwise invalid
    """

    if data is None or data == "":
        return ParsedFieldValue(empty=True, valid=True)
    if isinstance(data, (dict, list)):
        return ParsedFieldValue(empty=False, valid=True, value=data)
    if not isinstance(data, str):
        return ParsedFieldValue(empty=False, valid=False)
    try:
        parsed = json.loads(data, parse_constant=_reject_constant)
    except ValueError:
        return ParsedFieldValue(empty=False, valid=False)
    return ParsedFieldValue(empty=False, valid=True, value=parsed)


def format_field_value(value: Any) -> str:
    if value is None:
        return ""
    return json.dumps(value)
