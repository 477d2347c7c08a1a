from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

DEFAULT_QUERY_LIMIT = 100

_KEY_RE = re.compile(r"^(?P<path>(?:fields|sys)\.[A-Za-z0-9_]+)(?:\[(?P<op>[a-z]+)\])?$")
_SUPPORTED_OPS = {"eq", "in"}


class EntryQueryError(ValueError):
    pass


@dataclass(frozen=True)
class FieldFilter:
    path: str
    op: str
    value: Any

    @property
    def is_sys(self) -> bool:
        return self.path.startswith("sys.")

    @property
    def name(self) -> str:
        return self.path.split(".", 1)[1]


@dataclass(frozen=True)
class EntryQuery:
    content_type: str | None = None
    filters: list[FieldFilter] = field(default_factory=list)
    limit: int = DEFAULT_QUERY_LIMIT
    skip: int = 0


def _coerce_values(value: Any) -> list[Any]:
    if isinstance(value, str):
        return [v for v in value.split(",") if v]
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def parse_entry_query(query: Mapping[str, Any] | None) -> EntryQuery:
    """
    Parse a host-style entry query, e.g.

        {"content_type": "genre", "fields.name[in]": ["Action", "Drama"]}

    Only equality and `[in]` filters on `fields.*` and `sys.*` are supported.
    """

    content_type: str | None = None
    filters: list[FieldFilter] = []
    limit = DEFAULT_QUERY_LIMIT
    skip = 0

    for key, value in (query or {}).items():
        if key == "content_type":
            content_type = str(value)
            continue
        if key == "limit":
            limit = int(value)
            continue
        if key == "skip":
            skip = int(value)
            continue

        match = _KEY_RE.match(key)
        if not match:
            raise EntryQueryError(f"Unsupported entry query key: {key!r}")
        op = match.group("op") or "eq"
        if op not in _SUPPORTED_OPS:
            raise EntryQueryError(f"Unsupported entry query operator: {op!r}")
        filter_value = _coerce_values(value) if op == "in" else value
        filters.append(FieldFilter(path=match.group("path"), op=op, value=filter_value))

    if any(not f.is_sys for f in filters) and not content_type:
        # Same restriction as the host: field filters need a content type.
        raise EntryQueryError("Field filters require `content_type`.")

    return EntryQuery(content_type=content_type, filters=filters, limit=limit, skip=skip)


def matches_entry(entry: Mapping[str, Any], query: EntryQuery, *, locale: str) -> bool:
    sys = entry.get("sys") or {}
    if query.content_type and sys.get("contentType") != query.content_type:
        return False

    fields = entry.get("fields") or {}
    for f in query.filters:
        if f.is_sys:
            actual = sys.get(f.name)
        else:
            localized = fields.get(f.name) or {}
            actual = localized.get(locale) if isinstance(localized, Mapping) else None
        if f.op == "eq" and actual != f.value:
            return False
        if f.op == "in" and actual not in f.value:
            return False
    return True
