from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class FieldIds:
    """
    Machine names of the fields and content types the OMDb field editor touches.
    """

    source: str = "imdb"
    derived: str = "omdb"
    title: str = "title"
    genre: str = "genre"
    genre_content_type: str = "genre"
    genre_name: str = "name"
    movie_content_type: str = "movie"


@dataclass(frozen=True)
class EntryRecord:
    """
    Canonical entry record (maps to `cms.entries`).

    Note: `fields` is localized, i.e. `{field_id: {locale: value}}`.
    """

    id: str
    content_type: str
    fields: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> EntryRecord:
        fields = row.get("fields")
        return cls(
            id=str(row.get("id") or ""),
            content_type=str(row.get("content_type") or ""),
            fields=dict(fields) if isinstance(fields, Mapping) else {},
        )

    def get_value(self, field_id: str, locale: str) -> Any:
        localized = self.fields.get(field_id)
        if isinstance(localized, Mapping):
            return localized.get(locale)
        return None

    def as_sdk_entry(self) -> dict[str, Any]:
        return {
            "sys": {"id": self.id, "type": "Entry", "contentType": self.content_type},
            "fields": {key: dict(value) for key, value in self.fields.items()},
        }


def build_entry_link(entry: Mapping[str, Any]) -> dict[str, Any]:
    sys = entry.get("sys") or {}
    return {
        "sys": {
            "type": "Link",
            "linkType": sys.get("type") or "Entry",
            "id": sys.get("id"),
        }
    }
