from __future__ import annotations

import logging
from typing import Any, Mapping

from omdb_field.models.entries import FieldIds, build_entry_link
from omdb_field.sdk.base import SpaceApi

logger = logging.getLogger(__name__)

PLACEHOLDER_GENRES = frozenset({"N/A"})


def split_genres(value: Any) -> list[str]:
    """
    "Action, N/A, Drama" -> ["Action", "Drama"]

    Order is kept; blanks, placeholders and repeats are dropped.
    """

    if not isinstance(value, str):
        return []
    names: list[str] = []
    seen: set[str] = set()
    for raw in value.split(","):
        name = raw.strip()
        if not name or name in PLACEHOLDER_GENRES or name in seen:
            continue
        seen.add(name)
        names.append(name)
    return names


def _genre_key(entry: Mapping[str, Any], *, name_field: str, locale: str) -> tuple[str, str] | None:
    fields = entry.get("fields") or {}
    localized = fields.get(name_field) or {}
    name = localized.get(locale) if isinstance(localized, Mapping) else None
    if isinstance(name, str):
        return (name, locale)
    return None


def resolve_genre_entries(
    space: SpaceApi,
    names: list[str],
    *,
    locale: str,
    field_ids: FieldIds = FieldIds(),
) -> list[dict[str, Any]]:
    """
    Look up genre entries by name within `locale`, creating the missing ones.

    One batched query covers the common case where every genre already exists.
    Otherwise names are walked in order and missing entries are created one at a time.
    """

    if not names:
        return []

    response = space.get_entries(
        {
            "content_type": field_ids.genre_content_type,
            f"fields.{field_ids.genre_name}[in]": names,
        }
    )
    by_key: dict[tuple[str, str], dict[str, Any]] = {}
    for item in response.get("items") or []:
        key = _genre_key(item, name_field=field_ids.genre_name, locale=locale)
        if key is not None and key not in by_key:
            by_key[key] = item

    if response.get("total") == len(names) and all((name, locale) in by_key for name in names):
        return [by_key[(name, locale)] for name in names]

    resolved: list[dict[str, Any]] = []
    for name in names:
        entry = by_key.get((name, locale))
        if entry is None:
            entry = space.create_entry(
                field_ids.genre_content_type,
                {"fields": {field_ids.genre_name: {locale: name}}},
            )
            by_key[(name, locale)] = entry
            logger.info(f"Created genre entry {name!r} ({locale})")
        resolved.append(entry)
    return resolved


def build_genre_links(
    space: SpaceApi,
    genre_value: Any,
    *,
    locale: str,
    field_ids: FieldIds = FieldIds(),
) -> list[dict[str, Any]] | None:
    """
    Turn OMDb's `Genre` string into entry links. Returns None when there is nothing to link.
    """

    names = split_genres(genre_value)
    if not names:
        return None
    entries = resolve_genre_entries(space, names, locale=locale, field_ids=field_ids)
    return [build_entry_link(entry) for entry in entries]
