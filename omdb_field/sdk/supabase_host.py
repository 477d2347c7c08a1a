"""
Supabase-backed host: entries live in `cms.entries`, parameters in `cms.app_installations`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from supabase import Client

from omdb_field.models.entries import EntryRecord
from omdb_field.repositories.app_installations import fetch_app_parameters, save_app_parameters
from omdb_field.repositories.entries import fetch_entry, insert_entry, query_entries, update_entry_fields
from omdb_field.sdk.base import AppApi, EntryApi, HostApi, SpaceApi
from omdb_field.sdk.query import parse_entry_query

logger = logging.getLogger(__name__)


class SupabaseSpace(SpaceApi):
    def __init__(self, db: Client, *, locale: str) -> None:
        self._db = db
        self.locale = locale

    def get_entries(self, query: Mapping[str, Any]) -> dict[str, Any]:
        parsed = parse_entry_query(query)
        rows, total = query_entries(self._db, parsed, locale=self.locale)
        return {
            "items": [EntryRecord.from_row(row).as_sdk_entry() for row in rows],
            "total": total,
            "skip": parsed.skip,
            "limit": parsed.limit,
        }

    def create_entry(self, content_type: str, data: Mapping[str, Any]) -> dict[str, Any]:
        row = insert_entry(self._db, content_type, data.get("fields") or {})
        logger.debug(f"Created {content_type} entry {row.get('id')}")
        return EntryRecord.from_row(row).as_sdk_entry()


class SupabaseAppHost(AppApi):
    def __init__(self, db: Client, app_id: str) -> None:
        super().__init__()
        self._db = db
        self.app_id = app_id

    def get_parameters(self) -> dict[str, Any] | None:
        return fetch_app_parameters(self._db, self.app_id)

    def _save_parameters(self, parameters: Mapping[str, Any]) -> None:
        save_app_parameters(self._db, self.app_id, parameters)


def load_entry(db: Client, entry_id: str, *, locale: str) -> EntryApi | None:
    """
    Load an entry and return a handle that writes its full fields map back on every change.

    No transaction spans read and write; the last writer wins.
    """

    row = fetch_entry(db, entry_id)
    if row is None:
        return None
    record = EntryRecord.from_row(row)

    def write(entry: EntryApi) -> None:
        update_entry_fields(db, entry.id, entry.snapshot_fields())

    return EntryApi(record.id, record.content_type, record.fields, locale=locale, writer=write)


class SupabaseHost(HostApi):
    def __init__(self, db: Client, *, locale: str, app_id: str) -> None:
        self._db = db
        self.locale = locale
        self.space = SupabaseSpace(db, locale=locale)
        self.app = SupabaseAppHost(db, app_id)

    def open_entry(self, entry_id: str) -> EntryApi | None:
        return load_entry(self._db, entry_id, locale=self.locale)
