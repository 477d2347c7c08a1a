"""
In-process host for local development and tests.

Not suitable for multi-instance deployments: entries and parameters live in this process only.
"""

from __future__ import annotations

import copy
import uuid
from threading import Lock
from typing import Any, Mapping

from omdb_field.sdk.base import AppApi, EntryApi, HostApi, SpaceApi
from omdb_field.sdk.query import matches_entry, parse_entry_query
from omdb_field.utils.env import DEFAULT_LOCALE


class InMemorySpace(SpaceApi):
    def __init__(self, *, locale: str = DEFAULT_LOCALE) -> None:
        self.locale = locale
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = Lock()
        self.query_count = 0
        self.create_count = 0

    def add_entry(self, content_type: str, fields: Mapping[str, Any], *, entry_id: str | None = None) -> dict[str, Any]:
        """Seed an entry without counting it as a create call."""
        entry = {
            "sys": {"id": entry_id or uuid.uuid4().hex, "type": "Entry", "contentType": content_type},
            "fields": copy.deepcopy(dict(fields)),
        }
        with self._lock:
            self._entries[entry["sys"]["id"]] = entry
        return copy.deepcopy(entry)

    def get_entry(self, entry_id: str) -> dict[str, Any] | None:
        with self._lock:
            entry = self._entries.get(entry_id)
            return copy.deepcopy(entry) if entry else None

    def entries_of_type(self, content_type: str) -> list[dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(e) for e in self._entries.values() if e["sys"]["contentType"] == content_type]

    def get_entries(self, query: Mapping[str, Any]) -> dict[str, Any]:
        parsed = parse_entry_query(query)
        with self._lock:
            self.query_count += 1
            matched = [e for e in self._entries.values() if matches_entry(e, parsed, locale=self.locale)]
        page = matched[parsed.skip : parsed.skip + parsed.limit]
        return {
            "items": [copy.deepcopy(e) for e in page],
            "total": len(matched),
            "skip": parsed.skip,
            "limit": parsed.limit,
        }

    def create_entry(self, content_type: str, data: Mapping[str, Any]) -> dict[str, Any]:
        with self._lock:
            self.create_count += 1
        return self.add_entry(content_type, data.get("fields") or {})

    def open_entry(self, entry_id: str) -> EntryApi:
        """Return a live entry handle whose field writes land back in this space."""
        stored = self.get_entry(entry_id)
        if stored is None:
            raise KeyError(entry_id)

        def write(entry: EntryApi) -> None:
            with self._lock:
                self._entries[entry.id]["fields"] = entry.snapshot_fields()

        return EntryApi(
            entry_id,
            stored["sys"]["contentType"],
            stored["fields"],
            locale=self.locale,
            writer=write,
        )


class InMemoryAppHost(AppApi):
    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self.parameters: dict[str, Any] | None = dict(parameters) if parameters is not None else None

    def get_parameters(self) -> dict[str, Any] | None:
        return dict(self.parameters) if self.parameters is not None else None

    def _save_parameters(self, parameters: Mapping[str, Any]) -> None:
        self.parameters = dict(parameters)


class InMemoryHost(HostApi):
    def __init__(
        self,
        *,
        locale: str = DEFAULT_LOCALE,
        space: InMemorySpace | None = None,
        app: InMemoryAppHost | None = None,
    ) -> None:
        self.locale = locale
        self.space = space or InMemorySpace(locale=locale)
        self.app = app or InMemoryAppHost()

    def open_entry(self, entry_id: str) -> EntryApi | None:
        try:
            return self.space.open_entry(entry_id)
        except KeyError:
            return None
