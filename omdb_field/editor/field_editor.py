"""
Field editor for the derived `omdb` JSON field.

Keeps the `omdb` field in sync with the entry's `imdb` URL: a change of the URL (or the
Fetch button) looks the title up on OMDb, stores the record, and copies the title and
genres onto the sibling fields.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Mapping

from omdb_field.editor.debounce import DEFAULT_WAIT_SECONDS, Debouncer
from omdb_field.editor.genres import build_genre_links
from omdb_field.editor.json_value import format_field_value, parse_field_input
from omdb_field.integrations.omdb.client import (
    OmdbClientError,
    fetch_movie,
    is_affirmative_response,
    parse_imdb_id,
    resolve_api_key,
)
from omdb_field.models.entries import FieldIds
from omdb_field.sdk.base import ExtensionContext, Unsubscribe

logger = logging.getLogger(__name__)

FETCH_ERROR_PREFIX = "Error fetching data. "

STATE_IDLE = "idle"
STATE_FETCHING = "fetching"


class OmdbFieldEditor:
    def __init__(
        self,
        sdk: ExtensionContext,
        *,
        field_ids: FieldIds = FieldIds(),
        debounce_seconds: float = DEFAULT_WAIT_SECONDS,
        session: Any = None,
    ) -> None:
        if sdk.field is None or sdk.entry is None or sdk.space is None:
            raise ValueError("OmdbFieldEditor requires field, entry and space.")
        self.sdk = sdk
        self.field_ids = field_ids
        self.field = sdk.field
        self.entry = sdk.entry
        self.source_field = sdk.entry.field(field_ids.source)
        self._session = session

        self._lock = Lock()
        self.state = STATE_IDLE
        self.value = self.field.get_value()
        self.source_value = self.source_field.get_value()
        self._save = Debouncer(self.validate_and_save, wait=debounce_seconds)
        self._unsubscribes: list[Unsubscribe] = []

    # --- lifecycle ---

    def mount(self) -> None:
        self._unsubscribes.append(self.source_field.on_value_changed(self._on_source_changed))
        self._unsubscribes.append(self.field.on_value_changed(self._on_value_changed))

    def close(self) -> None:
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes.clear()
        self._save.cancel()

    def flush(self) -> bool:
        """Apply a pending debounced save immediately."""
        return self._save.flush()

    # --- subscriptions ---

    def _on_source_changed(self, value: Any) -> None:
        with self._lock:
            changed = value != self.source_value
            self.source_value = value
        if changed:
            self.sync(value)

    def _on_value_changed(self, value: Any) -> None:
        with self._lock:
            self.value = value

    # --- actions ---

    @property
    def fetching(self) -> bool:
        return self.state == STATE_FETCHING

    def fetch(self) -> bool:
        """
        Fetch button: re-run the sync for the current `imdb` value.

        Returns False when a fetch is already running (button disabled).
        """

        with self._lock:
            if self.state == STATE_FETCHING:
                return False
            self.state = STATE_FETCHING
        try:
            self.sync(self.source_field.get_value())
        finally:
            with self._lock:
                self.state = STATE_IDLE
        return True

    def clear(self) -> None:
        # Title and genre keep their values.
        self.field.remove_value()

    def edit_text(self, text: str) -> None:
        self._save.call(text)

    def sync(self, source_text: Any) -> bool:
        """
        Look up the IMDb id found in `source_text` and schedule a save of the OMDb record.

        Returns True when a record was handed to the save path.
        """

        imdb_id = parse_imdb_id(source_text) if isinstance(source_text, str) else None
        if not imdb_id:
            logger.debug(f"No IMDb id in {source_text!r}; skipping")
            return False

        api_key = resolve_api_key(self.sdk.installation_parameters)
        try:
            data = fetch_movie(api_key, imdb_id, session=self._session)
        except OmdbClientError as exc:
            logger.warning(f"OMDb lookup failed for {imdb_id}: {exc}")
            self.sdk.notifier.error(FETCH_ERROR_PREFIX)
            return False

        if not is_affirmative_response(data):
            message = data.get("Error") if isinstance(data.get("Error"), str) else ""
            self.sdk.notifier.error(f"{FETCH_ERROR_PREFIX}{message}")
            return False

        self._save.call(data)
        return True

    # --- save path ---

    def validate_and_save(self, data: Any) -> None:
        parsed = parse_field_input(data)
        if parsed.empty:
            self.field.set_invalid(False)
            self.field.remove_value()
            return
        if not parsed.valid:
            self.field.set_invalid(True)
            return

        self.field.set_invalid(False)
        self.field.set_value(parsed.value)
        if isinstance(parsed.value, Mapping):
            self.update_entry(parsed.value)

    def update_entry(self, record: Mapping[str, Any]) -> None:
        title = record.get("Title")
        if isinstance(title, str):
            self.entry.field(self.field_ids.title).set_value(title)

        links = build_genre_links(
            self.sdk.space,
            record.get("Genre"),
            locale=self.field.locale,
            field_ids=self.field_ids,
        )
        if links is not None:
            self.entry.field(self.field_ids.genre).set_value(links)

    # --- view ---

    @property
    def text(self) -> str:
        return format_field_value(self.value)

    def render(self) -> dict[str, Any]:
        return {
            "textarea": {
                "name": "omdbData",
                "id": "omdbData",
                "value": self.text,
                "readOnly": True,
                "invalid": self.field.invalid,
            },
            "buttons": [
                {
                    "id": "fetch",
                    "label": "Fetch Movie",
                    "type": "primary",
                    "disabled": self.fetching,
                    "loading": self.fetching,
                },
                {"id": "clear", "label": "Clear Field", "type": "negative", "disabled": False, "loading": False},
            ],
        }
