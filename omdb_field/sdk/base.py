"""
Host platform contract for the OMDb field app.

The host owns entries, fields, links, notifications and app parameters. Screens only
talk to it through the interfaces below; `omdb_field.sdk.memory` and
`omdb_field.sdk.supabase_host` provide concrete hosts.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
import dataclasses
from threading import Lock
from typing import Any, Mapping

logger = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]

LOCATION_APP_CONFIG = "app-config"
LOCATION_ENTRY_FIELD = "entry-field"


class Signal:
    """Callback registry; `attach` returns the matching detach handle."""

    def __init__(self) -> None:
        self._callbacks: dict[int, Callable[..., Any]] = {}
        self._counter = 0
        self._lock = Lock()

    def attach(self, callback: Callable[..., Any]) -> Unsubscribe:
        with self._lock:
            self._counter += 1
            key = self._counter
            self._callbacks[key] = callback

        def detach() -> None:
            with self._lock:
                self._callbacks.pop(key, None)

        return detach

    def dispatch(self, *args: Any) -> None:
        with self._lock:
            callbacks = list(self._callbacks.values())
        for callback in callbacks:
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Error in value-changed callback: {e}")


class EntryField:
    """A single localized field slot on an entry."""

    def __init__(self, entry: EntryApi, field_id: str, locale: str) -> None:
        self._entry = entry
        self.id = field_id
        self.locale = locale
        self.invalid = False
        self._value_changed = Signal()

    def get_value(self) -> Any:
        return self._entry.get_localized(self.id, self.locale)

    def set_value(self, value: Any) -> Any:
        self._entry.set_localized(self.id, self.locale, value)
        self._value_changed.dispatch(value)
        return value

    def remove_value(self) -> None:
        self._entry.set_localized(self.id, self.locale, None)
        self._value_changed.dispatch(None)

    def set_invalid(self, invalid: bool) -> None:
        self.invalid = bool(invalid)

    def on_value_changed(self, callback: Callable[[Any], None]) -> Unsubscribe:
        return self._value_changed.attach(callback)


class EntryApi:
    """
    An entry as seen by the field editor.

    Field writes go to the in-memory copy first and are then handed to `writer`
    (if any) with the full localized fields map.
    """

    def __init__(
        self,
        entry_id: str,
        content_type: str,
        fields: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        locale: str,
        writer: Callable[[EntryApi], None] | None = None,
    ) -> None:
        self.id = entry_id
        self.content_type = content_type
        self.locale = locale
        self._writer = writer
        self._lock = Lock()
        self._raw: dict[str, dict[str, Any]] = {
            key: dict(value) for key, value in (fields or {}).items() if isinstance(value, Mapping)
        }
        self._fields: dict[str, EntryField] = {}

    def field(self, field_id: str) -> EntryField:
        with self._lock:
            handle = self._fields.get(field_id)
            if handle is None:
                handle = EntryField(self, field_id, self.locale)
                self._fields[field_id] = handle
            return handle

    def get_localized(self, field_id: str, locale: str) -> Any:
        with self._lock:
            return copy.deepcopy((self._raw.get(field_id) or {}).get(locale))

    def set_localized(self, field_id: str, locale: str, value: Any) -> None:
        with self._lock:
            localized = self._raw.setdefault(field_id, {})
            if value is None:
                localized.pop(locale, None)
                if not localized:
                    self._raw.pop(field_id, None)
            else:
                localized[locale] = copy.deepcopy(value)
        if self._writer is not None:
            self._writer(self)

    def snapshot_fields(self) -> dict[str, dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._raw)


class SpaceApi(ABC):
    """Space-level entry queries and entry creation."""

    @abstractmethod
    def get_entries(self, query: Mapping[str, Any]) -> dict[str, Any]:
        """
        Run an entry query, e.g. `{"content_type": "genre", "fields.name[in]": [...]}`.

        Returns `{"items": [...], "total": int, "skip": int, "limit": int}`.
        """
        pass

    @abstractmethod
    def create_entry(self, content_type: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Create an entry from `{"fields": {...}}` and return it with its `sys` block."""
        pass


class NotifierApi(ABC):
    @abstractmethod
    def error(self, message: str) -> None:
        pass


class CollectingNotifier(NotifierApi):
    """Keeps notifications so request handlers can return them to the caller."""

    def __init__(self) -> None:
        self.messages: list[dict[str, str]] = []

    def error(self, message: str) -> None:
        logger.warning(f"Notifier error: {message}")
        self.messages.append({"level": "error", "message": message})

    @property
    def errors(self) -> list[str]:
        return [m["message"] for m in self.messages if m["level"] == "error"]


class AppApi(ABC):
    """App-level parameters and the configure/ready handshake."""

    def __init__(self) -> None:
        self.ready = False
        self._configure_handler: Callable[[], Mapping[str, Any] | None] | None = None

    @abstractmethod
    def get_parameters(self) -> dict[str, Any] | None:
        pass

    @abstractmethod
    def _save_parameters(self, parameters: Mapping[str, Any]) -> None:
        pass

    def set_ready(self) -> None:
        self.ready = True

    def on_configure(self, handler: Callable[[], Mapping[str, Any] | None]) -> Unsubscribe:
        self._configure_handler = handler

        def detach() -> None:
            if self._configure_handler is handler:
                self._configure_handler = None

        return detach

    def configure(self) -> dict[str, Any] | None:
        """
        Host-side save: ask the screen for its parameters and persist them.

        Returns the saved parameters, or None when the screen aborted the save.
        """

        if self._configure_handler is None:
            raise RuntimeError("No configure handler registered.")
        result = self._configure_handler()
        if not result:
            return None
        parameters = dict(result.get("parameters") or {})
        self._save_parameters(parameters)
        return parameters


class WindowApi:
    def __init__(self) -> None:
        self.auto_resizing = False

    def start_auto_resizer(self) -> None:
        self.auto_resizing = True


@dataclasses.dataclass
class ExtensionContext:
    """Everything a screen receives from the host for one rendered location."""

    location: str
    notifier: NotifierApi
    space: SpaceApi | None = None
    app: AppApi | None = None
    entry: EntryApi | None = None
    field: EntryField | None = None
    window: WindowApi | None = None
    parameters: dict[str, Any] = dataclasses.field(default_factory=lambda: {"installation": {}})

    def is_location(self, location: str) -> bool:
        return self.location == location

    @property
    def installation_parameters(self) -> dict[str, Any]:
        return dict(self.parameters.get("installation") or {})


class HostApi(ABC):
    """Backing host for request handlers and scripts: one space, one app installation."""

    locale: str
    space: SpaceApi
    app: AppApi

    @abstractmethod
    def open_entry(self, entry_id: str) -> EntryApi | None:
        """Return a live handle for `entry_id`, or None if the entry does not exist."""
        pass

    def installation_parameters(self) -> dict[str, Any]:
        return dict(self.app.get_parameters() or {})
