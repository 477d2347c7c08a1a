from __future__ import annotations

from typing import Any

from omdb_field.editor.config_screen import ConfigScreen
from omdb_field.editor.field_editor import OmdbFieldEditor
from omdb_field.models.entries import FieldIds
from omdb_field.sdk.base import (
    LOCATION_APP_CONFIG,
    LOCATION_ENTRY_FIELD,
    EntryApi,
    ExtensionContext,
    HostApi,
    NotifierApi,
    WindowApi,
)


def init(sdk: ExtensionContext, **editor_options: Any) -> ConfigScreen | OmdbFieldEditor:
    """
    Build and mount the screen for the location the host is rendering.

    `editor_options` are passed to `OmdbFieldEditor` (ignored for the config screen).
    """

    if sdk.is_location(LOCATION_APP_CONFIG):
        screen: ConfigScreen | OmdbFieldEditor = ConfigScreen(sdk)
    else:
        screen = OmdbFieldEditor(sdk, **editor_options)
    screen.mount()

    if sdk.window is not None:
        sdk.window.start_auto_resizer()
    return screen


def build_config_context(host: HostApi, notifier: NotifierApi) -> ExtensionContext:
    return ExtensionContext(
        location=LOCATION_APP_CONFIG,
        notifier=notifier,
        space=host.space,
        app=host.app,
        window=WindowApi(),
    )


def build_field_context(
    host: HostApi,
    entry: EntryApi,
    notifier: NotifierApi,
    *,
    field_ids: FieldIds = FieldIds(),
) -> ExtensionContext:
    return ExtensionContext(
        location=LOCATION_ENTRY_FIELD,
        notifier=notifier,
        space=host.space,
        entry=entry,
        field=entry.field(field_ids.derived),
        window=WindowApi(),
        parameters={"installation": host.installation_parameters()},
    )
