from __future__ import annotations

import logging
from typing import Any

from omdb_field.sdk.base import ExtensionContext, Unsubscribe

logger = logging.getLogger(__name__)

API_KEY_PARAMETER = "omdbApiKey"


class ConfigScreen:
    """
    App configuration screen: one required input bound to the OMDb API key.

    The host persists whatever `on_configure` returns; this screen never writes itself.
    """

    def __init__(self, sdk: ExtensionContext) -> None:
        if sdk.app is None:
            raise ValueError("ConfigScreen requires an app host.")
        self.sdk = sdk
        self.app = sdk.app
        self.parameters: dict[str, Any] = {}
        self._unsubscribes: list[Unsubscribe] = [self.app.on_configure(self.on_configure)]

    def mount(self) -> None:
        parameters = self.app.get_parameters()
        self.parameters = dict(parameters or {})
        self.app.set_ready()
        logger.debug("Config screen ready")

    def set_api_key(self, value: str) -> None:
        self.parameters = {API_KEY_PARAMETER: value}

    def on_configure(self) -> dict[str, Any]:
        return {"parameters": dict(self.parameters)}

    def close(self) -> None:
        for unsubscribe in self._unsubscribes:
            unsubscribe()
        self._unsubscribes.clear()

    def render(self) -> dict[str, Any]:
        return {
            "id": "app-config",
            "heading": "OMDB Configuration",
            "note": {"type": "primary", "title": "About the app", "text": "Enter your OMDB API key."},
            "fields": [
                {
                    "id": "omdb-api-key",
                    "name": "omdb-api-key",
                    "label": "OMDb API Key",
                    "required": True,
                    "value": self.parameters.get(API_KEY_PARAMETER),
                }
            ],
        }
