"""
App configuration endpoints (OMDb API key).
"""
from __future__ import annotations

from typing import Any, cast

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.deps import REPOSITORY_ERRORS, Host, raise_for_repository_error
from omdb_field.app import build_config_context, init
from omdb_field.editor.config_screen import ConfigScreen
from omdb_field.sdk.base import CollectingNotifier

router = APIRouter(prefix="/config", tags=["config"])


# --- Pydantic models ---

class ConfigUpdate(BaseModel):
    omdbApiKey: str = Field(min_length=1)


class ConfigResponse(BaseModel):
    form: dict[str, Any]
    parameters: dict[str, Any]
    ready: bool


def _open_config_screen(host: Host) -> ConfigScreen:
    return cast(ConfigScreen, init(build_config_context(host, CollectingNotifier())))


# --- Endpoints ---

@router.get("", response_model=ConfigResponse)
def get_config(host: Host) -> dict:
    """Render the configuration form with the persisted parameters."""
    try:
        screen = _open_config_screen(host)
    except REPOSITORY_ERRORS as exc:
        raise_for_repository_error(exc, "loading app parameters")
    try:
        return {"form": screen.render(), "parameters": screen.parameters, "ready": host.app.ready}
    finally:
        screen.close()


@router.put("", response_model=ConfigResponse)
def update_config(host: Host, body: ConfigUpdate) -> dict:
    """Set the API key and run the host-side save."""
    try:
        screen = _open_config_screen(host)
        try:
            screen.set_api_key(body.omdbApiKey)
            saved = host.app.configure() or {}
            return {"form": screen.render(), "parameters": saved, "ready": host.app.ready}
        finally:
            screen.close()
    except REPOSITORY_ERRORS as exc:
        raise_for_repository_error(exc, "saving app parameters")
