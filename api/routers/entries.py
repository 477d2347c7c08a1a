"""
Field editor endpoints for the `omdb` field of an entry.

Each request mounts a fresh editor on the entry, applies one action, flushes the
debounced save so the response reflects it, and tears the editor down.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Annotated, Any, cast

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import REPOSITORY_ERRORS, Host, raise_for_repository_error, require_entry
from omdb_field.app import build_field_context, init
from omdb_field.editor.field_editor import OmdbFieldEditor
from omdb_field.sdk.base import CollectingNotifier

router = APIRouter(prefix="/entries", tags=["entries"])


# --- Pydantic models ---

class Notification(BaseModel):
    level: str
    message: str


class FieldEditorResponse(BaseModel):
    entry_id: str
    value: Any = None
    invalid: bool
    view: dict[str, Any]
    notifications: list[Notification]


class TextEdit(BaseModel):
    text: str


@dataclass
class EditorSession:
    entry_id: str
    editor: OmdbFieldEditor
    notifier: CollectingNotifier

    def response(self) -> dict:
        self.editor.flush()
        return {
            "entry_id": self.entry_id,
            "value": self.editor.field.get_value(),
            "invalid": self.editor.field.invalid,
            "view": self.editor.render(),
            "notifications": self.notifier.messages,
        }


def get_editor_session(entry_id: str, host: Host) -> Iterator[EditorSession]:
    try:
        entry = require_entry(host.open_entry(entry_id), entry_id)
        notifier = CollectingNotifier()
        editor = cast(OmdbFieldEditor, init(build_field_context(host, entry, notifier)))
    except REPOSITORY_ERRORS as exc:
        raise_for_repository_error(exc, "loading entry")
    try:
        yield EditorSession(entry_id=entry_id, editor=editor, notifier=notifier)
    finally:
        editor.close()


Session = Annotated[EditorSession, Depends(get_editor_session)]


def _respond(session: EditorSession, context: str) -> dict:
    try:
        return session.response()
    except REPOSITORY_ERRORS as exc:
        raise_for_repository_error(exc, context)


# --- Endpoints ---

@router.get("/{entry_id}/omdb", response_model=FieldEditorResponse)
def get_field_editor(session: Session) -> dict:
    """Render the field editor for an entry."""
    return _respond(session, "rendering field editor")


@router.post("/{entry_id}/omdb/fetch", response_model=FieldEditorResponse)
def fetch_movie_data(session: Session) -> dict:
    """Fetch button: look up the entry's IMDb URL on OMDb and write the result."""
    try:
        session.editor.fetch()
    except REPOSITORY_ERRORS as exc:
        raise_for_repository_error(exc, "fetching movie data")
    return _respond(session, "saving movie data")


@router.put("/{entry_id}/omdb", response_model=FieldEditorResponse)
def edit_movie_data(session: Session, body: TextEdit) -> dict:
    """Direct edit of the JSON text area."""
    session.editor.edit_text(body.text)
    return _respond(session, "saving movie data")


@router.delete("/{entry_id}/omdb", response_model=FieldEditorResponse)
def clear_movie_data(session: Session) -> dict:
    """Clear button: remove the `omdb` value (title and genre are left as-is)."""
    try:
        session.editor.clear()
    except REPOSITORY_ERRORS as exc:
        raise_for_repository_error(exc, "clearing movie data")
    return _respond(session, "clearing movie data")
