from __future__ import annotations

from typing import Any, Mapping

from supabase import Client


class AppInstallationRepositoryError(RuntimeError):
    pass


def _raise_for_supabase_error(response: Any, context: str) -> None:
    if hasattr(response, "error") and response.error:
        raise AppInstallationRepositoryError(f"Supabase error during {context}: {response.error}")


def fetch_app_parameters(db: Client, app_id: str) -> dict[str, Any] | None:
    """
    Return the persisted installation parameters for `app_id`, or None before the first save.
    """

    response = (
        db.schema("cms")
        .table("app_installations")
        .select("parameters")
        .eq("app_id", app_id)
        .limit(1)
        .execute()
    )
    _raise_for_supabase_error(response, "fetching app parameters")
    data = response.data or []
    if isinstance(data, list) and data:
        parameters = data[0].get("parameters")
        return dict(parameters) if isinstance(parameters, Mapping) else None
    return None


def save_app_parameters(db: Client, app_id: str, parameters: Mapping[str, Any]) -> dict[str, Any]:
    payload = {"app_id": app_id, "parameters": dict(parameters)}
    response = db.schema("cms").table("app_installations").upsert(payload, on_conflict="app_id").execute()
    _raise_for_supabase_error(response, "saving app parameters")
    data = response.data or []
    if isinstance(data, list) and data:
        return data[0]
    raise AppInstallationRepositoryError("Supabase upsert returned no data for app installation.")
