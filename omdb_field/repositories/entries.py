from __future__ import annotations

from typing import Any, Mapping

from supabase import Client

from omdb_field.sdk.query import EntryQuery

ENTRIES_SCHEMA = "cms"
ENTRIES_TABLE = "entries"


class EntryRepositoryError(RuntimeError):
    pass


def _raise_for_supabase_error(response: Any, context: str) -> None:
    if hasattr(response, "error") and response.error:
        raise EntryRepositoryError(f"Supabase error during {context}: {response.error}")


def _entries(db: Client):
    return db.schema(ENTRIES_SCHEMA).table(ENTRIES_TABLE)


def _filter_column(path: str, locale: str) -> str:
    # fields.name -> fields->name->>en-US (jsonb path); sys.id -> id
    scope, name = path.split(".", 1)
    if scope == "sys":
        return "content_type" if name == "contentType" else name
    return f"fields->{name}->>{locale}"


def fetch_entry(db: Client, entry_id: str) -> dict[str, Any] | None:
    response = _entries(db).select("*").eq("id", str(entry_id)).limit(1).execute()
    _raise_for_supabase_error(response, "fetching entry")
    data = response.data or []
    if isinstance(data, list) and data:
        return data[0]
    return None


def query_entries(db: Client, query: EntryQuery, *, locale: str) -> tuple[list[dict[str, Any]], int]:
    """
    Run a parsed entry query against `cms.entries`.

    Returns the page of rows and the exact total count of matches.
    """

    request = _entries(db).select("*", count="exact")
    if query.content_type:
        request = request.eq("content_type", query.content_type)
    for f in query.filters:
        column = _filter_column(f.path, locale)
        if f.op == "in":
            request = request.in_(column, list(f.value))
        else:
            request = request.eq(column, f.value)
    response = request.order("created_at").range(query.skip, query.skip + query.limit - 1).execute()
    _raise_for_supabase_error(response, "querying entries")

    data = response.data or []
    rows = data if isinstance(data, list) else []
    total = getattr(response, "count", None)
    return rows, total if isinstance(total, int) else len(rows)


def insert_entry(db: Client, content_type: str, fields: Mapping[str, Any]) -> dict[str, Any]:
    payload = {"content_type": content_type, "fields": dict(fields)}
    response = _entries(db).insert(payload).execute()
    _raise_for_supabase_error(response, "inserting entry")
    data = response.data or []
    if isinstance(data, list) and data:
        return data[0]
    raise EntryRepositoryError("Supabase insert returned no data for entry.")


def update_entry_fields(db: Client, entry_id: str, fields: Mapping[str, Any]) -> dict[str, Any]:
    response = _entries(db).update({"fields": dict(fields)}).eq("id", str(entry_id)).execute()
    _raise_for_supabase_error(response, "updating entry fields")
    data = response.data or []
    if isinstance(data, list) and data:
        return data[0]
    raise EntryRepositoryError("Supabase update returned no data for entry.")


def list_entries_by_content_type(
    db: Client,
    content_type: str,
    *,
    limit: int | None = None,
    page_size: int = 500,
) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    offset = 0
    while True:
        response = (
            _entries(db)
            .select("*")
            .eq("content_type", content_type)
            .order("created_at")
            .range(offset, offset + page_size - 1)
            .execute()
        )
        _raise_for_supabase_error(response, "listing entries")
        page = response.data or []
        if not isinstance(page, list) or not page:
            break
        rows.extend(page)
        if limit is not None and len(rows) >= limit:
            return rows[:limit]
        if len(page) < page_size:
            break
        offset += page_size
    return rows
