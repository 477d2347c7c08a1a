from __future__ import annotations

import pytest

from omdb_field.editor import field_editor
from omdb_field.ingestion.entry_sync import select_entries_to_sync, sync_entries
from omdb_field.sdk.memory import InMemoryAppHost, InMemoryHost


def _row(entry_id: str, fields: dict) -> dict:
    return {"id": entry_id, "content_type": "movie", "fields": fields}


def test_select_entries_to_sync() -> None:
    rows = [
        _row("a", {"imdb": {"en-US": "https://www.imdb.com/title/tt0111161/"}}),
        _row("b", {"imdb": {"en-US": "https://example.com/film"}}),
        _row("c", {"imdb": {"en-US": "https://www.imdb.com/title/tt0113277/"}, "omdb": {"en-US": {"Title": "Heat"}}}),
        _row("a", {"imdb": {"en-US": "https://www.imdb.com/title/tt0111161/"}}),
    ]

    selected, reasons = select_entries_to_sync(rows, locale="en-US")
    assert [r.id for r in selected] == ["a"]
    assert reasons == {"no_imdb_url": 1, "already_synced": 1}

    forced, _ = select_entries_to_sync(rows, locale="en-US", force=True)
    assert [r.id for r in forced] == ["a", "c"]


def test_sync_entries_counts_outcomes(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_fetch(api_key, imdb_id, **kwargs):  # noqa: ANN001, ANN003, ANN202
        if imdb_id == "tt0111161":
            return {"Title": "The Shawshank Redemption", "Genre": "Drama", "Response": "True"}
        return {"Response": "False", "Error": "Incorrect IMDb ID."}

    monkeypatch.setattr(field_editor, "fetch_movie", fake_fetch)
    host = InMemoryHost(app=InMemoryAppHost({"omdbApiKey": "secret"}))
    ok = host.space.add_entry("movie", {"imdb": {"en-US": "https://www.imdb.com/title/tt0111161/"}})
    bad = host.space.add_entry("movie", {"imdb": {"en-US": "https://www.imdb.com/title/tt9999999x/"}})

    summary = sync_entries(host, [ok["sys"]["id"], bad["sys"]["id"], "missing"])

    assert summary.attempted == 3
    assert summary.updated == 1
    assert summary.failed == 1
    assert summary.skipped == 1
    assert summary.failures[0].message == "Error fetching data. Incorrect IMDb ID."
    assert host.space.get_entry(ok["sys"]["id"])["fields"]["title"]["en-US"] == "The Shawshank Redemption"


def test_sync_entries_dry_run_does_not_fetch(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(field_editor, "fetch_movie", lambda api_key, imdb_id, **kwargs: calls.append(imdb_id))
    host = InMemoryHost()
    movie = host.space.add_entry("movie", {"imdb": {"en-US": "https://www.imdb.com/title/tt0111161/"}})

    summary = sync_entries(host, [movie["sys"]["id"]], dry_run=True)

    assert summary.skipped == 1
    assert calls == []
