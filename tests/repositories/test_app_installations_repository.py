from __future__ import annotations

import pytest

from omdb_field.repositories.app_installations import (
    AppInstallationRepositoryError,
    fetch_app_parameters,
    save_app_parameters,
)
from omdb_field.sdk.supabase_host import SupabaseAppHost


class _FakeResponse:
    def __init__(self, *, data=None, error=None):  # noqa: ANN001
        self.data = data or []
        self.error = error


class _FakeClient:
    def __init__(self, responses: list[_FakeResponse]) -> None:
        self._responses = list(responses)
        self.upserts: list[tuple] = []

    def schema(self, _name: str):  # noqa: ANN001
        return self

    def table(self, _name: str):  # noqa: ANN001
        return self

    def select(self, *_args, **_kwargs):  # noqa: ANN001, ANN002
        return self

    def eq(self, _col: str, _val: str):  # noqa: ANN001
        return self

    def limit(self, _n: int):  # noqa: ANN001
        return self

    def upsert(self, payload: dict, **kwargs):  # noqa: ANN001, ANN003
        self.upserts.append((payload, kwargs))
        return self

    def execute(self) -> _FakeResponse:
        return self._responses.pop(0)


def test_fetch_app_parameters() -> None:
    db = _FakeClient([_FakeResponse(data=[{"parameters": {"omdbApiKey": "abc"}}])])

    assert fetch_app_parameters(db, "omdb") == {"omdbApiKey": "abc"}


def test_fetch_app_parameters_before_first_save() -> None:
    db = _FakeClient([_FakeResponse(data=[])])

    assert fetch_app_parameters(db, "omdb") is None


def test_save_app_parameters_upserts_by_app_id() -> None:
    row = {"app_id": "omdb", "parameters": {"omdbApiKey": "abc"}}
    db = _FakeClient([_FakeResponse(data=[row])])

    assert save_app_parameters(db, "omdb", {"omdbApiKey": "abc"}) == row
    assert db.upserts == [(row, {"on_conflict": "app_id"})]


def test_save_app_parameters_raises_on_error() -> None:
    db = _FakeClient([_FakeResponse(error="permission denied")])

    with pytest.raises(AppInstallationRepositoryError, match="saving app parameters"):
        save_app_parameters(db, "omdb", {})


def test_supabase_app_host_configure_persists() -> None:
    row = {"app_id": "omdb", "parameters": {"omdbApiKey": "new"}}
    db = _FakeClient([_FakeResponse(data=[row])])
    app = SupabaseAppHost(db, "omdb")
    app.on_configure(lambda: {"parameters": {"omdbApiKey": "new"}})

    assert app.configure() == {"omdbApiKey": "new"}
    assert db.upserts[0][0] == row
