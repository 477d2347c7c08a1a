from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests

from omdb_field.integrations.omdb import (
    OmdbClientError,
    fetch_movie,
    is_affirmative_response,
    parse_imdb_id,
    resolve_api_key,
)
from omdb_field.integrations.omdb.client import OMDB_API_BASE_URL


class _FakeResponse:
    def __init__(self, *, status_code: int = 200, payload=None, text: str = "") -> None:  # noqa: ANN001
        self.status_code = status_code
        self._payload = payload
        self.text = text or (json.dumps(payload) if payload is not None else "")

    def json(self):  # noqa: ANN201
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, exc: Exception | None = None) -> None:
        self._response = response
        self._exc = exc
        self.calls: list[dict] = []

    def get(self, url, params=None, headers=None, timeout=None):  # noqa: ANN001, ANN201
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self._exc is not None:
            raise self._exc
        return self._response


def _fixture(name: str) -> dict:
    repo_root = Path(__file__).resolve().parents[3]
    return json.loads((repo_root / "tests" / "fixtures" / "omdb" / name).read_text(encoding="utf-8"))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://www.imdb.com/title/tt0111161/", "tt0111161"),
        ("https://m.imdb.com/title/tt0113277/?ref_=nv_sr_1", "tt0113277"),
        ("imdb.com/title/tt0068646", "tt0068646"),
        ("https://www.imdb.com/name/nm0000151/", None),
        ("tt0111161", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_imdb_id(value, expected) -> None:  # noqa: ANN001
    assert parse_imdb_id(value) == expected


def test_resolve_api_key_prefers_installation_parameters(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OMDB_API_KEY", "from-env")
    assert resolve_api_key({"omdbApiKey": " from-params "}) == "from-params"
    assert resolve_api_key({"omdbApiKey": ""}) == "from-env"
    assert resolve_api_key(None) == "from-env"


def test_resolve_api_key_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OMDB_API_KEY", raising=False)
    assert resolve_api_key({}) is None


def test_is_affirmative_response() -> None:
    assert is_affirmative_response({"Response": "True"}) is True
    assert is_affirmative_response({"Response": "true"}) is True
    assert is_affirmative_response({"Response": "False", "Error": "Movie not found!"}) is False
    assert is_affirmative_response({}) is False
    assert is_affirmative_response(["Response"]) is False


def test_fetch_movie_returns_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OMDB_API_BASE_URL", raising=False)
    payload = _fixture("shawshank.json")
    session = _FakeSession(_FakeResponse(payload=payload))

    data = fetch_movie("secret", "tt0111161", session=session)

    assert data == payload
    assert session.calls[0]["url"] == OMDB_API_BASE_URL
    assert session.calls[0]["params"] == {"apikey": "secret", "i": "tt0111161"}


def test_fetch_movie_returns_provider_failure_as_payload() -> None:
    payload = _fixture("incorrect_id.json")
    session = _FakeSession(_FakeResponse(payload=payload))

    assert fetch_movie("secret", "tt0000000x", session=session) == payload


def test_fetch_movie_keeps_json_body_of_unauthorized_response() -> None:
    payload = {"Response": "False", "Error": "Invalid API key!"}
    session = _FakeSession(_FakeResponse(status_code=401, payload=payload))

    assert fetch_movie("bad", "tt0111161", session=session) == payload


def test_fetch_movie_wraps_transport_errors() -> None:
    session = _FakeSession(exc=requests.ConnectionError("connection refused"))

    with pytest.raises(OmdbClientError, match="connection refused"):
        fetch_movie("secret", "tt0111161", session=session)


def test_fetch_movie_rejects_non_json_body() -> None:
    session = _FakeSession(_FakeResponse(status_code=502, text="<html>Bad Gateway</html>"))

    with pytest.raises(OmdbClientError) as excinfo:
        fetch_movie("secret", "tt0111161", session=session)
    assert excinfo.value.status_code == 502
    assert "Bad Gateway" in (excinfo.value.body_snippet or "")


def test_fetch_movie_requires_key_and_id() -> None:
    session = _FakeSession(_FakeResponse(payload={}))

    with pytest.raises(OmdbClientError, match="API key"):
        fetch_movie(None, "tt0111161", session=session)
    with pytest.raises(OmdbClientError, match="IMDb id"):
        fetch_movie("secret", "", session=session)
    assert session.calls == []


def test_fetch_movie_uses_base_url_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OMDB_API_BASE_URL", "http://omdb.local/")
    session = _FakeSession(_FakeResponse(payload={"Response": "True"}))

    fetch_movie("secret", "tt0111161", session=session)

    assert session.calls[0]["url"] == "http://omdb.local/"
