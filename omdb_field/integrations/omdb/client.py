from __future__ import annotations

import os
import re
from typing import Any, Mapping

import requests

OMDB_API_BASE_URL = "https://www.omdbapi.com/"

_IMDB_TITLE_RE = re.compile(r"imdb\.com/title/(tt[^/]*)")


class OmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


def parse_imdb_id(value: str | None) -> str | None:
    """
    Extract the IMDb title id from an IMDb URL.

    Examples:
    - https://www.imdb.com/title/tt0111161/
    - imdb.com/title/tt0111161/?ref_=fn_al_tt_1
    """

    if not value or not isinstance(value, str):
        return None
    match = _IMDB_TITLE_RE.search(value)
    if match:
        return match.group(1)
    return None


def get_api_base_url() -> str:
    return (os.getenv("OMDB_API_BASE_URL") or "").strip() or OMDB_API_BASE_URL


def resolve_api_key(parameters: Mapping[str, Any] | None = None) -> str | None:
    """
    Resolve the OMDb key from installation parameters, falling back to `OMDB_API_KEY`.
    """

    configured = (parameters or {}).get("omdbApiKey")
    if isinstance(configured, str) and configured.strip():
        return configured.strip()
    resolved = (os.getenv("OMDB_API_KEY") or "").strip()
    return resolved or None


def is_affirmative_response(payload: Any) -> bool:
    if not isinstance(payload, Mapping):
        return False
    flag = payload.get("Response")
    return isinstance(flag, str) and flag.strip().lower() == "true"


def fetch_movie(
    api_key: str | None,
    imdb_id: str | None,
    *,
    session: requests.Session | None = None,
    base_url: str | None = None,
    timeout_seconds: float = 20.0,
) -> dict[str, Any]:
    """
    Fetch a single OMDb record by IMDb id.

    The payload is returned as-is, including provider failures (`Response: "False"`);
    callers decide what a non-affirmative response means. Transport failures, HTTP
    errors and non-JSON bodies raise `OmdbClientError`.
    """

    if not api_key:
        raise OmdbClientError("OMDb API key is not configured.")
    if not imdb_id:
        raise OmdbClientError("IMDb id is empty.")

    session = session or requests.Session()
    url = base_url or get_api_base_url()
    headers = {"accept": "application/json"}
    try:
        resp = session.get(url, params={"apikey": api_key, "i": imdb_id}, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise OmdbClientError(f"OMDb request failed: {exc}") from exc

    try:
        payload = resp.json()
    except ValueError as exc:
        raise OmdbClientError(
            "OMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    # OMDb answers 401 with a JSON body for invalid keys; keep that as a provider failure.
    if resp.status_code != 200 and not isinstance(payload, dict):
        raise OmdbClientError(
            f"OMDb request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    if not isinstance(payload, dict):
        raise OmdbClientError("OMDb returned unexpected JSON shape (not an object).")
    return payload
