"""
OMDb integration client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from omdb_field.integrations.omdb.client import (
        OmdbClientError,
        fetch_movie,
        is_affirmative_response,
        parse_imdb_id,
        resolve_api_key,
    )

__all__ = [
    "OmdbClientError",
    "fetch_movie",
    "is_affirmative_response",
    "parse_imdb_id",
    "resolve_api_key",
]


def __getattr__(name: str):
    if name in __all__:
        from omdb_field.integrations.omdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
