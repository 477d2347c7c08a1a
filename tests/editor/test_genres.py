from __future__ import annotations

from omdb_field.editor.genres import build_genre_links, resolve_genre_entries, split_genres
from omdb_field.sdk.memory import InMemorySpace


def _genre(space: InMemorySpace, name: str, locale: str = "en-US") -> dict:
    return space.add_entry("genre", {"name": {locale: name}})


def _names(entries: list[dict]) -> list[str]:
    return [e["fields"]["name"]["en-US"] for e in entries]


def test_split_genres_drops_placeholders_and_repeats() -> None:
    assert split_genres("Action, N/A, Drama") == ["Action", "Drama"]
    assert split_genres("Drama") == ["Drama"]
    assert split_genres("Crime,Drama, Crime") == ["Crime", "Drama"]
    assert split_genres("N/A") == []
    assert split_genres("") == []
    assert split_genres(None) == []


def test_existing_genres_follow_payload_order() -> None:
    space = InMemorySpace()
    drama = _genre(space, "Drama")
    action = _genre(space, "Action")

    entries = resolve_genre_entries(space, ["Action", "Drama"], locale="en-US")

    assert [e["sys"]["id"] for e in entries] == [action["sys"]["id"], drama["sys"]["id"]]
    assert space.query_count == 1
    assert space.create_count == 0


def test_missing_genres_are_created_in_order() -> None:
    space = InMemorySpace()
    drama = _genre(space, "Drama")

    entries = resolve_genre_entries(space, ["Action", "Drama", "Crime"], locale="en-US")

    assert _names(entries) == ["Action", "Drama", "Crime"]
    assert entries[1]["sys"]["id"] == drama["sys"]["id"]
    assert space.create_count == 2
    assert sorted(_names(space.entries_of_type("genre"))) == ["Action", "Crime", "Drama"]


def test_genres_in_other_locales_are_not_reused() -> None:
    space = InMemorySpace(locale="en-US")
    _genre(space, "Drama", locale="de-DE")

    entries = resolve_genre_entries(space, ["Drama"], locale="en-US")

    assert space.create_count == 1
    assert entries[0]["fields"]["name"] == {"en-US": "Drama"}


def test_build_genre_links() -> None:
    space = InMemorySpace()
    drama = _genre(space, "Drama")

    links = build_genre_links(space, "Action, N/A, Drama", locale="en-US")

    assert links is not None
    assert len(links) == 2
    assert links[1] == {"sys": {"type": "Link", "linkType": "Entry", "id": drama["sys"]["id"]}}
    assert links[0]["sys"]["id"] != drama["sys"]["id"]
    assert _names(space.entries_of_type("genre")).count("Action") == 1


def test_build_genre_links_without_names() -> None:
    space = InMemorySpace()

    assert build_genre_links(space, "N/A", locale="en-US") is None
    assert build_genre_links(space, None, locale="en-US") is None
    assert space.query_count == 0
