from __future__ import annotations

import json

import pytest

from conftest import make_artist, make_track
from engine.errors import EncodingError
from engine.response import (
    assemble_envelope,
    build_search_href,
    envelope_to_payload,
    render_envelope,
)
from engine.search_params import normalize_search_params
from metadata.catalog import Artwork, Category, CategoryResultSet, SearchEnvelope, Track


class _ReversedDict(dict):
    def __iter__(self):
        return reversed(list(super().__iter__()))

    def items(self):
        return [(key, self[key]) for key in self]


def test_category_order_follows_request_not_mapping() -> None:
    query = normalize_search_params("test", None, None, "songs,artists")
    results = _ReversedDict({Category.SONGS: [make_track("a", "b")], Category.ARTISTS: [make_artist("b")]})

    envelope = assemble_envelope(query, results)
    payload = envelope_to_payload(envelope)

    assert payload["meta"]["results"]["order"] == ["songs", "artists"]
    assert list(payload["results"]) == ["songs", "artists"]


def test_missing_category_results_become_empty_sets() -> None:
    query = normalize_search_params("test", None, None, "albums")
    envelope = assemble_envelope(query, {})
    assert envelope.results[Category.ALBUMS].items == ()
    assert envelope.results[Category.ALBUMS].next == "/v1/catalog/us/search?term=test&types=albums&limit=5&offset=5"


def test_href_encodes_term() -> None:
    href = build_search_href("bad guy & more", Category.SONGS, 5, 10)
    assert href == "/v1/catalog/us/search?term=bad+guy+%26+more&types=songs&limit=5&offset=10"


def test_next_is_built_for_every_category() -> None:
    query = normalize_search_params("test", "2", "4", "songs,artists")
    envelope = assemble_envelope(
        query,
        {
            Category.SONGS: [make_track("one", "x"), make_track("two", "x"), make_track("three", "x")],
            Category.ARTISTS: [make_artist("x")],
        },
    )
    songs = envelope.results[Category.SONGS]
    assert len(songs.items) == 2
    assert songs.href.endswith("limit=2&offset=4")
    assert songs.next.endswith("limit=2&offset=6")
    assert envelope.results[Category.ARTISTS].next.endswith("types=artists&limit=2&offset=6")


def test_payload_matches_catalog_wire_shape() -> None:
    track = Track(
        id="test-artist-test-track",
        name="Test Track",
        primary_artist="Test Artist",
        genres=("Pop",),
        artwork=Artwork(url="https://img.example/large.png"),
    )
    query = normalize_search_params("test", "1", None, "songs")
    payload = envelope_to_payload(assemble_envelope(query, {Category.SONGS: [track]}))

    songs = payload["results"]["songs"]
    assert songs["data"] == [
        {
            "id": "test-artist-test-track",
            "type": "songs",
            "href": "/v1/catalog/us/songs/test-artist-test-track",
            "attributes": {
                "name": "Test Track",
                "artistName": "Test Artist",
                "genreNames": ["Pop"],
                "artwork": {"url": "https://img.example/large.png"},
                "playParams": {"id": "test-artist-test-track", "kind": "song"},
            },
        }
    ]


def test_render_envelope_produces_json_bytes() -> None:
    query = normalize_search_params("tést", None, None, "artists")
    body = render_envelope(assemble_envelope(query, {Category.ARTISTS: [make_artist("Tést")]}))
    decoded = json.loads(body.decode("utf-8"))
    assert decoded["results"]["artists"]["data"][0]["attributes"]["name"] == "Tést"


def test_render_envelope_wraps_encoding_failures() -> None:
    broken = CategoryResultSet(category=Category.SONGS, href="/x", items=(object(),))
    envelope = SearchEnvelope(results={Category.SONGS: broken}, category_order=(Category.SONGS,))
    with pytest.raises(EncodingError):
        render_envelope(envelope)
