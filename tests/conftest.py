import sys
from pathlib import Path


# Ensure tests can import project packages regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

import pytest

from metadata.catalog import Album, Artist, Track
from metadata.providers.base import CatalogProvider


class StubProvider(CatalogProvider):
    """In-memory provider recording every call it receives."""

    name = "stub"

    def __init__(self, songs=(), albums=(), artists=(), failures=None):
        self.songs = list(songs)
        self.albums = list(albums)
        self.artists = list(artists)
        self.failures = dict(failures or {})
        self.calls = []

    def _answer(self, kind, items, term, limit, offset):
        self.calls.append((kind, term, limit, offset))
        if kind in self.failures:
            raise self.failures[kind]
        return list(items)

    def search_songs(self, term, limit, offset):
        return self._answer("songs", self.songs, term, limit, offset)

    def search_albums(self, term, limit, offset):
        return self._answer("albums", self.albums, term, limit, offset)

    def search_artists(self, term, limit, offset):
        return self._answer("artists", self.artists, term, limit, offset)


def make_track(name, artist):
    return Track(id=f"{artist}-{name}".lower().replace(" ", "-"), name=name, primary_artist=artist, genres=("Pop",))


def make_album(name, artist):
    return Album(id=f"{artist}-{name}".lower().replace(" ", "-"), name=name, primary_artist=artist, genres=("Pop",))


def make_artist(name):
    return Artist(id=name.lower().replace(" ", "-"), name=name, genres=("Pop",))


@pytest.fixture
def stub_provider():
    return StubProvider(
        songs=[make_track("Test Track", "Test Artist"), make_track("Another Test", "Someone Else")],
        albums=[make_album("Test Album", "Test Artist")],
        artists=[make_artist("Test Artist")],
    )
