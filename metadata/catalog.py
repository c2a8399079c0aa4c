"""Provider-independent catalog records returned by search."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    ARTISTS = "artists"
    SONGS = "songs"
    ALBUMS = "albums"


DEFAULT_CATEGORY_ORDER: tuple[Category, ...] = (
    Category.ARTISTS,
    Category.SONGS,
    Category.ALBUMS,
)

CATALOG_PATH_PREFIX = "/v1/catalog/us"


def resource_href(category: Category, resource_id: str) -> str:
    return f"{CATALOG_PATH_PREFIX}/{category.value}/{resource_id}"


@dataclass(frozen=True)
class Artwork:
    url: str

    def to_payload(self) -> dict:
        return {"url": self.url}


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str
    primary_artist: str | None = None
    genres: tuple[str, ...] = ()
    artwork: Artwork | None = None
    url: str | None = None

    category = None
    play_kind = None

    @property
    def href(self) -> str:
        return resource_href(self.category, self.id)

    def _attributes(self) -> dict:
        attributes = {"name": self.name}
        if self.primary_artist is not None:
            attributes["artistName"] = self.primary_artist
        attributes["genreNames"] = list(self.genres)
        if self.artwork is not None:
            attributes["artwork"] = self.artwork.to_payload()
        if self.url:
            attributes["url"] = self.url
        if self.play_kind:
            attributes["playParams"] = {"id": self.id, "kind": self.play_kind}
        return attributes

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "type": self.category.value,
            "href": self.href,
            "attributes": self._attributes(),
        }


@dataclass(frozen=True)
class Track(CatalogItem):
    album_name: str | None = None

    category = Category.SONGS
    play_kind = "song"

    def _attributes(self) -> dict:
        attributes = super()._attributes()
        if self.album_name:
            attributes["albumName"] = self.album_name
        return attributes


@dataclass(frozen=True)
class Album(CatalogItem):
    category = Category.ALBUMS
    play_kind = "album"


@dataclass(frozen=True)
class Artist(CatalogItem):
    category = Category.ARTISTS


@dataclass(frozen=True)
class CategoryResultSet:
    category: Category
    href: str
    next: str | None = None
    items: tuple[CatalogItem, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict:
        payload = {"href": self.href}
        if self.next:
            payload["next"] = self.next
        payload["data"] = [item.to_payload() for item in self.items]
        return payload


@dataclass(frozen=True)
class SearchEnvelope:
    results: dict
    category_order: tuple[Category, ...]
