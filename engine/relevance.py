from __future__ import annotations

from operator import itemgetter
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")

_PARENTHESES = ("(", ")")


def query_terms(query: str) -> list[str]:
    return str(query or "").lower().split()


def is_primary_artist(terms: Iterable[str], artist: str) -> bool:
    artist_lower = str(artist or "").lower()
    # Parenthetical credits ("feat." variants) never count as the primary artist.
    if any(mark in artist_lower for mark in _PARENTHESES):
        return False
    return any(term in artist_lower for term in terms)


def is_title_match(terms: Iterable[str], name: str) -> bool:
    name_lower = str(name or "").lower()
    return any(term in name_lower for term in terms)


def partition_track_matches(
    query: str,
    candidates: Iterable[T],
    *,
    name: Callable[[T], str] = itemgetter(0),
    artist: Callable[[T], str] = itemgetter(1),
) -> tuple[list[T], list[T]]:
    """Split candidates into (primary, secondary) buckets, keeping input order."""
    terms = query_terms(query)
    primary: list[T] = []
    secondary: list[T] = []
    for candidate in candidates:
        if is_primary_artist(terms, artist(candidate)) and is_title_match(terms, name(candidate)):
            primary.append(candidate)
        else:
            secondary.append(candidate)
    return primary, secondary


def classify_track_matches(
    query: str,
    candidates: Iterable[T],
    *,
    name: Callable[[T], str] = itemgetter(0),
    artist: Callable[[T], str] = itemgetter(1),
) -> list[T]:
    """Order track candidates with likely-intended matches first.

    A candidate is primary when some query term appears in its title and
    some query term appears in its artist name. This is a bucket split,
    not a score; ties keep provider order.
    """
    primary, secondary = partition_track_matches(query, candidates, name=name, artist=artist)
    return primary + secondary
