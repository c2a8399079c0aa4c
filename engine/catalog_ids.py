from __future__ import annotations

from typing import Any

_ID_SEPARATORS = (" ", "/", "\\")


def _lower_or_empty(value: Any) -> str:
    return str(value or "").lower()


def synthesize_catalog_id(primary_artist: Any, name: Any) -> str:
    """Build a deterministic, URL-safe id from an entity name and its artist.

    Songs and albums are keyed by ``(artist, name)``; artists pass no artist
    and are keyed by name alone. This is plain string normalization, not a
    hash: distinct pairs that normalize to the same text (``"a b"`` vs
    ``"a/b"``, or an artist name containing ``-``) collide. Existing clients
    bookmark these ids, so the scheme is kept as-is.
    """
    normalized_artist = _lower_or_empty(primary_artist)
    normalized_name = _lower_or_empty(name)
    if normalized_artist:
        raw = f"{normalized_artist}-{normalized_name}"
    else:
        raw = normalized_name
    for separator in _ID_SEPARATORS:
        raw = raw.replace(separator, "-")
    return raw
