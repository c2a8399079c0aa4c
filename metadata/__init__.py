from .catalog import (
    DEFAULT_CATEGORY_ORDER,
    Album,
    Artist,
    Artwork,
    Category,
    CategoryResultSet,
    SearchEnvelope,
    Track,
)

__all__ = [
    "DEFAULT_CATEGORY_ORDER",
    "Album",
    "Artist",
    "Artwork",
    "Category",
    "CategoryResultSet",
    "SearchEnvelope",
    "Track",
]
