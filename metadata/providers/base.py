from metadata.catalog import Album, Artist, Category, Track


class CatalogProvider:
    """Per-category catalog search.

    Implementations return an empty list when nothing matches and raise
    ``engine.errors.ProviderError`` when the underlying source fails. A
    category the source cannot search keeps the base implementation and
    therefore yields no results.
    """

    name = ""

    def search_songs(self, term: str, limit: int, offset: int) -> list[Track]:
        return []

    def search_albums(self, term: str, limit: int, offset: int) -> list[Album]:
        return []

    def search_artists(self, term: str, limit: int, offset: int) -> list[Artist]:
        return []


PROVIDER_METHODS = {
    Category.SONGS: "search_songs",
    Category.ALBUMS: "search_albums",
    Category.ARTISTS: "search_artists",
}
