import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config.settings import DEFAULT_LASTFM_BASE_URL, DEFAULT_USER_AGENT, ConfigurationError
from engine.catalog_ids import synthesize_catalog_id
from engine.errors import ProviderError
from engine.relevance import classify_track_matches
from metadata.catalog import Album, Artist, Artwork, Track
from metadata.providers.base import CatalogProvider

logger = logging.getLogger(__name__)

# Last.fm search results carry no genre data.
_DEFAULT_GENRE_NAMES = ("Pop",)
_ARTWORK_SIZE = "large"
_TRACK_OVERFETCH_FACTOR = 2


def _page_for(offset, limit):
    return offset // max(1, limit) + 1


def _as_list(value):
    # A single match comes back as an object instead of a one-element list.
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return [entry for entry in value if isinstance(entry, dict)]
    return []


def _artist_name(value):
    if isinstance(value, dict):
        return str(value.get("name") or value.get("#text") or "")
    return str(value or "")


def _pick_artwork(images):
    for image in _as_list(images):
        if image.get("size") != _ARTWORK_SIZE:
            continue
        url = str(image.get("#text") or "").strip()
        if url:
            return Artwork(url=url)
        break
    return None


def _matches(payload, results_key, list_key):
    results = payload.get("results")
    if not isinstance(results, dict):
        return []
    matches = results.get(results_key)
    if not isinstance(matches, dict):
        return []
    return _as_list(matches.get(list_key))


class LastFMProvider(CatalogProvider):
    """Catalog search backed by the Last.fm ``*.search`` methods."""

    name = "lastfm"

    def __init__(
        self,
        *,
        api_key,
        api_secret,
        base_url=DEFAULT_LASTFM_BASE_URL,
        timeout_seconds=10.0,
        max_retries=2,
        user_agent=DEFAULT_USER_AGENT,
        session=None,
    ):
        if not api_key or not api_secret:
            raise ConfigurationError("Last.fm API key and secret are required")
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url
        self.timeout_seconds = float(timeout_seconds)
        self.user_agent = user_agent
        self._session = session or self._build_session(max_retries)

    @classmethod
    def from_settings(cls, settings):
        return cls(
            api_key=settings.lastfm_api_key,
            api_secret=settings.lastfm_api_secret,
            base_url=settings.lastfm_base_url,
            timeout_seconds=settings.lastfm_timeout_seconds,
            max_retries=settings.lastfm_max_retries,
            user_agent=settings.user_agent,
        )

    @staticmethod
    def _build_session(max_retries):
        session = requests.Session()
        retry = Retry(
            total=max(0, int(max_retries)),
            backoff_factor=0.4,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset({"GET"}),
            respect_retry_after_header=True,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def _request(self, method, **params):
        query = {
            "method": method,
            "api_key": self.api_key,
            "format": "json",
            **params,
        }
        try:
            resp = self._session.get(
                self.base_url,
                params=query,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.info(f"[LASTFM] request={method} status=error")
            raise ProviderError(f"error making request to Last.fm: {exc}") from exc

        status = int(resp.status_code)
        logger.info(f"[LASTFM] request={method} status={status}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise ProviderError(f"error decoding Last.fm response (status {status})") from exc
        if isinstance(payload, dict) and payload.get("error"):
            raise ProviderError(f"Last.fm error {payload.get('error')}: {payload.get('message') or 'unknown'}")
        if status != 200:
            raise ProviderError(f"Last.fm returned status {status}")
        if not isinstance(payload, dict):
            raise ProviderError("unexpected Last.fm response shape")
        return payload

    def search_songs(self, term, limit, offset):
        payload = self._request(
            "track.search",
            track=term,
            limit=limit * _TRACK_OVERFETCH_FACTOR,
            page=_page_for(offset, limit),
        )
        tracks = []
        for entry in _matches(payload, "trackmatches", "track"):
            name = str(entry.get("name") or "")
            artist = _artist_name(entry.get("artist"))
            track_id = synthesize_catalog_id(artist, name)
            tracks.append(
                Track(
                    id=track_id,
                    name=name,
                    primary_artist=artist,
                    genres=_DEFAULT_GENRE_NAMES,
                    artwork=_pick_artwork(entry.get("image")),
                    url=entry.get("url") or None,
                )
            )
        ranked = classify_track_matches(
            term,
            tracks,
            name=lambda track: track.name,
            artist=lambda track: track.primary_artist,
        )
        return ranked[:limit]

    def search_albums(self, term, limit, offset):
        payload = self._request("album.search", album=term, limit=limit, page=_page_for(offset, limit))
        albums = []
        for entry in _matches(payload, "albummatches", "album"):
            name = str(entry.get("name") or "")
            artist = _artist_name(entry.get("artist"))
            albums.append(
                Album(
                    id=synthesize_catalog_id(artist, name),
                    name=name,
                    primary_artist=artist,
                    genres=_DEFAULT_GENRE_NAMES,
                    artwork=_pick_artwork(entry.get("image")),
                    url=entry.get("url") or None,
                )
            )
        return albums[:limit]

    def search_artists(self, term, limit, offset):
        payload = self._request("artist.search", artist=term, limit=limit, page=_page_for(offset, limit))
        artists = []
        for entry in _matches(payload, "artistmatches", "artist"):
            name = str(entry.get("name") or "")
            artists.append(
                Artist(
                    id=synthesize_catalog_id(None, name),
                    name=name,
                    genres=_DEFAULT_GENRE_NAMES,
                    artwork=_pick_artwork(entry.get("image")),
                    url=entry.get("url") or None,
                )
            )
        return artists[:limit]
