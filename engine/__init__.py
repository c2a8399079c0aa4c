from .catalog_ids import synthesize_catalog_id
from .errors import (
    CatalogSearchError,
    EncodingError,
    MalformedNumberError,
    MissingTermError,
    ProviderError,
    ProviderFailureError,
    ValidationError,
)
from .relevance import classify_track_matches, partition_track_matches
from .response import assemble_envelope, build_search_href, envelope_to_payload, render_envelope
from .search_engine import CatalogSearchService
from .search_params import Query, normalize_search_params

__all__ = [
    "CatalogSearchError",
    "CatalogSearchService",
    "EncodingError",
    "MalformedNumberError",
    "MissingTermError",
    "ProviderError",
    "ProviderFailureError",
    "Query",
    "ValidationError",
    "assemble_envelope",
    "build_search_href",
    "classify_track_matches",
    "envelope_to_payload",
    "normalize_search_params",
    "partition_track_matches",
    "render_envelope",
    "synthesize_catalog_id",
]
