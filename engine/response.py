"""Shape aggregated category results into the public search envelope."""

from __future__ import annotations

from typing import Mapping, Sequence
from urllib.parse import urlencode

from engine.errors import EncodingError
from engine.json_utils import strict_json_bytes
from metadata.catalog import CATALOG_PATH_PREFIX, Category, CategoryResultSet, SearchEnvelope

SEARCH_PATH = f"{CATALOG_PATH_PREFIX}/search"


def build_search_href(term: str, category: Category, page_size: int, offset: int) -> str:
    params = {
        "term": term,
        "types": category.value,
        "limit": page_size,
        "offset": offset,
    }
    return f"{SEARCH_PATH}?{urlencode(params)}"


def build_result_set(query, category: Category, items: Sequence) -> CategoryResultSet:
    """Wrap one category's items, re-clamped to the page size, with paging links."""
    page = tuple(items[: query.page_size])
    next_href = build_search_href(query.term, category, query.page_size, query.offset + query.page_size)
    return CategoryResultSet(
        category=category,
        href=build_search_href(query.term, category, query.page_size, query.offset),
        next=next_href,
        items=page,
    )


def assemble_envelope(query, category_results: Mapping[Category, Sequence]) -> SearchEnvelope:
    """Build the envelope for every requested category, in request order.

    ``category_results`` may hold raw item lists or ready
    ``CategoryResultSet`` values; it is only ever looked up by key, so its
    own iteration order never leaks into the response.
    """
    results = {}
    order = []
    for category in query.categories:
        value = category_results.get(category, ())
        if not isinstance(value, CategoryResultSet):
            value = build_result_set(query, category, list(value))
        results[category] = value
        order.append(category)
    return SearchEnvelope(results=results, category_order=tuple(order))


def envelope_to_payload(envelope: SearchEnvelope) -> dict:
    results = {}
    for category in envelope.category_order:
        results[category.value] = envelope.results[category].to_payload()
    return {
        "results": results,
        "meta": {"results": {"order": [category.value for category in envelope.category_order]}},
    }


def render_envelope(envelope: SearchEnvelope) -> bytes:
    try:
        return strict_json_bytes(envelope_to_payload(envelope))
    except (TypeError, ValueError, KeyError, AttributeError) as exc:
        raise EncodingError(f"error encoding response: {exc}") from exc
