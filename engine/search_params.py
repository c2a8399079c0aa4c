from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from engine.errors import MalformedNumberError, MissingTermError
from metadata.catalog import DEFAULT_CATEGORY_ORDER, Category

DEFAULT_PAGE_SIZE = 5
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 25
DEFAULT_OFFSET = 0

_CATEGORY_TOKENS = {category.value: category for category in Category}
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Query:
    term: str
    page_size: int = DEFAULT_PAGE_SIZE
    offset: int = DEFAULT_OFFSET
    categories: tuple[Category, ...] = DEFAULT_CATEGORY_ORDER


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _parse_int(field_name: str, value: Any) -> int | None:
    if value is None or value == "":
        return None
    text = str(value)
    # ASCII digits only; no padding, digit separators or other numerals.
    if not _INTEGER_RE.fullmatch(text):
        raise MalformedNumberError(field_name, value)
    return int(text)


def normalize_page_size(value: Any) -> int:
    parsed = _parse_int("limit", value)
    if parsed is None or parsed < MIN_PAGE_SIZE:
        return DEFAULT_PAGE_SIZE
    return min(parsed, MAX_PAGE_SIZE)


def normalize_offset(value: Any) -> int:
    parsed = _parse_int("offset", value)
    if parsed is None or parsed < 0:
        return DEFAULT_OFFSET
    return parsed


def parse_categories(value: Any) -> tuple[Category, ...]:
    """Parse a comma list of category names.

    Unknown tokens are dropped and repeats collapse onto their first
    position. An empty outcome falls back to the full default order.
    """
    if _is_blank(value):
        return DEFAULT_CATEGORY_ORDER
    seen: list[Category] = []
    for token in str(value).split(","):
        category = _CATEGORY_TOKENS.get(token.strip())
        if category is not None and category not in seen:
            seen.append(category)
    return tuple(seen) or DEFAULT_CATEGORY_ORDER


def normalize_search_params(raw_term, raw_page_size=None, raw_offset=None, raw_categories=None) -> Query:
    if _is_blank(raw_term):
        raise MissingTermError()
    return Query(
        term=str(raw_term),
        page_size=normalize_page_size(raw_page_size),
        offset=normalize_offset(raw_offset),
        categories=parse_categories(raw_categories),
    )
