import logging
import time
from concurrent.futures import CancelledError, ThreadPoolExecutor, as_completed

from engine.errors import ProviderFailureError
from engine.json_utils import safe_json_dumps
from engine.response import assemble_envelope, build_result_set
from metadata.providers.base import PROVIDER_METHODS

MAX_PARALLEL_CATEGORIES = 4


def _log_event(level, message, **fields):
    payload = {"message": message, **fields}
    try:
        logging.log(level, safe_json_dumps(payload, sort_keys=True))
    except Exception as exc:
        logging.log(level, f"log_event_serialization_failed: {exc} message={message}")


def _search_category(provider, category, query):
    method = getattr(provider, PROVIDER_METHODS[category], None)
    if method is None:
        # Provider cannot search this category at all.
        return []
    items = method(query.term, query.page_size, query.offset)
    return list(items or [])


class CatalogSearchService:
    """Fan one query out to a catalog provider, one call per category.

    The search is all-or-nothing: any failing category (a cancelled call
    included) aborts the whole request with ``ProviderFailureError``.
    """

    def __init__(self, provider, *, concurrent=True, max_workers=MAX_PARALLEL_CATEGORIES):
        self.provider = provider
        self.concurrent = bool(concurrent)
        self.max_workers = max(1, int(max_workers or 1))

    def search(self, query):
        started = time.monotonic()
        categories = [category.value for category in query.categories]
        _log_event(
            logging.INFO,
            "catalog_search_started",
            term=query.term,
            limit=query.page_size,
            offset=query.offset,
            categories=categories,
        )
        try:
            if self.concurrent and len(query.categories) > 1:
                raw = self._run_concurrent(query)
            else:
                raw = self._run_sequential(query)
        except ProviderFailureError as exc:
            _log_event(
                logging.ERROR,
                "catalog_search_failed",
                term=query.term,
                category=exc.category.value,
                error=str(exc.cause),
            )
            raise

        result_sets = {category: build_result_set(query, category, raw[category]) for category in query.categories}
        envelope = assemble_envelope(query, result_sets)
        _log_event(
            logging.INFO,
            "catalog_search_completed",
            term=query.term,
            categories=categories,
            counts={category.value: len(result_sets[category].items) for category in query.categories},
            elapsed_ms=int((time.monotonic() - started) * 1000),
        )
        return envelope

    def _record(self, category, items):
        _log_event(
            logging.DEBUG,
            "catalog_search_category_completed",
            category=category.value,
            returned=len(items),
        )
        return items

    def _run_sequential(self, query):
        raw = {}
        for category in query.categories:
            try:
                items = _search_category(self.provider, category, query)
            except Exception as exc:
                raise ProviderFailureError(category, exc) from exc
            raw[category] = self._record(category, items)
        return raw

    def _run_concurrent(self, query):
        raw = {}
        failures = {}
        workers = min(self.max_workers, len(query.categories))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="catalog-search") as pool:
            futures = {
                pool.submit(_search_category, self.provider, category, query): category
                for category in query.categories
            }
            for fut in as_completed(futures):
                category = futures[fut]
                try:
                    raw[category] = self._record(category, fut.result())
                except CancelledError as exc:
                    # Calls cancelled below after a failure are not failures of their own.
                    if not failures:
                        failures[category] = exc
                except Exception as exc:
                    failures[category] = exc
                    for pending in futures:
                        pending.cancel()
        if failures:
            # Report the earliest requested category, not the first to finish.
            for category in query.categories:
                if category in failures:
                    exc = failures[category]
                    raise ProviderFailureError(category, exc) from exc
        return raw
