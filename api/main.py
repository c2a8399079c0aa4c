import json
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

import anyio
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from config.settings import load_settings
from engine.errors import EncodingError, ProviderFailureError, ValidationError
from engine.json_utils import safe_json
from engine.response import SEARCH_PATH, render_envelope
from engine.runtime import get_runtime_info
from engine.search_engine import CatalogSearchService
from engine.search_params import normalize_search_params
from metadata.providers.lastfm import LastFMProvider

APP_NAME = "Catalog Search API"
LOG_FILENAME = "catalog_search.log"
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
_CORS_HEADERS = ["Content-Type", "Authorization"]


class SafeJSONResponse(JSONResponse):
    def render(self, content):
        return json.dumps(
            safe_json(content),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def _setup_logging(level="INFO", log_dir=None):
    root = logging.getLogger("")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not any(isinstance(handler, logging.StreamHandler) for handler in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(console)
    if not log_dir:
        return
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, LOG_FILENAME))
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and os.path.abspath(handler.baseFilename) == log_path:
            return
    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(file_handler)


def create_app(provider=None, settings=None):
    """Build the API. Without an injected provider, startup loads settings
    and connects to Last.fm; missing credentials abort startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.search_service is None:
            current = app.state.settings or load_settings()
            app.state.settings = current
            _setup_logging(current.log_level, current.log_dir)
            app.state.search_service = CatalogSearchService(
                LastFMProvider.from_settings(current),
                concurrent=current.concurrent_fanout,
            )
            logging.info("Catalog search ready (provider=lastfm concurrent=%s)", current.concurrent_fanout)
        yield

    app = FastAPI(
        title=APP_NAME,
        description="Catalog search over an external music-metadata provider.",
        default_response_class=SafeJSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.search_service = None
    if provider is not None:
        concurrent = settings.concurrent_fanout if settings is not None else True
        app.state.search_service = CatalogSearchService(provider, concurrent=concurrent)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=_CORS_METHODS,
        allow_headers=_CORS_HEADERS,
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        started = time.monotonic()
        response = await call_next(request)
        logging.info(
            "%s %s -> %s (%dms)",
            request.method,
            request.url.path,
            response.status_code,
            int((time.monotonic() - started) * 1000),
        )
        return response

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/v1/version")
    async def version():
        current = app.state.settings
        return get_runtime_info(current.app_version if current is not None else None)

    @app.get(SEARCH_PATH)
    async def catalog_search(
        term: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
        offset: Optional[str] = Query(None),
        types: Optional[str] = Query(None),
    ):
        try:
            query = normalize_search_params(term, limit, offset, types)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        service = app.state.search_service
        if service is None:
            raise HTTPException(status_code=503, detail="search provider not configured")
        try:
            envelope = await anyio.to_thread.run_sync(service.search, query)
        except ProviderFailureError as exc:
            raise HTTPException(status_code=500, detail=f"error performing search: {exc}") from exc

        try:
            body = render_envelope(envelope)
        except EncodingError as exc:
            logging.exception("Search response encoding failed")
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return Response(content=body, media_type="application/json")

    return app


app = create_app()
