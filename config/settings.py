"""Application settings loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_LASTFM_BASE_URL = "https://ws.audioscrobbler.com/2.0/"
DEFAULT_USER_AGENT = "CatalogSearch/1.0"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    lastfm_api_key: str
    lastfm_api_secret: str
    lastfm_base_url: str = DEFAULT_LASTFM_BASE_URL
    lastfm_timeout_seconds: float = 10.0
    lastfm_max_retries: int = 2
    user_agent: str = DEFAULT_USER_AGENT
    concurrent_fanout: bool = True
    log_level: str = "INFO"
    log_dir: str | None = None
    host: str = "0.0.0.0"
    port: int = 8080
    app_version: str = "0.0.0"


def _env_or_default(environ, name, default):
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _parse_number(environ, name, default, cast):
    raw = _env_or_default(environ, name, None)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def _parse_bool(environ, name, default):
    raw = _env_or_default(environ, name, None)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def load_settings(environ=None) -> Settings:
    environ = os.environ if environ is None else environ
    api_key = _env_or_default(environ, "LASTFM_API_KEY", "")
    api_secret = _env_or_default(environ, "LASTFM_API_SECRET", "")
    if not api_key or not api_secret:
        raise ConfigurationError("LASTFM_API_KEY and LASTFM_API_SECRET environment variables are required")

    timeout = _parse_number(environ, "LASTFM_TIMEOUT_SECONDS", 10.0, float)
    if timeout <= 0:
        raise ConfigurationError("LASTFM_TIMEOUT_SECONDS must be positive")
    return Settings(
        lastfm_api_key=api_key,
        lastfm_api_secret=api_secret,
        lastfm_base_url=_env_or_default(environ, "LASTFM_BASE_URL", DEFAULT_LASTFM_BASE_URL),
        lastfm_timeout_seconds=timeout,
        lastfm_max_retries=max(0, _parse_number(environ, "LASTFM_MAX_RETRIES", 2, int)),
        user_agent=_env_or_default(environ, "CATALOG_USER_AGENT", DEFAULT_USER_AGENT),
        concurrent_fanout=_parse_bool(environ, "CATALOG_CONCURRENT_FANOUT", True),
        log_level=_env_or_default(environ, "CATALOG_LOG_LEVEL", "INFO").upper(),
        log_dir=_env_or_default(environ, "CATALOG_LOG_DIR", None),
        host=_env_or_default(environ, "CATALOG_HOST", "0.0.0.0"),
        port=_parse_number(environ, "CATALOG_PORT", 8080, int),
        app_version=_env_or_default(environ, "APP_VERSION", "0.0.0"),
    )
