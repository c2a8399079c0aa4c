import uvicorn

from config.settings import ConfigurationError, load_settings


def main():
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        raise SystemExit(f"ERROR: {exc}")

    from api.main import _setup_logging, create_app
    from metadata.providers.lastfm import LastFMProvider

    _setup_logging(settings.log_level, settings.log_dir)
    app = create_app(provider=LastFMProvider.from_settings(settings), settings=settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
