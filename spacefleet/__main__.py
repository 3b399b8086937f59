"""Run the API with Uvicorn: ``python -m spacefleet``."""

from uvicorn import Config, Server

from spacefleet.config import settings


def main() -> None:
    config = Config(
        app="spacefleet.app:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level,
    )
    Server(config).run()


if __name__ == "__main__":
    main()
