"""Process entrypoint: load configuration, open the database, and serve the API."""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from src.api.app import create_app
from src.api.db_access import DatabaseClient
from src.common.logging import configure_logging
from src.common.settings import load_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the subscription service API.")
    parser.add_argument("--config", default=None, help="Path to the YAML config file.")
    parser.add_argument("--host", default=None, help="Override the configured listen host.")
    parser.add_argument("--port", type=int, default=None, help="Override the configured listen port.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(config_path=args.config)
    except RuntimeError as exc:
        configure_logging()
        logger.error("Failed to load config: %s", exc)
        return 1

    configure_logging(settings.logging.level)

    db = DatabaseClient(database_url=settings.database_url)
    if not db.can_connect():
        logger.error("Failed to connect to database at %s", settings.database.host)
        db.close()
        return 1

    app = create_app(settings=settings, db=db)
    host = args.host or settings.server.host
    port = args.port or settings.server.port
    logger.info("Server starting on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=settings.logging.level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
