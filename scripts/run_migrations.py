#!/usr/bin/env python3
"""Upgrade the replytree schema, reporting the target database to Logfire."""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from replytree.config import Settings
from replytree.util.logging import get_logger, setup_logging
from replytree.util.observability import configure_logfire

logger = get_logger("replytree.migrations")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "revision",
        nargs="?",
        default="head",
        help="Alembic revision to upgrade to (default: head)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Upgrade to the requested revision; any failure is logged and re-raised."""
    args = parse_args(argv)
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    # Never log credentials, only where the schema is going
    url = make_url(settings.database.url)
    target = {
        "db_host": url.host,
        "db_port": url.port,
        "db_name": url.database,
        "revision": args.revision,
    }

    try:
        logfire.info(
            "Starting database migrations", environment=settings.environment, **target
        )
        logger.info(
            "Migrating %s:%s/%s to %s",
            url.host,
            url.port,
            url.database,
            args.revision,
        )

        # env.py reads the URL from Settings, not from alembic.ini
        command.upgrade(Config("alembic.ini"), args.revision)

        logfire.info("Database migrations completed successfully", **target)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
            **target,
        )
        # Re-raise so the container fails and doesn't start with a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
