#!/usr/bin/env python3
"""Apply database migrations up to head."""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from rediscover.config import Settings
from rediscover.util.logging import setup_logging
from rediscover.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations")

        alembic_cfg = Config(str(ALEMBIC_INI))
        command.upgrade(alembic_cfg, "head")

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the deploy fails instead of starting on a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
