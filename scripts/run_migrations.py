#!/usr/bin/env python3
"""Upgrade the database schema to the latest Alembic revision."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from anemi.config import Settings
from anemi.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Run migrations, reporting failures to Logfire.

    Args:
        revision: Target revision (defaults to head)
    """
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")

    with logfire.span("run_migrations", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # A container must not start against a half-migrated schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
