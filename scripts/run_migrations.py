#!/usr/bin/env python3
"""Upgrade the forum schema with Logfire error tracking.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to ``head``.
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from forum.config import Settings
from forum.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade to a revision and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The container must not start against a broken schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
