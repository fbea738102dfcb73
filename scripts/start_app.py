#!/usr/bin/env python3
"""Start the forum API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from forum.config import Settings
from forum.util.observability import configure_logfire


def main() -> int:
    """Start the API server and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire before the app module is imported by uvicorn
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting forum API",
            environment=settings.environment,
            port=settings.port,
        )

        uvicorn.run(
            "forum.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Forum API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
