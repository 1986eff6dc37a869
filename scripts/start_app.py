#!/usr/bin/env python3
"""Start the API server, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from anemi.config import Settings
from anemi.util.logging import setup_logging
from anemi.util.observability import configure_logfire


def main() -> int:
    """Configure observability, then hand over to uvicorn."""
    settings = Settings()

    # Configure Logfire before the app module is imported so its
    # instrumentation hooks attach to a configured instance
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting Anemi Meets API",
            environment=settings.environment,
            port=settings.port,
            git_sha=settings.git_sha,
        )
        uvicorn.run(
            "anemi.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=True,  # X-Forwarded-For feeds the rate limiter
        )
        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
