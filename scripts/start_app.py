#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors.

Usage:
    python scripts/start_app.py [path/to/config.toml]
"""

import os
import sys

import logfire
import uvicorn

from presence.config import CONFIG_FILE_ENV, Settings
from presence.persistence.repository import ConfigUserRepository
from presence.util.logging import setup_logging
from presence.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    if len(sys.argv) > 1:
        # The app module re-reads settings on import, so pass the path on
        os.environ[CONFIG_FILE_ENV] = sys.argv[1]

    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        # Fail fast on an inconsistent user directory
        directory = ConfigUserRepository.from_settings(settings)
        logfire.info(
            "Starting FastAPI application",
            users=len(directory.find_all()),
            host=settings.server.host,
            port=settings.server.port,
        )

        uvicorn.run(
            "presence.interface.api.app:app",
            host=settings.server.host,
            port=settings.server.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the process exits non-zero
        raise


if __name__ == "__main__":
    sys.exit(main())
