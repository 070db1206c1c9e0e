"""Logging configuration for the application."""

import logging
import sys

from presence.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Application code logs through logfire; this configures the standard
    library loggers used by uvicorn, discord.py and httpx.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    # Gateway heartbeats and resumes are chatty at INFO
    logging.getLogger("discord.gateway").setLevel(logging.WARNING)

    logging.getLogger("presence").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )
