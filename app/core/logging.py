"""Logging setup."""

import logging

from app.core.config import settings


def configure_logging() -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler()],
    )
