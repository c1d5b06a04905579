"""Logging configuration."""

import logging
import sys
from typing import Optional

from weather_app.config import settings


def setup_logging(level: Optional[str] = None, format_string: Optional[str] = None) -> None:
    """Configure the root logger for either surface.

    Args:
        level: Log level name; defaults to ``settings.log_level``.
        format_string: Custom log format string.
    """
    log_level = level or settings.log_level
    log_format = format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured - Level: %s", log_level)
