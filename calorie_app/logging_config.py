"""Process-wide logging setup."""

from __future__ import annotations

import logging

from calorie_app.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def resolve_log_level(settings: Settings) -> int:
    """Explicit LOG_LEVEL wins; otherwise DEBUG in development, ERROR elsewhere."""
    if settings.log_level:
        return getattr(logging, settings.log_level.upper(), logging.INFO)
    return logging.DEBUG if settings.is_development else logging.ERROR


def configure_logging(settings: Settings) -> None:
    level = resolve_log_level(settings)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("calorie_app").setLevel(level)
