"""Process-wide logging setup and key=value event formatting."""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

from smartpark.utils.config import get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once; later calls are no-ops."""

    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    resolved_level = (level or get_settings().log_level).upper()
    logging.basicConfig(level=resolved_level, format=LOG_FORMAT, stream=sys.stdout)
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)


def format_event(event: str, **fields: Any) -> str:
    """Render ``event | key=value | ...`` with fields in call order."""
    parts = [event]
    parts.extend(f"{key}={value}" for key, value in fields.items())
    return " | ".join(parts)


def log_event(
    logger: logging.Logger,
    event: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    if logger.isEnabledFor(level):
        logger.log(level, format_event(event, **fields))
