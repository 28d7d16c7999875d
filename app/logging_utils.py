"""Audio Gateway - Logging setup.

Console output plus a file under settings.log_dir that rolls over at
midnight. Only the process entry point calls configure_logging.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from app.config import GatewaySettings

LOG_FILE_NAME = "audio-gateway.log"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Rotated files kept before the oldest is deleted
LOG_BACKUP_COUNT = 31


def build_log_handlers(settings: GatewaySettings) -> list[logging.Handler]:
    """Create the stdout handler and the daily-rotated file handler.

    The log directory is created if it does not exist.
    """
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = TimedRotatingFileHandler(
        filename=str(log_dir / LOG_FILE_NAME),
        when="midnight",
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout), file_handler]
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(settings: GatewaySettings) -> None:
    """Install the gateway's handlers on the root logger."""
    logging.basicConfig(
        level=settings.log_level,
        handlers=build_log_handlers(settings),
        force=True,
    )


__all__ = [
    "LOG_FILE_NAME",
    "build_log_handlers",
    "configure_logging",
]
