"""Application-wide logger writing to platformdirs user_log_dir."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "todoterm_cli"
_LOG_FILE = "todoterm.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

LOG_LEVEL_ENV = "TODOTERM_LOG_LEVEL"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_logger: logging.Logger | None = None


def resolve_level(name: str | None) -> int:
    """Map a level name to a logging constant, falling back to INFO."""
    if name and name.strip().upper() in _LEVELS:
        return getattr(logging, name.strip().upper())
    return logging.INFO


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call."""
    global _logger
    if _logger is not None:
        return _logger

    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(resolve_level(os.environ.get(LOG_LEVEL_ENV)))
    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()
    logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def set_log_level(name: str) -> None:
    """Change the verbosity of the application logger at runtime."""
    get_logger().setLevel(resolve_level(name))
