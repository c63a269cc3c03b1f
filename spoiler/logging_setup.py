"""Logging configuration for the dashboard process.

The terminal belongs to the TUI, so records go to a rotating file under the
user log directory and never to stderr while the dashboard runs.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

APP_LOGGER = "spoiler"
LOG_FILENAME = "spoiler.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"
MAX_LOG_BYTES = 1_000_000
BACKUP_COUNT = 3

_HANDLER: logging.Handler | None = None


def default_log_path() -> Path:
    return Path(user_log_dir(APP_LOGGER, appauthor=False)) / LOG_FILENAME


def parse_level(name: str | int | None) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give WARNING."""
    if isinstance(name, int):
        return name
    if not name:
        return logging.WARNING
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str | int | None = None, log_file: Path | None = None) -> Path | None:
    """Attach one rotating file handler to the ``spoiler`` logger.

    Calling again replaces the previous handler. Returns the log path, or
    ``None`` when the file cannot be opened (logging is then disabled).
    """
    global _HANDLER
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(parse_level(level))
    logger.propagate = False
    if _HANDLER is not None:
        logger.removeHandler(_HANDLER)
        _HANDLER.close()
        _HANDLER = None

    path = default_log_path() if log_file is None else Path(log_file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=MAX_LOG_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
    except OSError:
        _HANDLER = logging.NullHandler()
        logger.addHandler(_HANDLER)
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _HANDLER = handler
    return path


__all__ = ["APP_LOGGER", "configure_logging", "default_log_path", "parse_level"]
