"""Logging setup for the COMDBG application."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Optional

# Notifications run on the caller, watcher and close-worker threads
FILE_FORMAT = "%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"
CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(message)s"

LOG_FILE_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


def _level_number(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(app_name: str, log_dir: Path, level: str = "INFO",
                  console_level: Optional[str] = None) -> logging.Logger:
    """Configure rotating file and console logging.

    The file keeps full detail (thread names, logger names) while the
    console can be quieter, e.g. ``level="DEBUG"`` with
    ``console_level="WARNING"`` records per-chunk RX/TX traffic only in the
    file.

    Args:
        app_name: Name used for the log file and the returned logger.
        log_dir: Directory for the log file (created if missing).
        level: Level of the file handler.
        console_level: Level of the console handler; defaults to ``level``.

    Returns:
        The application logger.
    """
    file_level = level.upper()
    console_level = (console_level or level).upper()
    root_level = min(_level_number(file_level), _level_number(console_level))

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{app_name.lower()}.log"
    cfg = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "file": {"format": FILE_FORMAT},
            "console": {"format": CONSOLE_FORMAT, "datefmt": "%H:%M:%S"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "level": console_level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "file",
                "level": file_level,
                "filename": str(log_file),
                "maxBytes": LOG_FILE_BYTES,
                "backupCount": LOG_FILE_BACKUPS,
                "encoding": "utf-8",
            },
        },
        "root": {"handlers": ["console", "file"], "level": root_level},
    }
    logging.config.dictConfig(cfg)
    logger = logging.getLogger(app_name)
    logger.info(f"Logging to {log_file} (file {file_level}, console {console_level})")
    return logger
