"""Logging utilities for the Stockroom dashboard.

Logging is configured once per process with a rotating file handler and a
console handler. Rotated files older than ``LOG_RETENTION_DAYS`` are purged on
startup. Logging guidelines:

* Routine success messages should not be logged. Use ``DEBUG`` for optional
  diagnostic information.
* Reserve ``WARNING`` and ``ERROR`` levels for exceptional or unexpected
  conditions.
"""

import logging
import os
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE = os.getenv("LOG_FILE", "stockroom.log")
LOG_RETENTION_DAYS = int(os.getenv("LOG_RETENTION_DAYS", "30"))

_configured = False


def configure_logging() -> None:
    """Attach the file and console handlers to the root logger.

    The file handler keeps the log to roughly 1MB with up to three backups.
    ``LOG_LEVEL`` selects the level; unknown names fall back to ``INFO``.
    Calling this more than once is a no-op.
    """

    global _configured
    if _configured:
        return

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(LOG_FILE, maxBytes=1_000_000, backupCount=3)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    _configured = True
    purge_old_logs()


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the configured settings."""
    return logging.getLogger(name)


def flush_logs() -> None:
    """Truncate the current log file and flush any buffered records."""

    for handler in logging.getLogger().handlers:
        handler.flush()
    open(LOG_FILE, "w").close()


def read_recent_logs(limit: int = 100, log_file=None) -> str:
    """Return the last ``limit`` lines of the log file, or ``""`` if unreadable."""

    path = Path(log_file or LOG_FILE)
    try:
        with path.open("r", encoding="utf-8") as fh:
            return "".join(fh.readlines()[-limit:])
    except OSError:
        return ""


def purge_old_logs(retention_days: int = None) -> int:
    """Delete rotated log files older than the retention window.

    Returns the number of files removed. The active log file is never touched.
    """

    days = LOG_RETENTION_DAYS if retention_days is None else retention_days
    if days <= 0:
        return 0

    log_path = Path(LOG_FILE).resolve()
    cutoff = datetime.now() - timedelta(days=days)
    removed = 0
    for file in log_path.parent.glob(f"{log_path.name}.*"):
        try:
            mtime = datetime.fromtimestamp(file.stat().st_mtime)
        except FileNotFoundError:
            continue
        if mtime < cutoff:
            try:
                file.unlink()
                removed += 1
            except FileNotFoundError:
                pass
    return removed
