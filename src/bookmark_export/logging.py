"""Logging configuration for bookmark-export.

Sets up standard logging to stderr with a consistent format.  Modules
log through ``logging.getLogger(__name__)``, which propagates to the
``bookmark_export`` package logger configured here.

Export code logs through :func:`list_logger`, which prefixes each
message with the list id so interleaved runs in one log stay readable.

Call :func:`configure_file_logging` to add a timestamped file handler
for post-run diagnosis.
"""

from __future__ import annotations

import logging
import re
import sys
from datetime import datetime
from pathlib import Path

logger = logging.getLogger("bookmark_export")
logger.setLevel(logging.INFO)

handler = logging.StreamHandler(sys.stderr)
handler.setLevel(logging.INFO)

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)
handler.setFormatter(formatter)

logger.addHandler(handler)

DEFAULT_LOG_DIR = "data/logs"

_UNSAFE_LABEL_CHARS = re.compile(r"[^\w.-]")


class ListLogAdapter(logging.LoggerAdapter):
    """Prefixes every record with the list it concerns, e.g. ``[list l1] ...``."""

    def process(self, msg, kwargs):
        return f"[list {self.extra['list_id']}] {msg}", kwargs


def list_logger(name: str, list_id: str) -> ListLogAdapter:
    """Return a logger for *name* whose messages carry *list_id*."""
    return ListLogAdapter(logging.getLogger(name), {"list_id": list_id})


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between INFO and DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    handler.setLevel(level)


def configure_file_logging(
    log_dir: str = DEFAULT_LOG_DIR,
    *,
    level: int = logging.INFO,
    run_label: str | None = None,
) -> logging.FileHandler:
    """Add a timestamped file handler to the logger.

    Creates ``log_dir`` if it does not exist.  Returns the handler so
    callers (or tests) can remove it later.

    Args:
        log_dir: Directory for log files.  Created automatically.
        level: Logging level for the file handler (default: INFO).
        run_label: Optional name of the run (e.g. ``export-<list id>``),
            inserted into the filename so one file per list is easy to find.

    Returns:
        The :class:`logging.FileHandler` that was added.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    stem = "bookmark-export"
    if run_label:
        stem = f"{stem}_{_UNSAFE_LABEL_CHARS.sub('-', run_label)}"
    filename = log_path / f"{stem}_{timestamp}.log"

    file_handler = logging.FileHandler(str(filename), encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT))

    if level < logger.level:
        logger.setLevel(level)

    logger.addHandler(file_handler)
    return file_handler


__all__ = ["ListLogAdapter", "configure_file_logging", "list_logger", "logger", "set_verbose"]
