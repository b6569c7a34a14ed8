# src/todolist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todolist.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Logger prefixes shown on the console only at or above the given level.
_QUIET_PREFIXES: tuple[tuple[str, int], ...] = (
    ("todolist.storage.", logging.WARNING),
)


class _ConsoleNoiseFilter(logging.Filter):
    """Console gets todolist records; snapshot-write chatter and foreign loggers need a higher level."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("todolist."):
            # Third-party loggers and captured warnings ("py.warnings").
            return record.levelno >= logging.ERROR

        for prefix, min_level in _QUIET_PREFIXES:
            if name.startswith(prefix):
                return record.levelno >= min_level
        return True


def _handler(handler: logging.Handler, level: int, fmt: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/todolist",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all logging to stderr (filtered) and to <log_dir>/todolist.log (unfiltered).

    Replaces any handlers already on the root logger. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for old in list(root.handlers):
        root.removeHandler(old)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console = _handler(logging.StreamHandler(sys.stderr), console_level, fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)
    root.addHandler(_handler(logging.FileHandler(str(log_file), encoding="utf-8"), file_level, fmt))

    logging.captureWarnings(True)
    return log_file
