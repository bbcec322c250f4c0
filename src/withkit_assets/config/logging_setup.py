from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing_extensions import override

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ERROR_LOG_MAX_BYTES = 5 * 1024 * 1024
ERROR_LOG_BACKUPS = 3

# Third-party loggers whose INFO output is per-poll or per-image noise.
_DEMOTED_INFO_LOGGERS = (
    "apscheduler.scheduler",
    "apscheduler.executors.default",
)
# Pillow logs every decoded chunk at DEBUG.
_FLOOR_LEVELS = {"PIL": logging.INFO}


class _DemoteInfoFilter(logging.Filter):
    @override
    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno == logging.INFO:
            record.levelno = logging.DEBUG
            record.levelname = logging.getLevelName(logging.DEBUG)
        return True


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def _error_file_handler(path: Path, formatter: logging.Formatter) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=ERROR_LOG_MAX_BYTES,
        backupCount=ERROR_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    handler.setLevel(logging.WARNING)
    return handler


def configure_logging(level: str, error_log_path: Path) -> None:
    """Console output at ``level`` plus a rotating WARNING+ file for build failures."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root = logging.getLogger()
    root.setLevel(resolved)
    root.handlers.clear()
    root.addHandler(_console_handler(resolved, formatter))
    root.addHandler(_error_file_handler(error_log_path, formatter))

    for name in _DEMOTED_INFO_LOGGERS:
        logger = logging.getLogger(name)
        logger.filters.clear()
        logger.addFilter(_DemoteInfoFilter())
    for name, floor in _FLOOR_LEVELS.items():
        logging.getLogger(name).setLevel(max(floor, resolved))
