"""Root logger setup: a stderr stream handler plus an optional rotating log file."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _has_handler(logger: logging.Logger, handler_types: Iterable[type]) -> bool:
    # Exact type match: file handlers and test capture handlers subclass StreamHandler.
    wanted = tuple(handler_types)
    return any(type(handler) in wanted for handler in logger.handlers)


def configure_logging(level: str | int = logging.INFO, log_path: Path | None = None) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not _has_handler(root_logger, (logging.StreamHandler,)):
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)

    if log_path is not None and not any(
        isinstance(handler, RotatingFileHandler)
        and getattr(handler, "baseFilename", "") == str(log_path.resolve())
        for handler in root_logger.handlers
    ):
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for handler in root_logger.handlers:
        handler.setLevel(level)
