from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Optional


_DEFAULT_MAX_BYTES = 5 * 1024 * 1024
_DEFAULT_BACKUP_COUNT = 5
_ENV_LOG_PATH = "SNAPWATCH_DEBUG_LOG"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    verbose: bool = False,
    log_path: Optional[str] = None,
    max_bytes: int = _DEFAULT_MAX_BYTES,
    backup_count: int = _DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """
    Diagnostic logging for the snapwatch package: warnings and progress go to
    stderr, and optionally to a rotating file as well. This is separate from
    the change log, which only ever holds change events.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=_FORMAT)

    logger = logging.getLogger("snapwatch")
    resolved_path = log_path or os.environ.get(_ENV_LOG_PATH)
    if not resolved_path:
        return logger
    resolved_path = os.path.abspath(resolved_path)

    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and os.path.normcase(
            getattr(handler, "baseFilename", "")
        ) == os.path.normcase(resolved_path):
            return logger

    handler = RotatingFileHandler(
        resolved_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
