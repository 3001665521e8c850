"""Shared logging utilities for the ranking use cases and CLI.

Usage example:
    from job_ranker.observability.logging import get_logger

    logger = get_logger("job_ranker.rank_jobs", level="DEBUG")
    logger.info("Ranking %s job openings", job_count)
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
DEFAULT_LOG_LEVEL = "INFO"


def get_logger(name: str, *, level: str | None = None) -> logging.Logger:
    """Return a logger writing UTC-stamped lines to stderr.

    The handler is attached once per name. Passing ``level`` updates the level of
    an existing logger as well as a new one.

    Args:
        name: Logger name (use a stable module-qualified name).
        level: Optional level name such as ``"DEBUG"``; defaults to ``INFO``.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(DEFAULT_LOG_LEVEL)
        logger.propagate = False
    if level is not None:
        logger.setLevel(level.upper())
    return logger
