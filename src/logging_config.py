"""Logging setup for embedding applications and scripts.

Library modules only create loggers (``logging.getLogger(__name__)``); this
module attaches a single handler to the package roots.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAMES = ("domain", "src")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_NAME = "coverage-stream"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the package loggers (idempotent)."""
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
            continue
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
