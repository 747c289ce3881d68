# cellarena/config/logging_config.py
"""Logging setup for the arena server."""

import logging
import os
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure root logging and align uvicorn's loggers with it.

    The level falls back to ``CELLARENA_LOG_LEVEL`` and then INFO.
    """
    resolved_level = (level or os.getenv("CELLARENA_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)

    app_logger = logging.getLogger("cellarena")
    app_logger.setLevel(resolved_level)

    for uvicorn_logger in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(uvicorn_logger).setLevel(resolved_level)

    return app_logger
