"""Logging for the API server and the crawl script.

Everything logs below the ``bidsmart`` logger; modules ask for a child via
``get_logger("services.ingestion")``.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_ROOT = "bidsmart"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Client libraries that log every HTTP request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "openai")

_handlers: list = []


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``bidsmart`` logger.

    Calling it again replaces the handlers installed by the previous call,
    so the server and scripts can reconfigure after loading settings.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Also write to this file (parent directories are created)
        format_string: Override for the default line format

    Returns:
        The ``bidsmart`` logger
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    app_logger = logging.getLogger(LOGGER_ROOT)
    app_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in _handlers:
        app_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    _handlers.append(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in _handlers:
        handler.setFormatter(formatter)
        app_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Child of the ``bidsmart`` logger, e.g. ``get_logger("ai.extractor")``."""
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")
