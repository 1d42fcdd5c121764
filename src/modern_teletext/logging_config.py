"""Logging setup for Modern Teletext.

Records about a particular page carry its id as ``page_id``; pass
``extra=page_context(page_id)`` when logging. Both output formats show the
field, and records logged without one show ``-``.

Only the ``modern_teletext`` logger tree is configured. Loggers belonging
to the host application or other libraries are left alone.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from pythonjsonlogger import jsonlogger

PACKAGE_LOGGER = "modern_teletext"
NO_PAGE = "-"

JSON_FIELDS = ("asctime", "levelname", "name", "page_id", "message")
TEXT_FORMAT = "%(asctime)s %(levelname)-7s P%(page_id)-6s %(name)s: %(message)s"


class PageContextFilter(logging.Filter):
    """Guarantees a ``page_id`` attribute so formatters can rely on it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "page_id", None):
            record.page_id = NO_PAGE
        return True


def page_context(page_id: Optional[str]) -> Dict[str, str]:
    """``extra`` mapping for a log call concerning ``page_id``."""
    return {"page_id": page_id or NO_PAGE}


def build_formatter(fmt: str) -> logging.Formatter:
    if fmt.lower() == "json":
        return jsonlogger.JsonFormatter(
            fmt=" ".join(f"%({name})s" for name in JSON_FIELDS),
            rename_fields={"asctime": "time", "levelname": "level"},
        )
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt="%H:%M:%S")


def configure_logging(level: str = "INFO", fmt: str = "text") -> logging.Logger:
    """
    Send the package's log records to stderr in ``fmt`` (json or text).

    Calling it again replaces the handler instead of adding a second one.

    Returns:
        The configured package logger
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    package.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(package.handlers):
        package.removeHandler(handler)

    # Module loggers must reach the package handler exactly once
    prefix = PACKAGE_LOGGER + "."
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            logger.handlers = []
            logger.propagate = True

    handler = logging.StreamHandler()
    handler.addFilter(PageContextFilter())
    handler.setFormatter(build_formatter(fmt))
    package.addHandler(handler)
    package.propagate = False
    return package
