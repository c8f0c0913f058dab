"""Structured (JSON) and plain log formatting for the package logger."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

from vet_pathways.config import LoggingConfig

PACKAGE_LOGGER = "vet_pathways"

# Fields that callers pass via logger.info("msg", extra={...})
EXTRA_FIELDS = (
    "mode",
    "template",
    "error",
    "error_type",
    "client_ip",
    "method",
    "path",
    "status",
    "duration_ms",
)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "environment": os.getenv("APP_ENV", "development"),
        }
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.levelno >= logging.WARNING:
            entry["source"] = f"{record.filename}:{record.lineno}"

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class SimpleFormatter(logging.Formatter):
    """Human-readable formatter for local development"""

    def __init__(self):
        super().__init__("%(asctime)s - %(levelname)s - %(name)s - %(message)s", datefmt="%H:%M:%S")


def setup_logging(config: LoggingConfig | None = None, stream=None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again replaces the handler rather than stacking another one.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(config.level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_vet_pathways", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter() if config.json else SimpleFormatter())
    handler._vet_pathways = True
    logger.addHandler(handler)
    return logger
