"""Centralized structured logging configuration."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from freelance_hub.core.config import get_config

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Emit logs as structured JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = value
        return json.dumps(payload, ensure_ascii=True, default=str)


# Libraries that log per statement or per page when left at DEBUG.
_QUIET_IN_PRODUCTION = ("sqlalchemy.engine", "reportlab")


def _handlers(log_file: str) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(JsonFormatter())
    return handlers


def configure_logging() -> None:
    """Attach JSON handlers to the root logger; a no-op if it already has handlers."""
    config = get_config()
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(config.LOG_LEVEL)
    for handler in _handlers(config.LOG_FILE):
        root.addHandler(handler)

    if config.is_production:
        for name in _QUIET_IN_PRODUCTION:
            logging.getLogger(name).setLevel(logging.WARNING)
