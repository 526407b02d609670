"""Checks run before the API starts serving requests."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from freelance_hub.core.config import Config, get_config
from freelance_hub.core.logging_config import configure_logging
from freelance_hub.database.db import get_active_database_url, verify_database_connection

logger = logging.getLogger(__name__)


def _check_database(config: Config) -> str:
    url = get_active_database_url()
    if not verify_database_connection():
        if config.DB_CONNECTIVITY_REQUIRED:
            raise RuntimeError("Database connectivity check failed.")
        logger.warning(
            "startup.database.unreachable",
            extra={"event": "startup.database.unreachable"},
        )
    if config.is_production and url.startswith("sqlite"):
        logger.warning("startup.production.sqlite_detected", extra={"event": "startup.production.sqlite_detected"})
    return url.split("://", 1)[0]


def _prepare_invoice_storage(config: Config) -> Path:
    """Create the PDF directory up front so the first invoice does not fail on it."""
    storage_dir = Path(config.INVOICE_STORAGE_DIR).resolve()
    storage_dir.mkdir(parents=True, exist_ok=True)
    if not os.access(storage_dir, os.W_OK):
        raise RuntimeError(f"Invoice storage directory is not writable: {storage_dir}")
    return storage_dir


def validate_startup_config() -> None:
    config = get_config()
    scheme = _check_database(config)
    storage_dir = _prepare_invoice_storage(config)
    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": scheme,
            "invoice_storage_dir": str(storage_dir),
            "invoice_strict_status": config.INVOICE_STRICT_STATUS,
        },
    )


def bootstrap() -> None:
    """Configure logging, then run the startup checks."""
    configure_logging()
    validate_startup_config()
