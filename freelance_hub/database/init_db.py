"""Bring the database schema up to date: ``python -m freelance_hub.database.init_db``."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import inspect

from freelance_hub.core.startup import bootstrap
from freelance_hub.database.db import get_active_database_url, get_engine
from freelance_hub.models import Base

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def alembic_config(database_url: str | None = None) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    # ConfigParser interpolation treats "%" specially.
    cfg.set_main_option("sqlalchemy.url", (database_url or get_active_database_url()).replace("%", "%%"))
    cfg.attributes["skip_logging_config"] = True
    return cfg


def init_db(revision: str = "head") -> None:
    bootstrap()
    command.upgrade(alembic_config(), revision)

    existing = set(inspect(get_engine()).get_table_names())
    missing = sorted(set(Base.metadata.tables) - existing)
    if missing:
        logger.warning("database.tables.missing_after_upgrade", extra={"event": "database.tables.missing_after_upgrade", "tables": missing})
        Base.metadata.create_all(bind=get_engine())
    logger.info("database.ready", extra={"event": "database.ready", "revision": revision})


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply database migrations.")
    parser.add_argument("--revision", default="head", help="Alembic revision to upgrade to.")
    init_db(parser.parse_args().revision)


if __name__ == "__main__":
    main()
