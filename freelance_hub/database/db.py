"""Engine and session factory for the configured database."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from freelance_hub.core.config import get_config

logger = logging.getLogger(__name__)

config = get_config()


def _engine_options(database_url: str) -> dict:
    options: dict = {"echo": config.DEBUG and config.LOG_LEVEL == "DEBUG"}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync handlers in a threadpool.
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(pool_pre_ping=True, pool_recycle=3600, pool_size=10, max_overflow=20)
    return options


DATABASE_URL = config.DATABASE_URL
engine: Engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_engine() -> Engine:
    return engine


def get_active_database_url() -> str:
    return DATABASE_URL


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request; FastAPI closes it after the response."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Iterator[Session]:
    """Session for scripts and startup tasks outside a request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def verify_database_connection() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(
            "database.connection_failed",
            extra={"event": "database.connection_failed", "scheme": DATABASE_URL.split("://", 1)[0], "reason": str(exc)},
        )
        return False
    return True
