"""Session handling shared by the database-backed services."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

import freelance_hub.database.db as db_module
from freelance_hub.core.exceptions import ConflictError, DatabaseError

logger = logging.getLogger(__name__)


class BaseService:
    """Wraps one SQLAlchemy session and converts commit failures to domain errors."""

    def __init__(self, db: Session | None = None) -> None:
        self.db = db or db_module.SessionLocal()

    def owned(self, model, owner_id: str) -> Query:
        """Query ``model`` restricted to rows owned by ``owner_id``."""
        return self.db.query(model).filter(model.user_id == owner_id)

    def commit(self, conflict_message: str = "Write conflicts with existing data.") -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(conflict_message) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("database.commit_failed", extra={"event": "database.commit_failed", "reason": str(exc)})
            raise DatabaseError("Database write failed.") from exc
