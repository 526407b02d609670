"""Project registry: owner-scoped CRUD with a free-form workflow status."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session, joinedload

from freelance_hub.core.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from freelance_hub.models import Client, Invoice, Project, ProjectStatus
from freelance_hub.repositories.invoice_store import SqlAlchemyInvoiceStore
from freelance_hub.services.base_service import BaseService
from freelance_hub.services.invoice_generator import InvoicePdfGenerator
from freelance_hub.services.invoice_service import InvoiceService
from freelance_hub.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ("title", "description", "client_id", "status")


def parse_project_status(value: ProjectStatus | str) -> ProjectStatus:
    if isinstance(value, ProjectStatus):
        return value
    try:
        return ProjectStatus(str(value).strip().upper())
    except ValueError as exc:
        allowed = ", ".join(status.value for status in ProjectStatus)
        raise ValidationError(f"Invalid project status {value!r}; expected one of {allowed}.") from exc


class ProjectService(BaseService):
    """Service for project CRUD filtered by owning user."""

    def __init__(self, db: Session | None = None, documents: InvoiceService | None = None) -> None:
        super().__init__(db)
        self.documents = documents or InvoiceService(SqlAlchemyInvoiceStore(self.db), InvoicePdfGenerator())

    def _clean(self, owner_id: str, values: dict[str, Any]) -> dict[str, Any]:
        unknown = set(values) - set(PROJECT_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown project fields: {', '.join(sorted(unknown))}")

        cleaned: dict[str, Any] = {}
        if "title" in values:
            cleaned["title"] = sanitize_text(values["title"], max_len=255)
            if not cleaned["title"]:
                raise ValidationError("title must be a non-empty string.")
        if "description" in values:
            cleaned["description"] = sanitize_text(values["description"]) or None
        if "status" in values:
            if values["status"] is None:
                raise ValidationError("status cannot be null.")
            cleaned["status"] = parse_project_status(values["status"])
        if "client_id" in values:
            client_id = values["client_id"]
            if not client_id:
                raise ValidationError("client_id cannot be empty.")
            owned = self.owned(Client, owner_id).filter(Client.id == client_id).first()
            if owned is None:
                raise InvalidReferenceError(f"Client not found: {client_id}")
            cleaned["client_id"] = client_id
        return cleaned

    def create(self, owner_id: str, data: dict[str, Any]) -> Project:
        values = self._clean(owner_id, data)
        if not values.get("title"):
            raise ValidationError("title must be a non-empty string.")
        if not values.get("client_id"):
            raise ValidationError("client_id is required.")
        project = Project(user_id=owner_id, **values)
        self.db.add(project)
        self.commit()
        logger.info("project.created", extra={"event": "project.created", "project_id": project.id, "user_id": owner_id})
        return self.find_one(owner_id, project.id)

    def find_all(self, owner_id: str) -> list[Project]:
        return (
            self.owned(Project, owner_id)
            .options(joinedload(Project.client))
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )

    def find_one(self, owner_id: str, project_id: str) -> Project:
        project = (
            self.owned(Project, owner_id)
            .options(joinedload(Project.client))
            .filter(Project.id == project_id)
            .first()
        )
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    def update(self, owner_id: str, project_id: str, changes: dict[str, Any]) -> Project:
        project = self.find_one(owner_id, project_id)
        values = self._clean(owner_id, changes)
        if "client_id" in values and values["client_id"] != project.client_id:
            linked = self.db.query(Invoice.id).filter(Invoice.project_id == project.id).first()
            if linked:
                raise InvalidReferenceError(f"Project {project_id} is invoiced; its client cannot change.")
        retitled = "title" in values and values["title"] != project.title
        for field, value in values.items():
            setattr(project, field, value)
        self.commit()
        if retitled:
            self.documents.refresh_documents(owner_id, project_id=project_id)
        return self.find_one(owner_id, project_id)

    def remove(self, owner_id: str, project_id: str) -> None:
        project = self.find_one(owner_id, project_id)
        detached = [row.id for row in self.db.query(Invoice.id).filter(Invoice.project_id == project.id)]
        # Invoices keep existing without their project.
        self.db.query(Invoice).filter(Invoice.project_id == project.id).update(
            {Invoice.project_id: None}, synchronize_session="fetch"
        )
        self.db.delete(project)
        self.commit()
        logger.info("project.deleted", extra={"event": "project.deleted", "project_id": project_id, "user_id": owner_id})
        for invoice_id in detached:
            self.documents.regenerate_document(owner_id, invoice_id)
