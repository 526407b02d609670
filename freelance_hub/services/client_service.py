"""Client registry: owner-scoped CRUD."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from freelance_hub.core.exceptions import ConflictError, NotFoundError, ValidationError
from freelance_hub.models import Client, Invoice, Project
from freelance_hub.repositories.invoice_store import SqlAlchemyInvoiceStore
from freelance_hub.services.base_service import BaseService
from freelance_hub.services.invoice_generator import InvoicePdfGenerator
from freelance_hub.services.invoice_service import InvoiceService
from freelance_hub.utils.validators import is_valid_email, sanitize_text

logger = logging.getLogger(__name__)

CLIENT_FIELDS = ("name", "email", "phone", "company", "notes")


def _clean_client_values(values: dict[str, Any]) -> dict[str, Any]:
    unknown = set(values) - set(CLIENT_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown client fields: {', '.join(sorted(unknown))}")

    cleaned: dict[str, Any] = {}
    for field, value in values.items():
        cleaned[field] = sanitize_text(value, max_len=4000) or None
    if "name" in cleaned and not cleaned["name"]:
        raise ValidationError("name must be a non-empty string.")
    if cleaned.get("email") and not is_valid_email(cleaned["email"]):
        raise ValidationError("email must be a valid email address.")
    return cleaned


class ClientService(BaseService):
    """Service for client CRUD filtered by owning user."""

    def __init__(self, db: Session | None = None, documents: InvoiceService | None = None) -> None:
        super().__init__(db)
        self.documents = documents or InvoiceService(SqlAlchemyInvoiceStore(self.db), InvoicePdfGenerator())

    def create(self, owner_id: str, data: dict[str, Any]) -> Client:
        values = _clean_client_values(data)
        if not values.get("name"):
            raise ValidationError("name must be a non-empty string.")
        client = Client(user_id=owner_id, **values)
        self.db.add(client)
        self.commit()
        self.db.refresh(client)
        logger.info("client.created", extra={"event": "client.created", "client_id": client.id, "user_id": owner_id})
        return client

    def find_all(self, owner_id: str) -> list[Client]:
        return (
            self.owned(Client, owner_id)
            .order_by(Client.created_at.desc(), Client.id.desc())
            .all()
        )

    def find_one(self, owner_id: str, client_id: str) -> Client:
        client = self.owned(Client, owner_id).filter(Client.id == client_id).first()
        if client is None:
            raise NotFoundError(f"Client not found: {client_id}")
        return client

    def update(self, owner_id: str, client_id: str, changes: dict[str, Any]) -> Client:
        client = self.find_one(owner_id, client_id)
        previous_name = client.name
        for field, value in _clean_client_values(changes).items():
            setattr(client, field, value)
        self.commit()
        self.db.refresh(client)
        if client.name != previous_name:
            self.documents.refresh_documents(owner_id, client_id=client.id)
        return client

    def remove(self, owner_id: str, client_id: str) -> None:
        client = self.find_one(owner_id, client_id)
        in_use = (
            self.db.query(Project.id).filter(Project.client_id == client.id).first()
            or self.db.query(Invoice.id).filter(Invoice.client_id == client.id).first()
        )
        if in_use:
            raise ConflictError(f"Client {client_id} still has projects or invoices.")
        self.db.delete(client)
        self.commit()
        logger.info("client.deleted", extra={"event": "client.deleted", "client_id": client_id, "user_id": owner_id})
