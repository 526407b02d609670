"""Persistence port used by the invoice service, plus its SQLAlchemy adapter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import delete, update
from sqlalchemy.orm import joinedload

from freelance_hub.models import Client, Invoice, Project
from freelance_hub.services.base_service import BaseService


class InvoiceStore(ABC):
    """Contract for invoice persistence.

    Every lookup and write is scoped by the owning user id; callers treat a
    ``None`` result or a zero row count as "not found".
    """

    @abstractmethod
    def add(self, invoice: Invoice) -> Invoice:
        raise NotImplementedError

    @abstractmethod
    def get_owned(self, owner_id: str, invoice_id: str) -> Invoice | None:
        raise NotImplementedError

    @abstractmethod
    def list_owned(self, owner_id: str) -> list[Invoice]:
        """Return owned invoices, newest first, with client and project loaded."""
        raise NotImplementedError

    @abstractmethod
    def update_owned(self, owner_id: str, invoice_id: str, values: dict[str, Any]) -> int:
        raise NotImplementedError

    @abstractmethod
    def delete_owned(self, owner_id: str, invoice_id: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_owned_client(self, owner_id: str, client_id: str) -> Client | None:
        raise NotImplementedError

    @abstractmethod
    def get_owned_project(self, owner_id: str, project_id: str) -> Project | None:
        raise NotImplementedError


class SqlAlchemyInvoiceStore(BaseService, InvoiceStore):
    """Invoice store backed by a SQLAlchemy session."""

    def _owned_query(self, owner_id: str):
        return (
            self.owned(Invoice, owner_id)
            .options(joinedload(Invoice.client), joinedload(Invoice.project))
        )

    def add(self, invoice: Invoice) -> Invoice:
        self.db.add(invoice)
        self.commit()
        self.db.refresh(invoice)
        return invoice

    def get_owned(self, owner_id: str, invoice_id: str) -> Invoice | None:
        return self._owned_query(owner_id).filter(Invoice.id == invoice_id).first()

    def list_owned(self, owner_id: str) -> list[Invoice]:
        return self._owned_query(owner_id).order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()

    def update_owned(self, owner_id: str, invoice_id: str, values: dict[str, Any]) -> int:
        if not values:
            exists = self.owned(Invoice, owner_id).filter(Invoice.id == invoice_id).first()
            return 1 if exists else 0
        result = self.db.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id, Invoice.user_id == owner_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        self.commit()
        return result.rowcount

    def delete_owned(self, owner_id: str, invoice_id: str) -> int:
        result = self.db.execute(
            delete(Invoice)
            .where(Invoice.id == invoice_id, Invoice.user_id == owner_id)
            .execution_options(synchronize_session="fetch")
        )
        self.commit()
        return result.rowcount

    def get_owned_client(self, owner_id: str, client_id: str) -> Client | None:
        return self.owned(Client, owner_id).filter(Client.id == client_id).first()

    def get_owned_project(self, owner_id: str, project_id: str) -> Project | None:
        return self.owned(Project, owner_id).filter(Project.id == project_id).first()
