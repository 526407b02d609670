from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from freelance_hub.core.config import Config, get_config
from freelance_hub.core.security import hash_password
from freelance_hub.models import Base, Client, Invoice, Project, User, UserRole
from freelance_hub.models.base import utcnow
from freelance_hub.repositories.invoice_store import InvoiceStore, SqlAlchemyInvoiceStore
from freelance_hub.services.invoice_generator import InvoicePdfGenerator, InvoiceSnapshot
from freelance_hub.services.invoice_service import InvoiceService
from freelance_hub.utils.ids import new_id


def _build_session() -> Session:
    engine = create_engine("sqlite:///:memory:")
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return TestingSessionLocal()


@pytest.fixture
def session() -> Iterator[Session]:
    db = _build_session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def settings(tmp_path: Path) -> Config:
    return dataclasses.replace(
        get_config(),
        INVOICE_STORAGE_DIR=str(tmp_path / "invoices"),
        INVOICE_DEFAULT_TVA=20.0,
        INVOICE_STRICT_STATUS=False,
        PASSWORD_HASH_ITERATIONS=1000,
        JWT_SECRET="test-secret",
    )


def seed_user(db: Session, email: str = "owner@example.com", role: UserRole = UserRole.USER) -> User:
    user = User(email=email, hashed_password=hash_password("password123", iterations=1000), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def seed_client(db: Session, owner: User, name: str = "Acme Corp") -> Client:
    client = Client(user_id=owner.id, name=name, email="billing@acme.example")
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


def seed_project(db: Session, owner: User, client: Client, title: str = "Website redesign") -> Project:
    project = Project(user_id=owner.id, client_id=client.id, title=title)
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def owner(session: Session) -> User:
    return seed_user(session)


@pytest.fixture
def intruder(session: Session) -> User:
    return seed_user(session, email="intruder@example.com")


class InMemoryInvoiceStore(InvoiceStore):
    """Dict-backed invoice store used to exercise the service without a database."""

    def __init__(self) -> None:
        self.invoices: dict[str, Invoice] = {}
        self.clients: dict[str, Client] = {}
        self.projects: dict[str, Project] = {}

    def add_client(self, owner_id: str, name: str) -> Client:
        client = Client(id=new_id(), user_id=owner_id, name=name)
        self.clients[client.id] = client
        return client

    def add_project(self, owner_id: str, client: Client, title: str) -> Project:
        project = Project(id=new_id(), user_id=owner_id, client_id=client.id, title=title)
        self.projects[project.id] = project
        return project

    def add(self, invoice: Invoice) -> Invoice:
        invoice.id = invoice.id or new_id()
        invoice.created_at = invoice.updated_at = utcnow()
        invoice.client = self.clients.get(invoice.client_id)
        invoice.project = self.projects.get(invoice.project_id) if invoice.project_id else None
        self.invoices[invoice.id] = invoice
        return invoice

    def get_owned(self, owner_id: str, invoice_id: str) -> Invoice | None:
        invoice = self.invoices.get(invoice_id)
        if invoice is None or invoice.user_id != owner_id:
            return None
        return invoice

    def list_owned(self, owner_id: str) -> list[Invoice]:
        owned = [invoice for invoice in self.invoices.values() if invoice.user_id == owner_id]
        return sorted(owned, key=lambda invoice: invoice.created_at, reverse=True)

    def update_owned(self, owner_id: str, invoice_id: str, values: dict[str, Any]) -> int:
        invoice = self.get_owned(owner_id, invoice_id)
        if invoice is None:
            return 0
        for key, value in values.items():
            setattr(invoice, key, value)
        if "client_id" in values:
            invoice.client = self.clients.get(values["client_id"])
        if "project_id" in values:
            invoice.project = self.projects.get(values["project_id"]) if values["project_id"] else None
        invoice.updated_at = utcnow()
        return 1

    def delete_owned(self, owner_id: str, invoice_id: str) -> int:
        if self.get_owned(owner_id, invoice_id) is None:
            return 0
        del self.invoices[invoice_id]
        return 1

    def get_owned_client(self, owner_id: str, client_id: str) -> Client | None:
        client = self.clients.get(client_id)
        return client if client is not None and client.user_id == owner_id else None

    def get_owned_project(self, owner_id: str, project_id: str) -> Project | None:
        project = self.projects.get(project_id)
        return project if project is not None and project.user_id == owner_id else None


class RecordingGenerator:
    """Document generator double that records snapshots instead of writing PDFs."""

    def __init__(self) -> None:
        self.snapshots: list[InvoiceSnapshot] = []
        self.deleted: list[str] = []

    def generate(self, snapshot: InvoiceSnapshot) -> str:
        self.snapshots.append(snapshot)
        return f"/var/invoices/invoice-{snapshot.id}.pdf"

    def delete(self, path: str) -> bool:
        self.deleted.append(path)
        return True


@pytest.fixture
def fake_store() -> InMemoryInvoiceStore:
    return InMemoryInvoiceStore()


@pytest.fixture
def recording_generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def documents(session: Session, settings: Config) -> InvoiceService:
    """Invoice service over the test session that writes real PDFs under tmp storage."""
    return InvoiceService(
        store=SqlAlchemyInvoiceStore(session),
        generator=InvoicePdfGenerator(settings=settings),
        settings=settings,
    )


@pytest.fixture
def make_client(session: Session):
    def _make(owner: User, name: str = "Acme Corp") -> Client:
        return seed_client(session, owner, name=name)

    return _make


@pytest.fixture
def make_project(session: Session):
    def _make(owner: User, client: Client, title: str = "Website redesign") -> Project:
        return seed_project(session, owner, client, title=title)

    return _make
