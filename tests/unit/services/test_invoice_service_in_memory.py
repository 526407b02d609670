from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest

from freelance_hub.core.exceptions import NotFoundError
from freelance_hub.core.state_machine import InvalidTransitionError
from freelance_hub.models import InvoiceStatus
from freelance_hub.services.invoice_service import InvoiceService

OWNER = "owner-1"


@pytest.fixture
def service(fake_store, recording_generator, settings) -> InvoiceService:
    return InvoiceService(store=fake_store, generator=recording_generator, settings=settings)


@pytest.fixture
def client(fake_store):
    return fake_store.add_client(OWNER, "Acme Corp")


def _create(service, client, **overrides):
    data = {"title": "Audit", "client_id": client.id, "amount_ht": "1000", "tva": "20"}
    data.update(overrides)
    return service.create(OWNER, data)


def test_create_renders_once_and_stores_path(service, client, recording_generator):
    invoice = _create(service, client)

    assert len(recording_generator.snapshots) == 1
    snapshot = recording_generator.snapshots[0]
    assert snapshot.id == invoice.id
    assert snapshot.client_name == "Acme Corp"
    assert snapshot.amount_ttc == Decimal("1200.00")
    assert snapshot.tax_amount == Decimal("200.00")
    assert invoice.pdf_url == f"/var/invoices/invoice-{invoice.id}.pdf"


def test_status_update_does_not_regenerate(service, client, recording_generator):
    invoice = _create(service, client)

    service.update_status(OWNER, invoice.id, InvoiceStatus.PAID)
    service.update(OWNER, invoice.id, {"status": "SENT"})

    assert len(recording_generator.snapshots) == 1


def test_document_field_change_regenerates(service, client, recording_generator):
    invoice = _create(service, client)

    service.update(OWNER, invoice.id, {"description": "Second pass"})

    assert len(recording_generator.snapshots) == 2
    assert recording_generator.snapshots[-1].description == "Second pass"


def test_unchanged_values_do_not_regenerate(service, client, recording_generator):
    invoice = _create(service, client)

    service.update(OWNER, invoice.id, {"title": "Audit", "amount_ht": 1000})
    service.update(OWNER, invoice.id, {})

    assert len(recording_generator.snapshots) == 1


def test_update_regenerates_when_document_missing(service, client, fake_store, recording_generator):
    invoice = _create(service, client)
    fake_store.invoices[invoice.id].pdf_url = None

    updated = service.update(OWNER, invoice.id, {})

    assert len(recording_generator.snapshots) == 2
    assert updated.pdf_url is not None


def test_project_change_is_reflected_in_snapshot(service, client, fake_store, recording_generator):
    project = fake_store.add_project(OWNER, client, "Migration")
    invoice = _create(service, client)

    service.update(OWNER, invoice.id, {"project_id": project.id})

    assert recording_generator.snapshots[-1].project_title == "Migration"


def test_remove_deletes_stored_document(service, client, recording_generator):
    invoice = _create(service, client)

    assert service.remove(OWNER, invoice.id) is True

    assert recording_generator.deleted == [f"/var/invoices/invoice-{invoice.id}.pdf"]
    with pytest.raises(NotFoundError):
        service.find_one(OWNER, invoice.id)


def test_strict_mode_rejects_backward_status(fake_store, recording_generator, settings, client):
    strict = InvoiceService(
        store=fake_store,
        generator=recording_generator,
        settings=dataclasses.replace(settings, INVOICE_STRICT_STATUS=True),
    )
    invoice = _create(strict, client)

    strict.update_status(OWNER, invoice.id, "SENT")
    strict.update_status(OWNER, invoice.id, "PAID")
    with pytest.raises(InvalidTransitionError):
        strict.update_status(OWNER, invoice.id, "DRAFT")

    assert strict.find_one(OWNER, invoice.id).status == InvoiceStatus.PAID
