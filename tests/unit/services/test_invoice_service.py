from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from freelance_hub.core.exceptions import DocumentWriteError, InvalidReferenceError, NotFoundError, ValidationError
from freelance_hub.models import Invoice, InvoiceStatus
from freelance_hub.repositories.invoice_store import SqlAlchemyInvoiceStore
from freelance_hub.services.invoice_generator import InvoicePdfGenerator
from freelance_hub.services.invoice_service import InvoiceService


def _service(session, settings) -> InvoiceService:
    generator = InvoicePdfGenerator(settings=settings)
    return InvoiceService(store=SqlAlchemyInvoiceStore(session), generator=generator, settings=settings)


def _payload(client, **overrides) -> dict:
    data = {"title": "Website redesign", "client_id": client.id, "amount_ht": 1000, "tva": 20}
    data.update(overrides)
    return data


def test_create_invoice_computes_ttc_and_writes_document(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)

    invoice = service.create(owner.id, _payload(client))

    assert invoice.amount_ttc == Decimal("1200.00")
    assert invoice.status == InvoiceStatus.DRAFT
    assert invoice.user_id == owner.id
    assert invoice.pdf_url == str(Path(settings.INVOICE_STORAGE_DIR).resolve() / f"invoice-{invoice.id}.pdf")
    assert Path(invoice.pdf_url).read_bytes().startswith(b"%PDF")


def test_create_invoice_uses_default_tva(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, dataclasses.replace(settings, INVOICE_DEFAULT_TVA=5.5))

    invoice = service.create(owner.id, _payload(client, tva=None, amount_ht=200))

    assert invoice.tva == Decimal("5.50")
    assert invoice.amount_ttc == Decimal("211.00")


def test_create_invoice_with_project_of_same_client(session, settings, owner, make_client, make_project):
    client = make_client(owner)
    project = make_project(owner, client)
    service = _service(session, settings)

    invoice = service.create(owner.id, _payload(client, project_id=project.id, status="sent"))

    assert invoice.project_id == project.id
    assert invoice.project.title == "Website redesign"
    assert invoice.status == InvoiceStatus.SENT
    assert b"Website redesign" in Path(invoice.pdf_url).read_bytes()


def test_create_invoice_rejects_bad_input(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)

    with pytest.raises(ValidationError):
        service.create(owner.id, _payload(client, title="   "))
    with pytest.raises(ValidationError):
        service.create(owner.id, _payload(client, amount_ht=-1))
    with pytest.raises(ValidationError):
        service.create(owner.id, _payload(client, amount_ht=float("inf")))
    with pytest.raises(ValidationError):
        service.create(owner.id, _payload(client, status="ARCHIVED"))
    assert session.query(Invoice).count() == 0


def test_amounts_with_sub_cent_precision_are_rejected(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)

    with pytest.raises(ValidationError, match="amount_ht"):
        service.create(owner.id, _payload(client, amount_ht="0.004"))
    with pytest.raises(ValidationError, match="tva"):
        service.create(owner.id, _payload(client, tva="5.555"))
    assert session.query(Invoice).count() == 0

    invoice = service.create(owner.id, _payload(client, amount_ht="10.01", tva="5.5"))
    assert invoice.amount_ht == Decimal("10.01")
    assert invoice.tva == Decimal("5.50")
    assert invoice.amount_ttc == Decimal("10.56")
    with pytest.raises(ValidationError):
        service.update(owner.id, invoice.id, {"amount_ht": "10.015"})
    assert service.find_one(owner.id, invoice.id).amount_ht == Decimal("10.01")


def test_create_invoice_rejects_references_not_owned(session, settings, owner, intruder, make_client, make_project):
    own_client = make_client(owner)
    foreign_client = make_client(intruder, name="Foreign")
    foreign_project = make_project(intruder, foreign_client)
    other_client = make_client(owner, name="Other")
    other_project = make_project(owner, other_client, title="Other project")
    service = _service(session, settings)

    with pytest.raises(InvalidReferenceError):
        service.create(owner.id, _payload(foreign_client))
    with pytest.raises(InvalidReferenceError):
        service.create(owner.id, _payload(own_client, project_id=foreign_project.id))
    with pytest.raises(InvalidReferenceError):
        service.create(owner.id, _payload(own_client, project_id=other_project.id))
    with pytest.raises(InvalidReferenceError):
        service.create(owner.id, _payload(own_client, client_id="missing"))
    assert session.query(Invoice).count() == 0


def test_find_all_is_scoped_and_newest_first(session, settings, owner, intruder, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    assert service.find_all(owner.id) == []

    older = service.create(owner.id, _payload(client, title="Older"))
    newer = service.create(owner.id, _payload(client, title="Newer"))
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    older.created_at = base
    newer.created_at = base + timedelta(days=1)
    session.commit()

    assert [invoice.id for invoice in service.find_all(owner.id)] == [newer.id, older.id]
    assert service.find_all(intruder.id) == []


def test_foreign_invoice_behaves_as_missing(session, settings, owner, intruder, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client))

    with pytest.raises(NotFoundError):
        service.find_one(intruder.id, invoice.id)
    with pytest.raises(NotFoundError):
        service.update(intruder.id, invoice.id, {"title": "Hijacked"})
    with pytest.raises(NotFoundError):
        service.update_status(intruder.id, invoice.id, "PAID")
    with pytest.raises(NotFoundError):
        service.remove(intruder.id, invoice.id)

    unchanged = service.find_one(owner.id, invoice.id)
    assert unchanged.title == "Website redesign"
    assert unchanged.status == InvoiceStatus.DRAFT
    assert Path(unchanged.pdf_url).exists()


def test_partial_update_recomputes_ttc_from_stored_rate(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client, amount_ht=1000, tva=20))

    updated = service.update(owner.id, invoice.id, {"amount_ht": 1200})

    assert updated.tva == Decimal("20.00")
    assert updated.amount_ttc == Decimal("1440.00")
    assert updated.title == "Website redesign"


def test_update_regenerates_document_in_place(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client, amount_ht=1000, tva=20))
    original_path = invoice.pdf_url

    updated = service.update(owner.id, invoice.id, {"amount_ht": 1200})

    assert updated.pdf_url == original_path
    data = Path(original_path).read_bytes()
    assert b"1,440.00 EUR" in data
    assert b"1,200.00 EUR" in data


def test_update_client_drops_project_of_previous_client(session, settings, owner, make_client, make_project):
    first = make_client(owner, name="First")
    second = make_client(owner, name="Second")
    project = make_project(owner, first)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(first, project_id=project.id))

    updated = service.update(owner.id, invoice.id, {"client_id": second.id})

    assert updated.client_id == second.id
    assert updated.project_id is None


def test_update_rejects_unknown_and_null_fields(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client))

    with pytest.raises(ValidationError):
        service.update(owner.id, invoice.id, {"amount_ttc": 1})
    with pytest.raises(ValidationError):
        service.update(owner.id, invoice.id, {"tva": None})


def test_update_status_accepts_any_status_from_any_status(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client))

    assert service.update_status(owner.id, invoice.id, "PAID").status == InvoiceStatus.PAID
    assert service.update_status(owner.id, invoice.id, "DRAFT").status == InvoiceStatus.DRAFT
    assert service.update_status(owner.id, invoice.id, "overdue").status == InvoiceStatus.OVERDUE
    with pytest.raises(ValidationError):
        service.update_status(owner.id, invoice.id, "LOST")


def test_update_status_keeps_amounts_and_document(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client))
    before = Path(invoice.pdf_url).read_bytes()

    updated = service.update_status(owner.id, invoice.id, "SENT")

    assert updated.amount_ttc == Decimal("1200.00")
    assert updated.pdf_url == invoice.pdf_url
    assert Path(updated.pdf_url).read_bytes() == before


def test_remove_deletes_row_and_document(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client))
    path = Path(invoice.pdf_url)
    invoice_id = invoice.id

    assert service.remove(owner.id, invoice_id) is True

    assert not path.exists()
    with pytest.raises(NotFoundError):
        service.find_one(owner.id, invoice_id)


def test_remove_succeeds_when_document_already_gone(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client))
    Path(invoice.pdf_url).unlink()
    invoice_id = invoice.id

    assert service.remove(owner.id, invoice_id) is False
    assert service.find_all(owner.id) == []


def test_generation_failure_keeps_record_without_document(session, settings, owner, tmp_path, make_client):
    client = make_client(owner)
    blocker = tmp_path / "blocked"
    blocker.write_text("occupied")
    service = _service(session, dataclasses.replace(settings, INVOICE_STORAGE_DIR=str(blocker)))

    with pytest.raises(DocumentWriteError):
        service.create(owner.id, _payload(client))

    stored = session.query(Invoice).one()
    assert stored.pdf_url is None
    assert stored.amount_ttc == Decimal("1200.00")


def test_regenerate_document_restores_missing_file(session, settings, owner, make_client):
    client = make_client(owner)
    service = _service(session, settings)
    invoice = service.create(owner.id, _payload(client))
    Path(invoice.pdf_url).unlink()

    regenerated = service.regenerate_document(owner.id, invoice.id)

    assert Path(regenerated.pdf_url).is_file()
