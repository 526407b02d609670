"""Invoice service: amounts, status bookkeeping and the PDF document lifecycle."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from freelance_hub.core.config import Config, get_config
from freelance_hub.core.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from freelance_hub.core.state_machine import INVOICE_STATUS_FLOW
from freelance_hub.models import Client, Invoice, InvoiceStatus, Project
from freelance_hub.repositories.invoice_store import InvoiceStore
from freelance_hub.services.invoice_generator import InvoicePdfGenerator, InvoiceSnapshot
from freelance_hub.utils.money import compute_amount_ttc, quantize_cents, to_decimal
from freelance_hub.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "description", "client_id", "project_id", "amount_ht", "tva", "status"})
# Fields whose value is printed on the document.
DOCUMENT_FIELDS = frozenset({"title", "description", "client_id", "project_id", "amount_ht", "tva"})
REQUIRED_FIELDS = frozenset({"title", "client_id", "amount_ht", "tva"})


def parse_invoice_status(value: InvoiceStatus | str) -> InvoiceStatus:
    if isinstance(value, InvoiceStatus):
        return value
    try:
        return InvoiceStatus(str(value).strip().upper())
    except ValueError as exc:
        allowed = ", ".join(status.value for status in InvoiceStatus)
        raise ValidationError(f"Invalid invoice status {value!r}; expected one of {allowed}.") from exc


def _parse_amount(field: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number.")
    try:
        amount = to_decimal(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a number.") from exc
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number.")
    if amount < 0:
        raise ValidationError(f"{field} must be >= 0.")
    cents = quantize_cents(amount)
    if cents != amount:
        raise ValidationError(f"{field} must have at most 2 decimal places.")
    return cents


def _parse_title(value: Any) -> str:
    title = sanitize_text(value, max_len=255) if isinstance(value, str) else ""
    if not title:
        raise ValidationError("title must be a non-empty string.")
    return title


class InvoiceService:
    """Owner-scoped invoice operations.

    Every public method takes the caller's user id explicitly. Invoices that
    exist but belong to someone else are reported exactly like missing ones.
    """

    def __init__(
        self,
        store: InvoiceStore,
        generator: InvoicePdfGenerator,
        settings: Config | None = None,
    ) -> None:
        self.store = store
        self.generator = generator
        self.settings = settings or get_config()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self, owner_id: str) -> list[Invoice]:
        return self.store.list_owned(owner_id)

    def find_one(self, owner_id: str, invoice_id: str) -> Invoice:
        invoice = self.store.get_owned(owner_id, invoice_id)
        if invoice is None:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        return invoice

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, owner_id: str, data: dict[str, Any]) -> Invoice:
        """Persist a new invoice, render its document and store the path.

        If rendering fails the invoice row is kept without ``pdf_url`` and
        ``DocumentWriteError`` propagates to the caller.
        """
        title = _parse_title(data.get("title"))
        amount_ht = _parse_amount("amount_ht", data.get("amount_ht"))
        tva_value = data.get("tva")
        tva = _parse_amount("tva", self.settings.INVOICE_DEFAULT_TVA if tva_value is None else tva_value)
        status = parse_invoice_status(data.get("status") or InvoiceStatus.DRAFT)
        client, project = self._resolve_references(owner_id, data.get("client_id"), data.get("project_id"))

        invoice = Invoice(
            title=title,
            description=sanitize_text(data.get("description")) or None,
            status=status,
            client_id=client.id,
            project_id=project.id if project else None,
            user_id=owner_id,
            amount_ht=amount_ht,
            tva=tva,
            amount_ttc=compute_amount_ttc(amount_ht, tva),
        )
        invoice = self.store.add(invoice)
        logger.info(
            "invoice.created",
            extra={"event": "invoice.created", "invoice_id": invoice.id, "user_id": owner_id},
        )

        self._render_and_store(owner_id, invoice.id, self._snapshot(invoice, client, project))
        return self.find_one(owner_id, invoice.id)

    def update(self, owner_id: str, invoice_id: str, changes: dict[str, Any]) -> Invoice:
        """Apply a partial update; only keys present in ``changes`` are touched."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown invoice fields: {', '.join(sorted(unknown))}")
        null_required = sorted(field for field in REQUIRED_FIELDS if field in changes and changes[field] is None)
        if null_required:
            raise ValidationError(f"Fields cannot be null: {', '.join(null_required)}")

        current = self.find_one(owner_id, invoice_id)
        values: dict[str, Any] = {}

        if "title" in changes:
            values["title"] = _parse_title(changes["title"])
        if "description" in changes:
            values["description"] = sanitize_text(changes["description"]) or None
        if "status" in changes:
            values["status"] = self._checked_status(current, changes["status"])
        if "amount_ht" in changes:
            values["amount_ht"] = _parse_amount("amount_ht", changes["amount_ht"])
        if "tva" in changes:
            values["tva"] = _parse_amount("tva", changes["tva"])
        if "amount_ht" in values or "tva" in values:
            values["amount_ttc"] = compute_amount_ttc(
                values.get("amount_ht", current.amount_ht),
                values.get("tva", current.tva),
            )

        if "client_id" in changes or "project_id" in changes:
            client_id = changes.get("client_id", current.client_id)
            project_id = changes.get("project_id", current.project_id)
            if "client_id" in changes and "project_id" not in changes and client_id != current.client_id:
                # A project is always tied to one client; drop it when the client moves.
                project = current.project
                if project is not None and project.client_id != client_id:
                    project_id = None
            client, project = self._resolve_references(owner_id, client_id, project_id)
            values["client_id"] = client.id
            values["project_id"] = project.id if project else None

        values = {key: value for key, value in values.items() if getattr(current, key) != value}
        document_changed = bool(DOCUMENT_FIELDS & set(values))

        if values:
            if self.store.update_owned(owner_id, invoice_id, values) == 0:
                raise NotFoundError(f"Invoice not found: {invoice_id}")
            logger.info(
                "invoice.updated",
                extra={
                    "event": "invoice.updated",
                    "invoice_id": invoice_id,
                    "user_id": owner_id,
                    "fields": sorted(values),
                },
            )

        updated = self.find_one(owner_id, invoice_id)
        if document_changed or not updated.pdf_url:
            self._render_and_store(owner_id, invoice_id, self._snapshot(updated))
            updated = self.find_one(owner_id, invoice_id)
        return updated

    def update_status(self, owner_id: str, invoice_id: str, status: InvoiceStatus | str) -> Invoice:
        """Set the status marker only; amounts and the document are untouched."""
        current = self.find_one(owner_id, invoice_id)
        new_status = self._checked_status(current, status)
        if self.store.update_owned(owner_id, invoice_id, {"status": new_status}) == 0:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        logger.info(
            "invoice.status_changed",
            extra={
                "event": "invoice.status_changed",
                "invoice_id": invoice_id,
                "user_id": owner_id,
                "status": new_status.value,
            },
        )
        return self.find_one(owner_id, invoice_id)

    def regenerate_document(self, owner_id: str, invoice_id: str) -> Invoice:
        invoice = self.find_one(owner_id, invoice_id)
        self._render_and_store(owner_id, invoice_id, self._snapshot(invoice))
        return self.find_one(owner_id, invoice_id)

    def refresh_documents(
        self,
        owner_id: str,
        client_id: str | None = None,
        project_id: str | None = None,
    ) -> int:
        """Re-render every owned invoice linked to ``client_id`` or ``project_id``.

        Called after a client rename or project retitle so the printed names
        follow. Returns the number of documents written.
        """
        linked = [
            invoice
            for invoice in self.store.list_owned(owner_id)
            if (client_id and invoice.client_id == client_id) or (project_id and invoice.project_id == project_id)
        ]
        for invoice in linked:
            self._render_and_store(owner_id, invoice.id, self._snapshot(invoice))
        if linked:
            logger.info(
                "invoice.documents_refreshed",
                extra={
                    "event": "invoice.documents_refreshed",
                    "user_id": owner_id,
                    "client_id": client_id,
                    "project_id": project_id,
                    "count": len(linked),
                },
            )
        return len(linked)

    def remove(self, owner_id: str, invoice_id: str) -> bool:
        """Delete the owned row, then try to delete its document.

        Returns whether a document file was actually removed. File cleanup
        never fails the delete.
        """
        pdf_url = self.find_one(owner_id, invoice_id).pdf_url
        if self.store.delete_owned(owner_id, invoice_id) == 0:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        logger.info(
            "invoice.deleted",
            extra={"event": "invoice.deleted", "invoice_id": invoice_id, "user_id": owner_id},
        )
        if not pdf_url:
            return False
        return self.generator.delete(pdf_url)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _checked_status(self, current: Invoice, value: InvoiceStatus | str) -> InvoiceStatus:
        new_status = parse_invoice_status(value)
        if self.settings.INVOICE_STRICT_STATUS:
            INVOICE_STATUS_FLOW.require(InvoiceStatus(current.status), new_status)
        return new_status

    def _resolve_references(
        self,
        owner_id: str,
        client_id: str | None,
        project_id: str | None,
    ) -> tuple[Client, Project | None]:
        if not client_id:
            raise ValidationError("client_id is required.")
        client = self.store.get_owned_client(owner_id, client_id)
        if client is None:
            raise InvalidReferenceError(f"Client not found: {client_id}")

        project = None
        if project_id:
            project = self.store.get_owned_project(owner_id, project_id)
            if project is None:
                raise InvalidReferenceError(f"Project not found: {project_id}")
            if project.client_id != client.id:
                raise InvalidReferenceError(f"Project {project_id} does not belong to client {client_id}")
        return client, project

    def _snapshot(
        self,
        invoice: Invoice,
        client: Client | None = None,
        project: Project | None = None,
    ) -> InvoiceSnapshot:
        client = client or invoice.client
        project = project or invoice.project
        return InvoiceSnapshot(
            id=invoice.id,
            title=invoice.title,
            description=invoice.description,
            amount_ht=invoice.amount_ht,
            tva=invoice.tva,
            amount_ttc=invoice.amount_ttc,
            client_name=client.name if client else None,
            project_title=project.title if project else None,
        )

    def _render_and_store(self, owner_id: str, invoice_id: str, snapshot: InvoiceSnapshot) -> str:
        path = self.generator.generate(snapshot)
        if self.store.update_owned(owner_id, invoice_id, {"pdf_url": path}) == 0:
            raise NotFoundError(f"Invoice not found: {invoice_id}")
        return path
