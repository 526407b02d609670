"""Invoice endpoints for API v1."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from freelance_hub.api.v1._authz import require_user
from freelance_hub.core.dependencies import CurrentUser, get_invoice_service
from freelance_hub.schemas.common import DeletionResponse
from freelance_hub.schemas.invoices import (
    InvoiceCreateRequest,
    InvoiceResponse,
    InvoiceStatusUpdateRequest,
    InvoiceUpdateRequest,
)
from freelance_hub.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def create_invoice(
    payload: InvoiceCreateRequest,
    user: CurrentUser = Depends(require_user),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    invoice = service.create(user.user_id, payload.model_dump())
    return InvoiceResponse.model_validate(invoice)


@router.get("", response_model=list[InvoiceResponse])
def list_invoices(
    user: CurrentUser = Depends(require_user),
    service: InvoiceService = Depends(get_invoice_service),
) -> list[InvoiceResponse]:
    return [InvoiceResponse.model_validate(invoice) for invoice in service.find_all(user.user_id)]


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(
    invoice_id: str,
    user: CurrentUser = Depends(require_user),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    return InvoiceResponse.model_validate(service.find_one(user.user_id, invoice_id))


@router.patch("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(
    invoice_id: str,
    payload: InvoiceUpdateRequest,
    user: CurrentUser = Depends(require_user),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    invoice = service.update(user.user_id, invoice_id, payload.model_dump(exclude_unset=True))
    return InvoiceResponse.model_validate(invoice)


@router.patch("/{invoice_id}/status", response_model=InvoiceResponse)
def update_invoice_status(
    invoice_id: str,
    payload: InvoiceStatusUpdateRequest,
    user: CurrentUser = Depends(require_user),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    invoice = service.update_status(user.user_id, invoice_id, payload.status)
    return InvoiceResponse.model_validate(invoice)


@router.delete("/{invoice_id}", response_model=DeletionResponse)
def delete_invoice(
    invoice_id: str,
    user: CurrentUser = Depends(require_user),
    service: InvoiceService = Depends(get_invoice_service),
) -> DeletionResponse:
    document_removed = service.remove(user.user_id, invoice_id)
    return DeletionResponse(id=invoice_id, document_removed=document_removed)


@router.get("/{invoice_id}/pdf", response_class=FileResponse)
def download_invoice_pdf(
    invoice_id: str,
    user: CurrentUser = Depends(require_user),
    service: InvoiceService = Depends(get_invoice_service),
) -> FileResponse:
    invoice = service.find_one(user.user_id, invoice_id)
    if not invoice.pdf_url or not Path(invoice.pdf_url).is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No document for invoice {invoice_id}")
    return FileResponse(invoice.pdf_url, media_type="application/pdf", filename=Path(invoice.pdf_url).name)


@router.post("/{invoice_id}/pdf", response_model=InvoiceResponse)
def regenerate_invoice_pdf(
    invoice_id: str,
    user: CurrentUser = Depends(require_user),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    return InvoiceResponse.model_validate(service.regenerate_document(user.user_id, invoice_id))
