"""Client endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from freelance_hub.api.v1._authz import require_user
from freelance_hub.core.dependencies import CurrentUser, get_db_session, get_invoice_service
from freelance_hub.schemas.clients import ClientCreateRequest, ClientResponse, ClientUpdateRequest
from freelance_hub.schemas.common import DeletionResponse
from freelance_hub.services.client_service import ClientService
from freelance_hub.services.invoice_service import InvoiceService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreateRequest,
    user: CurrentUser = Depends(require_user),
    db: Session = Depends(get_db_session),
) -> ClientResponse:
    client = ClientService(db).create(user.user_id, payload.model_dump(exclude_none=True))
    return ClientResponse.model_validate(client)


@router.get("", response_model=list[ClientResponse])
def list_clients(user: CurrentUser = Depends(require_user), db: Session = Depends(get_db_session)) -> list[ClientResponse]:
    return [ClientResponse.model_validate(client) for client in ClientService(db).find_all(user.user_id)]


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: str,
    user: CurrentUser = Depends(require_user),
    db: Session = Depends(get_db_session),
) -> ClientResponse:
    return ClientResponse.model_validate(ClientService(db).find_one(user.user_id, client_id))


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: str,
    payload: ClientUpdateRequest,
    user: CurrentUser = Depends(require_user),
    db: Session = Depends(get_db_session),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> ClientResponse:
    service = ClientService(db, documents=invoices)
    client = service.update(user.user_id, client_id, payload.model_dump(exclude_unset=True))
    return ClientResponse.model_validate(client)


@router.delete("/{client_id}", response_model=DeletionResponse)
def delete_client(
    client_id: str,
    user: CurrentUser = Depends(require_user),
    db: Session = Depends(get_db_session),
) -> DeletionResponse:
    ClientService(db).remove(user.user_id, client_id)
    return DeletionResponse(id=client_id)
