"""Pydantic schema package for API contracts."""

from freelance_hub.schemas.auth import CredentialsRequest, TokenResponse
from freelance_hub.schemas.clients import ClientCreateRequest, ClientResponse, ClientUpdateRequest
from freelance_hub.schemas.common import DeletionResponse, ErrorEnvelope
from freelance_hub.schemas.invoices import (
    InvoiceCreateRequest,
    InvoiceResponse,
    InvoiceStatusUpdateRequest,
    InvoiceUpdateRequest,
)
from freelance_hub.schemas.projects import (
    ProjectCreateRequest,
    ProjectResponse,
    ProjectSummary,
    ProjectUpdateRequest,
)
from freelance_hub.schemas.users import UserResponse, UserStatsResponse

__all__ = [
    "ClientCreateRequest",
    "ClientResponse",
    "ClientUpdateRequest",
    "CredentialsRequest",
    "DeletionResponse",
    "ErrorEnvelope",
    "InvoiceCreateRequest",
    "InvoiceResponse",
    "InvoiceStatusUpdateRequest",
    "InvoiceUpdateRequest",
    "ProjectCreateRequest",
    "ProjectResponse",
    "ProjectSummary",
    "ProjectUpdateRequest",
    "TokenResponse",
    "UserResponse",
    "UserStatsResponse",
]
