"""Invoice request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from freelance_hub.models.enums import InvoiceStatus
from freelance_hub.schemas.clients import ClientResponse
from freelance_hub.schemas.common import Money
from freelance_hub.schemas.projects import ProjectSummary

_NON_NULLABLE = ("title", "client_id", "amount_ht", "tva")


class InvoiceCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=20000)
    client_id: str = Field(validation_alias=AliasChoices("clientId", "client_id"), min_length=1)
    project_id: str | None = Field(default=None, validation_alias=AliasChoices("projectId", "project_id"))
    amount_ht: Decimal = Field(
        validation_alias=AliasChoices("amountHT", "amount_ht"), ge=0, decimal_places=2, allow_inf_nan=False
    )
    tva: Decimal | None = Field(default=None, ge=0, decimal_places=2, allow_inf_nan=False)
    status: InvoiceStatus | None = None


class InvoiceUpdateRequest(BaseModel):
    """Partial update; only the fields present in the body are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=20000)
    client_id: str | None = Field(default=None, validation_alias=AliasChoices("clientId", "client_id"), min_length=1)
    project_id: str | None = Field(default=None, validation_alias=AliasChoices("projectId", "project_id"))
    amount_ht: Decimal | None = Field(
        default=None, validation_alias=AliasChoices("amountHT", "amount_ht"), ge=0, decimal_places=2, allow_inf_nan=False
    )
    tva: Decimal | None = Field(default=None, ge=0, decimal_places=2, allow_inf_nan=False)
    status: InvoiceStatus | None = None

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "InvoiceUpdateRequest":
        for field in _NON_NULLABLE:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class InvoiceStatusUpdateRequest(BaseModel):
    status: InvoiceStatus


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    status: InvoiceStatus
    client_id: str = Field(serialization_alias="clientId")
    project_id: str | None = Field(default=None, serialization_alias="projectId")
    user_id: str = Field(serialization_alias="userId")
    amount_ht: Money = Field(serialization_alias="amountHT")
    tva: Money
    amount_ttc: Money = Field(serialization_alias="amountTTC")
    pdf_url: str | None = Field(default=None, serialization_alias="pdfUrl")
    client: ClientResponse | None = None
    project: ProjectSummary | None = None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
