"""User profile and statistics schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from freelance_hub.models.enums import UserRole
from freelance_hub.schemas.common import Money


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: UserRole
    created_at: datetime = Field(serialization_alias="createdAt")


class UserStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_projects: int = Field(serialization_alias="totalProjects")
    total_invoices: int = Field(serialization_alias="totalInvoices")
    active_clients: int = Field(serialization_alias="activeClients")
    total_revenue: Money = Field(serialization_alias="totalRevenue")
    outstanding_amount: Money = Field(serialization_alias="outstandingAmount")
