"""Project request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from freelance_hub.models.enums import ProjectStatus
from freelance_hub.schemas.clients import ClientResponse


class ProjectCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=20000)
    client_id: str = Field(validation_alias=AliasChoices("clientId", "client_id"), min_length=1)
    status: ProjectStatus | None = None


class ProjectUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=20000)
    client_id: str | None = Field(default=None, validation_alias=AliasChoices("clientId", "client_id"), min_length=1)
    status: ProjectStatus | None = None


class ProjectSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    status: ProjectStatus


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    status: ProjectStatus
    client_id: str = Field(serialization_alias="clientId")
    user_id: str = Field(serialization_alias="userId")
    client: ClientResponse | None = None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
