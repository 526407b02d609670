"""Shared response shapes and the JSON money type."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

# Amounts are stored as Decimal but emitted as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ErrorEnvelope(BaseModel):
    status: str = "error"
    error_code: str
    detail: str


class DeletionResponse(BaseModel):
    id: str
    deleted: bool = True
    document_removed: bool | None = None
