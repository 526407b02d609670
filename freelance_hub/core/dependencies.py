"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any

from fastapi import Depends
from sqlalchemy.orm import Session

from freelance_hub.auth.jwt import decode_jwt
from freelance_hub.core.config import Config, get_config
from freelance_hub.core.exceptions import AuthenticationError
from freelance_hub.database.db import get_db
from freelance_hub.repositories.invoice_store import SqlAlchemyInvoiceStore
from freelance_hub.services.invoice_generator import InvoicePdfGenerator
from freelance_hub.services.invoice_service import InvoiceService


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: str
    role: str
    claims: dict[str, Any]


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve current user from a bearer token."""
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET)
    if claims.get("token_use") != "access":
        raise AuthenticationError("Token is not an access token.")

    try:
        return CurrentUser(
            user_id=str(claims["sub"]),
            email=str(claims.get("email", "")),
            role=str(claims["role"]).lower(),
            claims=claims,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid auth claims.") from exc


def get_invoice_generator() -> InvoicePdfGenerator:
    return InvoicePdfGenerator(settings=get_settings())


def get_invoice_service(
    db: Session = Depends(get_db_session),
    generator: InvoicePdfGenerator = Depends(get_invoice_generator),
) -> InvoiceService:
    """Build the invoice service for the request's session."""
    return InvoiceService(store=SqlAlchemyInvoiceStore(db), generator=generator, settings=get_settings())
