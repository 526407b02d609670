"""Client model module."""

from __future__ import annotations

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from freelance_hub.models.base import AuditMixin, Base, IdentifierMixin, OwnedMixin


class Client(Base, IdentifierMixin, AuditMixin, OwnedMixin):
    __tablename__ = "clients"
    __table_args__ = (Index("idx_clients_user_created", "user_id", "created_at"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320))
    phone: Mapped[str | None] = mapped_column(String(64))
    company: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(Text)
