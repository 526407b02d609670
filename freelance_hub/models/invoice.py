"""Invoice model module."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Enum, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freelance_hub.models.base import AuditMixin, Base, IdentifierMixin, OwnedMixin
from freelance_hub.models.enums import InvoiceStatus


class Invoice(Base, IdentifierMixin, AuditMixin, OwnedMixin):
    __tablename__ = "invoices"
    __table_args__ = (
        Index("idx_invoices_user_status", "user_id", "status"),
        Index("idx_invoices_user_created", "user_id", "created_at"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[InvoiceStatus] = mapped_column(Enum(InvoiceStatus), default=InvoiceStatus.DRAFT, nullable=False)
    client_id: Mapped[str] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    project_id: Mapped[str | None] = mapped_column(ForeignKey("projects.id", ondelete="SET NULL"), index=True)
    amount_ht: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tva: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("20.00"), nullable=False)
    amount_ttc: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    pdf_url: Mapped[str | None] = mapped_column(String(1024))

    client = relationship("Client")
    project = relationship("Project")
