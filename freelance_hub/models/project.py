"""Project model module."""

from __future__ import annotations

from sqlalchemy import Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freelance_hub.models.base import AuditMixin, Base, IdentifierMixin, OwnedMixin
from freelance_hub.models.enums import ProjectStatus


class Project(Base, IdentifierMixin, AuditMixin, OwnedMixin):
    __tablename__ = "projects"
    __table_args__ = (Index("idx_projects_user_status", "user_id", "status"),)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[ProjectStatus] = mapped_column(Enum(ProjectStatus), default=ProjectStatus.TODO, nullable=False)
    client_id: Mapped[str] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)

    client = relationship("Client")
