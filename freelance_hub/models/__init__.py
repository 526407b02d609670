"""SQLAlchemy model package for the freelance schema."""

from freelance_hub.models.base import Base
from freelance_hub.models.client import Client
from freelance_hub.models.enums import InvoiceStatus, ProjectStatus, UserRole
from freelance_hub.models.invoice import Invoice
from freelance_hub.models.project import Project
from freelance_hub.models.user import User

__all__ = [
    "Base",
    "Client",
    "Invoice",
    "InvoiceStatus",
    "Project",
    "ProjectStatus",
    "User",
    "UserRole",
]
