"""User profile and per-user statistics."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import func, select, union

from freelance_hub.core.exceptions import NotFoundError
from freelance_hub.models import Invoice, InvoiceStatus, Project, User
from freelance_hub.services.base_service import BaseService
from freelance_hub.utils.money import quantize_cents, to_decimal


@dataclass(frozen=True)
class UserStats:
    total_projects: int
    total_invoices: int
    active_clients: int
    total_revenue: Decimal
    outstanding_amount: Decimal


class UserService(BaseService):
    def find_all(self) -> list[User]:
        return self.db.query(User).order_by(User.created_at.asc()).all()

    def get_profile(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _sum_ttc(self, user_id: str, statuses: list[InvoiceStatus]) -> Decimal:
        total = (
            self.db.query(func.coalesce(func.sum(Invoice.amount_ttc), 0))
            .filter(Invoice.user_id == user_id, Invoice.status.in_(statuses))
            .scalar()
        )
        return quantize_cents(to_decimal(total or 0))

    def get_stats(self, user_id: str) -> UserStats:
        self.get_profile(user_id)
        total_projects = self.db.query(func.count(Project.id)).filter(Project.user_id == user_id).scalar() or 0
        total_invoices = self.db.query(func.count(Invoice.id)).filter(Invoice.user_id == user_id).scalar() or 0

        billed_clients = union(
            select(Project.client_id).where(Project.user_id == user_id),
            select(Invoice.client_id).where(Invoice.user_id == user_id),
        ).subquery()
        active_clients = self.db.execute(select(func.count()).select_from(billed_clients)).scalar() or 0

        return UserStats(
            total_projects=int(total_projects),
            total_invoices=int(total_invoices),
            active_clients=int(active_clients),
            total_revenue=self._sum_ttc(user_id, [InvoiceStatus.PAID]),
            outstanding_amount=self._sum_ttc(user_id, [InvoiceStatus.SENT, InvoiceStatus.OVERDUE]),
        )
