"""Invoice status transition rules used when strict status mode is on."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from freelance_hub.models.enums import InvoiceStatus


class InvalidTransitionError(ValueError):
    """Raised when strict mode forbids moving an invoice to a status."""


class StatusFlow:
    """Directed graph of allowed invoice status moves.

    Re-applying the current status is always accepted.
    """

    def __init__(self, edges: Mapping[InvoiceStatus, Iterable[InvoiceStatus]]) -> None:
        self._edges = {source: frozenset(targets) for source, targets in edges.items()}

    def targets(self, current: InvoiceStatus) -> frozenset[InvoiceStatus]:
        return self._edges.get(current, frozenset())

    def allows(self, current: InvoiceStatus, target: InvoiceStatus) -> bool:
        return current == target or target in self.targets(current)

    def require(self, current: InvoiceStatus, target: InvoiceStatus) -> None:
        if not self.allows(current, target):
            allowed = ", ".join(sorted(status.value for status in self.targets(current))) or "none"
            raise InvalidTransitionError(
                f"Invoice cannot move from {current.value} to {target.value} (allowed: {allowed})."
            )


INVOICE_STATUS_FLOW = StatusFlow(
    {
        InvoiceStatus.DRAFT: {InvoiceStatus.SENT},
        InvoiceStatus.SENT: {InvoiceStatus.PAID, InvoiceStatus.OVERDUE},
        InvoiceStatus.OVERDUE: {InvoiceStatus.PAID},
        InvoiceStatus.PAID: set(),
    }
)
