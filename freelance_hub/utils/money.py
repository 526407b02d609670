"""Decimal helpers for invoice amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert user/ORM values to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal amount: {value!r}") from exc


def quantize_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_tax_amount(amount_ht: Decimal | float | int, tva: Decimal | float | int) -> Decimal:
    """Tax portion of an HT amount: amount_ht * tva / 100."""
    return quantize_cents(to_decimal(amount_ht) * to_decimal(tva) / HUNDRED)


def compute_amount_ttc(amount_ht: Decimal | float | int, tva: Decimal | float | int) -> Decimal:
    """Tax-inclusive total: amount_ht * (1 + tva / 100)."""
    return quantize_cents(to_decimal(amount_ht) * (1 + to_decimal(tva) / HUNDRED))


def format_amount(value: Decimal | float | int, currency: str) -> str:
    return f"{quantize_cents(to_decimal(value)):,.2f} {currency}"
