from __future__ import annotations

from decimal import Decimal

import pytest

from freelance_hub.utils.money import compute_amount_ttc, compute_tax_amount, format_amount, to_decimal


def test_compute_amount_ttc_applies_percentage_rate():
    assert compute_amount_ttc(1000, 20) == Decimal("1200.00")
    assert compute_amount_ttc(Decimal("1200"), 0) == Decimal("1200.00")


def test_compute_amount_ttc_rounds_half_up_to_cents():
    # 0.05 * 1.1 = 0.055 -> 0.06
    assert compute_amount_ttc(Decimal("0.05"), 10) == Decimal("0.06")
    assert compute_amount_ttc(99.99, 5.5) == Decimal("105.49")


def test_tax_amount_is_difference_between_totals():
    assert compute_tax_amount(1200, 20) == Decimal("240.00")
    assert compute_amount_ttc(1200, 20) - Decimal("1200") == compute_tax_amount(1200, 20)


def test_to_decimal_avoids_float_artifacts():
    assert to_decimal(0.1) == Decimal("0.1")
    with pytest.raises(ValueError):
        to_decimal("twelve")


def test_format_amount_groups_thousands():
    assert format_amount(Decimal("1440"), "EUR") == "1,440.00 EUR"
    assert format_amount(0, "USD") == "0.00 USD"
