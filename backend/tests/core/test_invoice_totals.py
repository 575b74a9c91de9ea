"""Tests for compute_invoice_totals — pure, cent-exact invoice arithmetic."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from faktur.core.domain_types import DiscountType
from faktur.core.errors import ValidationError
from faktur.core.invoice_totals import (
    LineInput, compute_invoice_totals, totals_match,
)
from faktur.core.money import round_money


def _lines(*pairs):
    return [LineInput(Decimal(str(q)), Decimal(str(r))) for q, r in pairs]


WORKED_EXAMPLE = _lines((2, 50), (1, "25.005"))


def test_worked_example_with_percentage_discount_and_tax():
    totals = compute_invoice_totals(
        WORKED_EXAMPLE, tax_rate=8,
        discount_type=DiscountType.PERCENTAGE, discount_value=10,
    )
    assert totals.amounts == (Decimal("100.00"), Decimal("25.01"))
    assert totals.subtotal == Decimal("125.01")
    assert totals.discount_amount == Decimal("12.50")
    assert totals.taxable_base == Decimal("112.51")
    assert totals.tax_amount == Decimal("9.00")
    assert totals.total == Decimal("121.51")


def test_no_discount_no_tax():
    totals = compute_invoice_totals(WORKED_EXAMPLE)
    assert totals.subtotal == Decimal("125.01")
    assert totals.discount_amount == Decimal("0.00")
    assert totals.tax_amount == Decimal("0.00")
    assert totals.total == Decimal("125.01")


def test_fixed_discount_is_clamped_to_subtotal():
    totals = compute_invoice_totals(
        _lines((1, 40)), tax_rate=20, discount_type="fixed", discount_value=55,
    )
    assert totals.discount_amount == Decimal("40.00")
    assert totals.taxable_base == Decimal("0.00")
    assert totals.total == Decimal("0.00")


def test_empty_items_give_zero_totals():
    totals = compute_invoice_totals([], tax_rate=10)
    assert totals.amounts == ()
    assert totals.total == Decimal("0.00")


def test_discount_type_none_value_is_ignored():
    totals = compute_invoice_totals(
        _lines((1, 10)), discount_type=None, discount_value=5,
    )
    assert totals.discount_amount == Decimal("0.00")


def test_accepts_floats_and_strings():
    totals = compute_invoice_totals(
        [SimpleNamespace(quantity=1, rate=25.005)], tax_rate="0",
    )
    assert totals.subtotal == Decimal("25.01")


def test_is_idempotent():
    args = (WORKED_EXAMPLE, 8, "percentage", 10)
    assert compute_invoice_totals(*args) == compute_invoice_totals(*args)


@pytest.mark.parametrize("quantity, rate, field", [
    (0, 10, "items[0].quantity"),
    (-1, 10, "items[0].quantity"),
    (1, -0.01, "items[0].rate"),
    ("nan", 10, "items[0].quantity"),
])
def test_rejects_bad_line_values(quantity, rate, field):
    with pytest.raises(ValidationError) as exc_info:
        compute_invoice_totals([SimpleNamespace(quantity=quantity, rate=rate)])
    assert exc_info.value.field == field


def test_error_names_the_offending_line():
    items = [SimpleNamespace(quantity=1, rate=1), SimpleNamespace(quantity=0, rate=1)]
    with pytest.raises(ValidationError) as exc_info:
        compute_invoice_totals(items)
    assert exc_info.value.field == "items[1].quantity"


@pytest.mark.parametrize("kwargs, field", [
    ({"tax_rate": -1}, "tax_rate"),
    ({"tax_rate": "100.01"}, "tax_rate"),
    ({"discount_type": "percentage", "discount_value": 101}, "discount_value"),
    ({"discount_type": "fixed", "discount_value": -5}, "discount_value"),
    ({"discount_type": "bogus"}, "discount_type"),
])
def test_rejects_out_of_range_modifiers(kwargs, field):
    with pytest.raises(ValidationError) as exc_info:
        compute_invoice_totals(WORKED_EXAMPLE, **kwargs)
    assert exc_info.value.field == field
    assert exc_info.value.http_status == 400


def test_boundary_percentages_are_accepted():
    full = compute_invoice_totals(
        WORKED_EXAMPLE, tax_rate=100, discount_type="percentage", discount_value=100,
    )
    assert full.discount_amount == full.subtotal
    assert full.total == Decimal("0.00")


def test_totals_match_detects_drift():
    totals = compute_invoice_totals(WORKED_EXAMPLE, 8, "percentage", 10)
    cached = SimpleNamespace(
        subtotal=Decimal("125.01"), discount_amount=Decimal("12.50"),
        tax_amount=Decimal("9.00"), total=Decimal("121.51"),
    )
    assert totals_match(cached, totals)

    cached.total = Decimal("121.00")
    assert not totals_match(cached, totals)


def test_subtotal_ignores_item_order():
    items = _lines((3, "19.99"), (1, "0.005"), (7, "3.335"), (2, "50"))
    forward = compute_invoice_totals(items)
    backward = compute_invoice_totals(list(reversed(items)))
    assert forward.subtotal == backward.subtotal
    assert forward.amounts == tuple(reversed(backward.amounts))


@pytest.mark.parametrize("tax_rate", ["0", "7.25", "8", "19", "100"])
@pytest.mark.parametrize("discount", ["0", "2.5", "10", "33.333", "100"])
def test_percentage_discount_closed_form(tax_rate, discount):
    totals = compute_invoice_totals(WORKED_EXAMPLE, tax_rate, "percentage", discount)
    subtotal = totals.subtotal
    base = subtotal - round_money(subtotal * Decimal(discount) / 100)
    expected = round_money(base * (1 + Decimal(tax_rate) / 100))
    assert totals.total >= 0
    assert totals.total == expected
