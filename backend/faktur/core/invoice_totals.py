"""Invoice Totals — derives subtotal, discount, tax and total from line items.

Invariants:
    - compute_invoice_totals is PURE and idempotent: same input, same cent-exact output
    - amount_i = round2(quantity_i * rate_i); subtotal = round2(sum(amount_i))
    - discount_amount <= subtotal (fixed discounts are clamped, never rejected)
    - taxable_base = subtotal - discount_amount; tax_amount = round2(taxable_base * tax_rate / 100)
    - total = round2(taxable_base + tax_amount) >= 0
    - Invalid numeric input raises ValidationError naming the offending field

Design Decisions:
    - Persisted subtotal/tax/total columns are a cache of this function: create, edit,
      document export and dashboards all call it instead of trusting stored values
    - Percentage inputs outside [0, 100] are rejected; a fixed discount above the
      subtotal is clamped so the taxable base never goes negative
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from faktur.core.domain_types import DiscountType
from faktur.core.errors import ValidationError
from faktur.core.money import ZERO, as_decimal, money_equals, round_money
from faktur.core.protocols import PricedLine


HUNDRED = Decimal("100")


@dataclass(frozen=True)
class LineInput:
    """Minimal priced line for previews and tests."""
    quantity: Decimal
    rate: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    """Result of compute_invoice_totals. All values are Decimals rounded to cents."""
    amounts: tuple[Decimal, ...]
    subtotal: Decimal
    discount_amount: Decimal
    taxable_base: Decimal
    tax_amount: Decimal
    total: Decimal


def compute_invoice_totals(
    items: Sequence[PricedLine],
    tax_rate: object = 0,
    discount_type: DiscountType | str | None = DiscountType.NONE,
    discount_value: object = 0,
) -> InvoiceTotals:
    """Compute invoice totals. Pure — raises ValidationError on invalid input."""
    amounts = tuple(
        _line_amount(item, index) for index, item in enumerate(items)
    )
    subtotal = round_money(sum(amounts, ZERO))

    kind = _parse_discount_type(discount_type)
    rate = _percentage(tax_rate, "tax_rate")
    value = as_decimal(discount_value, "discount_value")
    if value < 0:
        raise ValidationError("discount_value cannot be negative", "discount_value")

    if kind is DiscountType.PERCENTAGE:
        value = _percentage(value, "discount_value")
        discount_amount = round_money(subtotal * value / HUNDRED)
    elif kind is DiscountType.FIXED:
        discount_amount = round_money(value)
    else:
        discount_amount = ZERO
    discount_amount = min(discount_amount, subtotal)

    taxable_base = subtotal - discount_amount
    tax_amount = round_money(taxable_base * rate / HUNDRED)
    total = round_money(taxable_base + tax_amount)

    return InvoiceTotals(
        amounts=amounts,
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_base=taxable_base,
        tax_amount=tax_amount,
        total=total,
    )


def totals_match(stored: object, recomputed: InvoiceTotals) -> bool:
    """True if the cached totals on `stored` agree with a fresh computation."""
    return all(
        money_equals(getattr(stored, name) or ZERO, getattr(recomputed, name))
        for name in ("subtotal", "discount_amount", "tax_amount", "total")
    )


def _line_amount(item: PricedLine, index: int) -> Decimal:
    quantity = as_decimal(item.quantity, f"items[{index}].quantity")
    rate = as_decimal(item.rate, f"items[{index}].rate")
    if quantity <= 0:
        raise ValidationError(
            f"Item #{index + 1}: quantity must be greater than 0",
            f"items[{index}].quantity",
        )
    if rate < 0:
        raise ValidationError(
            f"Item #{index + 1}: rate cannot be negative",
            f"items[{index}].rate",
        )
    return round_money(quantity * rate)


def _percentage(value: object, field: str) -> Decimal:
    result = as_decimal(value, field)
    if result < 0 or result > HUNDRED:
        raise ValidationError(f"{field} must be between 0 and 100", field)
    return result


def _parse_discount_type(value: DiscountType | str | None) -> DiscountType:
    if value is None:
        return DiscountType.NONE
    try:
        return DiscountType(value)
    except ValueError:
        raise ValidationError(
            f"Unknown discount_type '{value}'", "discount_type",
        )
