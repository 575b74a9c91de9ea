"""Payment Balance Rules — pure arithmetic for recording and removing payments.

Invariants:
    - Payments are accepted only while the stored status is SENT (overdue included)
    - amount > 0 and never more than the outstanding balance (one-cent tolerance)
    - settled is True when amount_paid reaches total; the shell then applies
      the SENT -> PAID transition through the state machine
    - A payment cannot be removed from a PAID invoice: PAID is terminal
    - amount_paid never drops below zero
"""

from dataclasses import dataclass
from decimal import Decimal

from faktur.core.domain_types import InvoiceStatus
from faktur.core.errors import InvalidTransitionError, ValidationError
from faktur.core.invoice_status import stored_status
from faktur.core.money import ZERO, as_decimal, money_add, money_gte, money_lt, money_subtract


@dataclass(frozen=True)
class PaymentOutcome:
    amount_paid: Decimal
    outstanding: Decimal
    settled: bool


def outstanding_balance(total: object, amount_paid: object) -> Decimal:
    return max(money_subtract(total, amount_paid), ZERO)


def apply_payment(
    status: InvoiceStatus | str, total: object, amount_paid: object, amount: object,
) -> PaymentOutcome:
    """Validate a new payment against the invoice balance. Pure."""
    value = as_decimal(amount, "amount")
    if value <= 0:
        raise ValidationError("Payment amount must be positive", "amount")

    current = stored_status(status)
    if current is not InvoiceStatus.SENT:
        raise InvalidTransitionError(
            current.value, InvoiceStatus.PAID.value,
            "payments can only be recorded on sent invoices",
        )

    outstanding = outstanding_balance(total, amount_paid)
    if money_lt(outstanding, value):
        raise ValidationError(
            f"Payment of {value} exceeds outstanding balance {outstanding}",
            "amount",
        )

    new_paid = money_add(amount_paid or ZERO, value)
    return PaymentOutcome(
        amount_paid=new_paid,
        outstanding=outstanding_balance(total, new_paid),
        settled=money_gte(new_paid, total),
    )


def revert_payment(
    status: InvoiceStatus | str, total: object, amount_paid: object, amount: object,
) -> PaymentOutcome:
    """Validate removing a recorded payment. Pure."""
    current = stored_status(status)
    if current is InvoiceStatus.PAID:
        raise InvalidTransitionError(
            current.value, InvoiceStatus.SENT.value, "paid is a terminal status",
        )
    new_paid = max(money_subtract(amount_paid or ZERO, amount), ZERO)
    return PaymentOutcome(
        amount_paid=new_paid,
        outstanding=outstanding_balance(total, new_paid),
        settled=False,
    )
