"""Invoice Status State Machine — validates status transitions and projects overdue.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - PAID and CANCELLED are terminal: every transition out of them raises
    - draft -> sent requires >= 1 item and a client reference
    - Item/tax/discount edits are allowed only while DRAFT
    - OVERDUE is never a transition target: it is derived at read time from
      stored SENT + due_date < today, so paying late still moves SENT -> PAID

Design Decisions:
    - Raise InvalidTransitionError (not error dicts): the shell maps the exception
      to an HTTP 409 and the error names both current and rejected target states
    - A stored legacy OVERDUE value is read as SENT, so there is a single source
      of truth for "is this invoice overdue"
"""

from dataclasses import dataclass
from datetime import date, datetime

from faktur.core.domain_types import InvoiceStatus
from faktur.core.errors import InvalidTransitionError
from faktur.core.protocols import InvoiceLike


ALLOWED_TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({
        InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.CANCELLED,
    }),
    InvoiceStatus.SENT: frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED}),
    InvoiceStatus.PAID: frozenset(),
    InvoiceStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: frozenset[InvoiceStatus] = frozenset({
    InvoiceStatus.PAID, InvoiceStatus.CANCELLED,
})


@dataclass(frozen=True)
class StatusTransition:
    """Validated status change. The shell copies these fields onto the row."""
    previous: InvoiceStatus
    target: InvoiceStatus
    changed_at: datetime
    paid_at: datetime | None = None


def stored_status(status: InvoiceStatus | str) -> InvoiceStatus:
    """Normalize a persisted status value. Legacy OVERDUE reads as SENT."""
    parsed = InvoiceStatus(status)
    if parsed is InvoiceStatus.OVERDUE:
        return InvoiceStatus.SENT
    return parsed


def is_overdue(status: InvoiceStatus | str, due_date: date, now: datetime) -> bool:
    return stored_status(status) is InvoiceStatus.SENT and now.date() > due_date


def effective_status(
    status: InvoiceStatus | str, due_date: date, now: datetime,
) -> InvoiceStatus:
    """Status as shown to users: SENT past its due date reads as OVERDUE."""
    if is_overdue(status, due_date, now):
        return InvoiceStatus.OVERDUE
    return stored_status(status)


def transition_invoice_status(
    invoice: InvoiceLike, target: InvoiceStatus | str, now: datetime,
) -> StatusTransition:
    """Validate invoice.status -> target. Pure — returns the change or raises."""
    current = stored_status(invoice.status)
    try:
        wanted = InvoiceStatus(target)
    except ValueError:
        raise InvalidTransitionError(
            current.value, str(target), "unknown status",
        )

    if wanted is InvoiceStatus.OVERDUE:
        raise InvalidTransitionError(
            current.value, wanted.value,
            "overdue is derived from the due date and cannot be set",
        )
    if current in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            current.value, wanted.value, f"{current.value} is a terminal status",
        )
    if wanted not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransitionError(current.value, wanted.value)

    if wanted is InvoiceStatus.SENT:
        if not invoice.items:
            raise InvalidTransitionError(
                current.value, wanted.value, "invoice has no line items",
            )
        if invoice.client_id is None:
            raise InvalidTransitionError(
                current.value, wanted.value, "invoice has no client",
            )

    return StatusTransition(
        previous=current,
        target=wanted,
        changed_at=now,
        paid_at=now if wanted is InvoiceStatus.PAID else None,
    )


def ensure_editable(status: InvoiceStatus | str) -> None:
    """Rule: items, tax and discount are frozen once an invoice leaves DRAFT."""
    current = stored_status(status)
    if current is not InvoiceStatus.DRAFT:
        raise InvalidTransitionError(
            current.value, InvoiceStatus.DRAFT.value,
            "only draft invoices can be edited",
        )
