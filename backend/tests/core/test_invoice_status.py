"""Tests for the invoice status state machine — pure transition rules."""

from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from faktur.core.domain_types import InvoiceStatus
from faktur.core.errors import InvalidTransitionError
from faktur.core.invoice_status import (
    effective_status, ensure_editable, is_overdue, stored_status,
    transition_invoice_status,
)

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


def _invoice(status="draft", items=("line",), client_id="c-1"):
    return SimpleNamespace(status=status, items=list(items), client_id=client_id)


@pytest.mark.parametrize("current, target", [
    ("draft", "draft"),
    ("draft", "sent"),
    ("draft", "cancelled"),
    ("sent", "paid"),
    ("sent", "cancelled"),
])
def test_allowed_transitions(current, target):
    change = transition_invoice_status(_invoice(current), target, NOW)
    assert change.previous is InvoiceStatus(current)
    assert change.target is InvoiceStatus(target)
    assert change.changed_at == NOW


@pytest.mark.parametrize("current, target", [
    ("draft", "paid"),
    ("sent", "draft"),
    ("sent", "sent"),
    ("paid", "sent"),
    ("paid", "cancelled"),
    ("cancelled", "draft"),
    ("cancelled", "sent"),
])
def test_rejected_transitions(current, target):
    with pytest.raises(InvalidTransitionError) as exc_info:
        transition_invoice_status(_invoice(current), target, NOW)
    assert exc_info.value.current == current
    assert exc_info.value.target == target
    assert exc_info.value.http_status == 409


def test_terminal_states_name_the_reason():
    with pytest.raises(InvalidTransitionError) as exc_info:
        transition_invoice_status(_invoice("paid"), "sent", NOW)
    assert exc_info.value.reason == "paid is a terminal status"


def test_paid_records_paid_at():
    change = transition_invoice_status(_invoice("sent"), InvoiceStatus.PAID, NOW)
    assert change.paid_at == NOW


def test_other_transitions_leave_paid_at_empty():
    assert transition_invoice_status(_invoice(), "sent", NOW).paid_at is None


def test_overdue_is_never_a_target():
    with pytest.raises(InvalidTransitionError) as exc_info:
        transition_invoice_status(_invoice("sent"), "overdue", NOW)
    assert exc_info.value.target == "overdue"


def test_unknown_target_is_rejected():
    with pytest.raises(InvalidTransitionError) as exc_info:
        transition_invoice_status(_invoice(), "archived", NOW)
    assert exc_info.value.reason == "unknown status"


def test_sending_requires_items():
    with pytest.raises(InvalidTransitionError) as exc_info:
        transition_invoice_status(_invoice(items=()), "sent", NOW)
    assert "no line items" in exc_info.value.message


def test_sending_requires_client():
    with pytest.raises(InvalidTransitionError):
        transition_invoice_status(_invoice(client_id=None), "sent", NOW)


def test_legacy_overdue_reads_as_sent():
    assert stored_status("overdue") is InvoiceStatus.SENT
    change = transition_invoice_status(_invoice("overdue"), "paid", NOW)
    assert change.previous is InvoiceStatus.SENT


def test_effective_status_projects_overdue_after_due_date():
    assert effective_status("sent", date(2025, 3, 14), NOW) is InvoiceStatus.OVERDUE
    assert is_overdue("sent", date(2025, 3, 14), NOW)


def test_due_today_is_not_overdue():
    assert effective_status("sent", date(2025, 3, 15), NOW) is InvoiceStatus.SENT


@pytest.mark.parametrize("status", ["draft", "paid", "cancelled"])
def test_only_sent_invoices_become_overdue(status):
    assert effective_status(status, date(2020, 1, 1), NOW) is InvoiceStatus(status)


def test_paying_an_overdue_invoice_is_allowed():
    invoice = _invoice("sent")
    assert effective_status(invoice.status, date(2025, 1, 1), NOW) is InvoiceStatus.OVERDUE
    assert transition_invoice_status(invoice, "paid", NOW).target is InvoiceStatus.PAID


def test_ensure_editable_only_for_drafts():
    ensure_editable("draft")
    for status in ("sent", "paid", "cancelled"):
        with pytest.raises(InvalidTransitionError):
            ensure_editable(status)
