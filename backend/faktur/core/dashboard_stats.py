"""Dashboard Stats — pure aggregation of invoice snapshots for the dashboard.

Invariants:
    - Inputs are InvoiceSnapshot values built by the shell (no IO, no DB)
    - snapshot.status is the EFFECTIVE status (overdue already projected)
    - snapshot.total is freshly recomputed from items, never the cached column
    - Every money figure is accumulated with money_add (cent rounding per step)
    - Never raises on empty input — counts default to 0, money to 0.00

Design Decisions:
    - Revenue counts PAID invoices only; outstanding sums total - amount_paid over
      everything that is neither PAID nor CANCELLED (drafts included)
    - Months bucketed by issue date as "Mon YYYY" labels, oldest first
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Sequence

from faktur.core.domain_types import InvoiceStatus
from faktur.core.money import ZERO, money_add, money_subtract


_SETTLED_OR_VOID = frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED})


@dataclass(frozen=True)
class InvoiceSnapshot:
    status: InvoiceStatus
    total: Decimal
    amount_paid: Decimal
    issue_date: date


def compute_dashboard_stats(snapshots: Sequence[InvoiceSnapshot]) -> dict:
    """Compute headline numbers. Pure, no IO."""
    total_revenue = ZERO
    outstanding = ZERO
    for snap in snapshots:
        if snap.status is InvoiceStatus.PAID:
            total_revenue = money_add(total_revenue, snap.total)
        elif snap.status not in _SETTLED_OR_VOID:
            outstanding = money_add(
                outstanding, money_subtract(snap.total, snap.amount_paid),
            )

    def count(status: InvoiceStatus) -> int:
        return sum(1 for s in snapshots if s.status is status)

    return {
        "total_revenue": total_revenue,
        "outstanding_amount": outstanding,
        "total_invoices": len(snapshots),
        "paid_invoices_count": count(InvoiceStatus.PAID),
        "unpaid_invoices_count": sum(
            1 for s in snapshots if s.status not in _SETTLED_OR_VOID
        ),
        "overdue_invoices_count": count(InvoiceStatus.OVERDUE),
        "draft_invoices_count": count(InvoiceStatus.DRAFT),
    }


def revenue_over_time(
    snapshots: Sequence[InvoiceSnapshot], now: datetime, months: int = 6,
) -> list[dict]:
    """Monthly paid revenue for the last `months` months, oldest first."""
    buckets = [_shift_month(now.date(), -offset) for offset in range(months - 1, -1, -1)]
    revenue = {bucket: ZERO for bucket in buckets}
    for snap in snapshots:
        if snap.status is not InvoiceStatus.PAID:
            continue
        key = (snap.issue_date.year, snap.issue_date.month)
        if key in revenue:
            revenue[key] = money_add(revenue[key], snap.total)
    return [
        {"month": date(year, month, 1).strftime("%b %Y"), "revenue": revenue[(year, month)]}
        for year, month in buckets
    ]


def status_distribution(snapshots: Sequence[InvoiceSnapshot]) -> list[dict]:
    """Count and total per effective status, in lifecycle order; empty statuses omitted."""
    result = []
    for status in InvoiceStatus:
        matching = [s for s in snapshots if s.status is status]
        if not matching:
            continue
        total = ZERO
        for snap in matching:
            total = money_add(total, snap.total)
        result.append({"status": status.value, "count": len(matching), "total": total})
    return result


def _shift_month(day: date, offset: int) -> tuple[int, int]:
    index = day.year * 12 + (day.month - 1) + offset
    return index // 12, index % 12 + 1
