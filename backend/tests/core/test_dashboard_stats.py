"""Tests for dashboard aggregations over invoice snapshots."""

from datetime import date, datetime, timezone
from decimal import Decimal

from faktur.core.dashboard_stats import (
    InvoiceSnapshot, compute_dashboard_stats, revenue_over_time, status_distribution,
)
from faktur.core.domain_types import InvoiceStatus

NOW = datetime(2025, 3, 15, tzinfo=timezone.utc)


def _snap(status, total, paid="0", issued=date(2025, 3, 1)):
    return InvoiceSnapshot(
        status=InvoiceStatus(status), total=Decimal(total),
        amount_paid=Decimal(paid), issue_date=issued,
    )


SNAPSHOTS = [
    _snap("paid", "121.51", "121.51", date(2025, 1, 10)),
    _snap("paid", "100.00", "100.00", date(2025, 3, 2)),
    _snap("sent", "200.00", "50.00"),
    _snap("overdue", "80.00", "0", date(2025, 2, 1)),
    _snap("draft", "10.00"),
    _snap("cancelled", "999.00"),
]


def test_empty_input_gives_zeroes():
    stats = compute_dashboard_stats([])
    assert stats["total_revenue"] == Decimal("0.00")
    assert stats["outstanding_amount"] == Decimal("0.00")
    assert stats["total_invoices"] == 0


def test_headline_numbers():
    stats = compute_dashboard_stats(SNAPSHOTS)
    assert stats["total_revenue"] == Decimal("221.51")
    # 150.00 (sent) + 80.00 (overdue) + 10.00 (draft); cancelled excluded
    assert stats["outstanding_amount"] == Decimal("240.00")
    assert stats["total_invoices"] == 6
    assert stats["paid_invoices_count"] == 2
    assert stats["unpaid_invoices_count"] == 3
    assert stats["overdue_invoices_count"] == 1
    assert stats["draft_invoices_count"] == 1


def test_revenue_over_time_buckets_paid_invoices_by_issue_month():
    points = revenue_over_time(SNAPSHOTS, NOW, months=3)
    assert points == [
        {"month": "Jan 2025", "revenue": Decimal("121.51")},
        {"month": "Feb 2025", "revenue": Decimal("0.00")},
        {"month": "Mar 2025", "revenue": Decimal("100.00")},
    ]


def test_revenue_window_crosses_year_boundary():
    points = revenue_over_time([], datetime(2025, 1, 5, tzinfo=timezone.utc), months=2)
    assert [p["month"] for p in points] == ["Dec 2024", "Jan 2025"]


def test_status_distribution_in_lifecycle_order():
    buckets = status_distribution(SNAPSHOTS)
    assert [b["status"] for b in buckets] == [
        "draft", "sent", "paid", "overdue", "cancelled",
    ]
    paid = next(b for b in buckets if b["status"] == "paid")
    assert paid == {"status": "paid", "count": 2, "total": Decimal("221.51")}


def test_status_distribution_skips_empty_statuses():
    buckets = status_distribution([_snap("draft", "5.00")])
    assert buckets == [{"status": "draft", "count": 1, "total": Decimal("5.00")}]
