"""Dashboard service — aggregates from recomputed totals and projected statuses."""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from faktur.services.dashboard_service import DashboardService
from faktur.services.invoice_service import InvoiceService

AFTER_DUE = datetime(2025, 4, 2, tzinfo=timezone.utc)


async def test_stats_project_overdue(test_db, sent_invoice):
    stats = await DashboardService(test_db).stats(AFTER_DUE)
    assert stats["total_invoices"] == 1
    assert stats["overdue_invoices_count"] == 1
    assert stats["outstanding_amount"] == Decimal("121.51")
    assert stats["total_revenue"] == Decimal("0.00")


async def test_revenue_counts_paid_invoices(test_db, sent_invoice, now):
    await InvoiceService(test_db).change_status(sent_invoice.id, "paid", now)
    points = await DashboardService(test_db).revenue(now, 2)
    assert points == [
        {"month": "Feb 2025", "revenue": Decimal("0.00")},
        {"month": "Mar 2025", "revenue": Decimal("121.51")},
    ]


async def test_cached_total_drift_is_logged_not_trusted(test_db, sent_invoice, now, caplog):
    sent_invoice.total = Decimal("999.99")
    await test_db.commit()

    with caplog.at_level(logging.WARNING, logger="faktur.services.dashboard_service"):
        buckets = await DashboardService(test_db).status_breakdown(now)

    assert buckets == [{"status": "sent", "count": 1, "total": Decimal("121.51")}]
    assert any("differ from recomputed" in r.getMessage() for r in caplog.records)


async def test_recent_activity_includes_client_name(test_db, sent_invoice, now):
    rows = await DashboardService(test_db).recent_activity(now, limit=5)
    assert len(rows) == 1
    assert rows[0]["client_name"] == "Acme Corp"
    assert rows[0]["invoice_number"] == "INV-00001"
