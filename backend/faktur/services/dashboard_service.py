"""Dashboard Service — loads invoices and feeds the pure aggregations.

Invariants:
    - Every snapshot carries a total recomputed from items, never the cached column
    - Snapshot status is the effective status at `now` (overdue projected)
    - Cached-total drift is logged as a WARNING; it never changes the numbers shown
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.core.dashboard_stats import (
    InvoiceSnapshot, compute_dashboard_stats, revenue_over_time, status_distribution,
)
from faktur.core.invoice_status import effective_status
from faktur.core.invoice_totals import compute_invoice_totals, totals_match
from faktur.models.client import Client
from faktur.models.invoice import Invoice

logger = logging.getLogger(__name__)


class DashboardService:
    """Dashboard read models."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def stats(self, now: datetime) -> dict:
        return compute_dashboard_stats(await self._snapshots(now))

    async def revenue(self, now: datetime, months: int) -> list[dict]:
        return revenue_over_time(await self._snapshots(now), now, months)

    async def status_breakdown(self, now: datetime) -> list[dict]:
        return status_distribution(await self._snapshots(now))

    async def recent_activity(self, now: datetime, limit: int = 10) -> list[dict]:
        result = await self.db.execute(
            select(Invoice, Client.name)
            .join(Client, Invoice.client_id == Client.id)
            .order_by(Invoice.updated_at.desc())
            .limit(limit),
        )
        return [
            {
                "id": invoice.id,
                "invoice_number": invoice.invoice_number,
                "status": effective_status(invoice.status, invoice.due_date, now),
                "total": self._recompute(invoice).total,
                "issue_date": invoice.issue_date,
                "updated_at": invoice.updated_at,
                "client_name": client_name,
            }
            for invoice, client_name in result.all()
        ]

    async def _snapshots(self, now: datetime) -> list[InvoiceSnapshot]:
        result = await self.db.execute(select(Invoice))
        return [
            InvoiceSnapshot(
                status=effective_status(invoice.status, invoice.due_date, now),
                total=self._recompute(invoice).total,
                amount_paid=invoice.amount_paid,
                issue_date=invoice.issue_date,
            )
            for invoice in result.scalars().all()
        ]

    @staticmethod
    def _recompute(invoice: Invoice):
        totals = compute_invoice_totals(
            invoice.items, invoice.tax_rate,
            invoice.discount_type, invoice.discount_value,
        )
        if not totals_match(invoice, totals):
            logger.warning(
                f"Cached totals for invoice {invoice.invoice_number} differ from "
                f"recomputed values (cached total {invoice.total}, recomputed {totals.total})",
                extra={"invoice_id": invoice.id},
            )
        return totals
