"""Dashboard Schemas — response shapes for dashboard aggregates."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from faktur.core.domain_types import InvoiceStatus


class DashboardStatsResponse(BaseModel):
    total_revenue: Decimal
    outstanding_amount: Decimal
    total_invoices: int
    paid_invoices_count: int
    unpaid_invoices_count: int
    overdue_invoices_count: int
    draft_invoices_count: int


class RevenuePoint(BaseModel):
    month: str
    revenue: Decimal


class StatusBucket(BaseModel):
    status: InvoiceStatus
    count: int
    total: Decimal


class RecentActivityItem(BaseModel):
    id: UUID
    invoice_number: str
    status: InvoiceStatus
    total: Decimal
    issue_date: date
    updated_at: datetime
    client_name: str | None = None
