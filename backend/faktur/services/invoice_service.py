"""Invoice Service — compute-then-persist orchestration for invoices.

Invariants:
    - Cached totals (subtotal, discount_amount, tax_amount, total, item amounts)
      are overwritten from compute_invoice_totals on every create/edit — never
      carried over from a previous write
    - Edits are rejected unless the stored status is DRAFT (ensure_editable)
    - Status changes go through transition_invoice_status; OVERDUE is never written
    - Each public mutation ends in exactly one commit

Design Decisions:
    - Items are replaced wholesale on edit (delete-orphan), positions renumbered 0..n-1
    - The client must exist when an invoice is created or re-pointed (NotFoundError)
    - build_document returns ORM rows; the route serializes them through
      InvoiceResponse.from_invoice, so documents carry recomputed totals
"""

import logging
from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.core.domain_types import InvoiceStatus
from faktur.core.errors import ErrorContext, InvalidTransitionError, NotFoundError
from faktur.core.invoice_numbering import DEFAULT_PREFIX, next_invoice_number
from faktur.core.invoice_status import (
    effective_status, ensure_editable, transition_invoice_status,
)
from faktur.core.invoice_totals import InvoiceTotals, compute_invoice_totals
from faktur.models.business_profile import BusinessProfile
from faktur.models.client import Client
from faktur.models.invoice import Invoice
from faktur.models.invoice_item import InvoiceItem
from faktur.schemas.invoice import InvoiceCreate, InvoiceItemIn

logger = logging.getLogger(__name__)


class InvoiceService:
    """Invoice persistence around the pure totals and status rules."""

    def __init__(
        self,
        db: AsyncSession,
        number_prefix: str = DEFAULT_PREFIX,
        default_currency: str = "USD",
    ):
        self.db = db
        self.number_prefix = number_prefix
        self.default_currency = default_currency

    # ─── Queries ─────────────────────────────────────────────────

    async def get_invoice(self, invoice_id: UUID) -> Invoice:
        """Get invoice (items and payments eager-loaded) or raise NotFoundError."""
        result = await self.db.execute(
            select(Invoice).where(Invoice.id == invoice_id),
        )
        invoice = result.scalar_one_or_none()
        if not invoice:
            raise NotFoundError("Invoice", str(invoice_id))
        return invoice

    async def list_invoices(
        self,
        now: datetime,
        status: InvoiceStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[dict]:
        """List invoices with client info; status filter applies to the EFFECTIVE status."""
        query = (
            select(Invoice, Client.name, Client.email)
            .join(Client, Invoice.client_id == Client.id)
            .order_by(Invoice.created_at.desc(), Invoice.id)
            .limit(limit)
            .offset(offset)
        )
        if status is not None:
            query = query.where(*_status_predicates(status, now))
        result = await self.db.execute(query)
        rows = []
        for invoice, client_name, client_email in result.all():
            shown = effective_status(invoice.status, invoice.due_date, now)
            totals = self._totals(invoice)
            rows.append({
                "id": invoice.id,
                "invoice_number": invoice.invoice_number,
                "status": shown,
                "issue_date": invoice.issue_date,
                "due_date": invoice.due_date,
                "total": totals.total,
                "amount_paid": invoice.amount_paid,
                "client_id": invoice.client_id,
                "client_name": client_name,
                "client_email": client_email,
                "created_at": invoice.created_at,
            })
        return rows

    async def next_number(self) -> str:
        result = await self.db.execute(select(Invoice.invoice_number))
        return next_invoice_number(result.scalars().all(), self.number_prefix)

    async def build_document(self, invoice_id: UUID) -> dict:
        """Invoice + client + business profile, ready for a PDF/HTML renderer."""
        invoice = await self.get_invoice(invoice_id)
        client = await self._get_client(invoice.client_id)
        result = await self.db.execute(select(BusinessProfile).limit(1))
        return {
            "invoice": invoice,
            "client": client,
            "business_profile": result.scalar_one_or_none(),
        }

    # ─── Mutations ───────────────────────────────────────────────

    async def create_invoice(self, data: InvoiceCreate, now: datetime) -> Invoice:
        """Create a DRAFT invoice with computed totals and the next number."""
        await self._get_client(data.client_id)
        invoice = Invoice(
            client_id=data.client_id,
            invoice_number=await self.next_number(),
            status=InvoiceStatus.DRAFT.value,
            issue_date=data.issue_date,
            due_date=data.due_date,
            currency=(data.currency or self.default_currency).upper(),
            notes=data.notes,
            terms=data.terms,
            amount_paid=0,
            created_at=now,
            updated_at=now,
        )
        self._apply_pricing(invoice, data)
        self.db.add(invoice)
        await self.db.commit()
        logger.info(
            f"Invoice {invoice.invoice_number} created",
            extra={"invoice_id": invoice.id, "client_id": invoice.client_id},
        )
        return invoice

    async def update_invoice(
        self, invoice_id: UUID, data: InvoiceCreate, now: datetime,
    ) -> Invoice:
        """Replace a draft invoice's fields and items, recomputing totals."""
        invoice = await self.get_invoice(invoice_id)
        ensure_editable(invoice.status)
        if data.client_id != invoice.client_id:
            await self._get_client(data.client_id)

        invoice.client_id = data.client_id
        invoice.issue_date = data.issue_date
        invoice.due_date = data.due_date
        if data.currency:
            invoice.currency = data.currency.upper()
        invoice.notes = data.notes
        invoice.terms = data.terms
        invoice.updated_at = now
        self._apply_pricing(invoice, data)
        await self.db.commit()
        logger.info(
            f"Invoice {invoice.invoice_number} updated",
            extra={"invoice_id": invoice.id},
        )
        return invoice

    async def change_status(
        self, invoice_id: UUID, target: InvoiceStatus | str, now: datetime,
    ) -> Invoice:
        """Apply a validated status transition and persist it."""
        invoice = await self.get_invoice(invoice_id)
        try:
            change = transition_invoice_status(invoice, target, now)
        except InvalidTransitionError as exc:
            exc.context.invoice_id = str(invoice_id)
            raise
        if change.target is InvoiceStatus.SENT:
            await self._get_client(invoice.client_id)

        invoice.status = change.target.value
        invoice.updated_at = change.changed_at
        if change.paid_at is not None:
            invoice.paid_at = change.paid_at
        await self.db.commit()
        logger.info(
            f"Invoice {invoice.invoice_number} status changed",
            extra={
                "invoice_id": invoice.id,
                "status_from": change.previous.value,
                "status_to": change.target.value,
            },
        )
        return invoice

    async def delete_invoice(self, invoice_id: UUID) -> None:
        """Delete an invoice; items and payments cascade."""
        invoice = await self.get_invoice(invoice_id)
        await self.db.delete(invoice)
        await self.db.commit()
        logger.info("Invoice deleted", extra={"invoice_id": invoice_id})

    # ─── Helpers ─────────────────────────────────────────────────

    def _apply_pricing(self, invoice: Invoice, data: InvoiceCreate) -> InvoiceTotals:
        """Compute totals from the submitted items and write them as the cache."""
        totals = compute_invoice_totals(
            data.items, data.tax_rate, data.discount_type, data.discount_value,
        )
        invoice.tax_rate = data.tax_rate
        invoice.discount_type = data.discount_type.value
        invoice.discount_value = data.discount_value
        invoice.items = _build_items(data.items, totals)
        invoice.subtotal = totals.subtotal
        invoice.discount_amount = totals.discount_amount
        invoice.tax_amount = totals.tax_amount
        invoice.total = totals.total
        return totals

    @staticmethod
    def _totals(invoice: Invoice) -> InvoiceTotals:
        return compute_invoice_totals(
            invoice.items, invoice.tax_rate,
            invoice.discount_type, invoice.discount_value,
        )

    async def _get_client(self, client_id: UUID) -> Client:
        result = await self.db.execute(
            select(Client).where(Client.id == client_id),
        )
        client = result.scalar_one_or_none()
        if not client:
            raise NotFoundError(
                "Client", str(client_id), ErrorContext(client_id=str(client_id)),
            )
        return client


def _status_predicates(status: InvoiceStatus, now: datetime) -> list:
    """SQL filter matching effective_status: OVERDUE is a SENT row past due."""
    today = now.date()
    if status is InvoiceStatus.OVERDUE:
        return [
            Invoice.status == InvoiceStatus.SENT.value, Invoice.due_date < today,
        ]
    if status is InvoiceStatus.SENT:
        return [
            Invoice.status == InvoiceStatus.SENT.value, Invoice.due_date >= today,
        ]
    return [Invoice.status == status.value]


def _build_items(
    items: Sequence[InvoiceItemIn], totals: InvoiceTotals,
) -> list[InvoiceItem]:
    return [
        InvoiceItem(
            description=item.description,
            quantity=item.quantity,
            rate=item.rate,
            amount=amount,
            position=position,
        )
        for position, (item, amount) in enumerate(zip(items, totals.amounts))
    ]
