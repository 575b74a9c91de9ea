"""Payment Service — manual payment recording against sent invoices.

Invariants:
    - Balance rules come from core/payments.py; totals are recomputed, not read from cache
    - A payment that settles the balance moves SENT -> PAID through the state
      machine, in the same commit as the payment row
    - Removing a payment never reopens a PAID invoice (terminal)
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.core.domain_types import InvoiceStatus
from faktur.core.errors import InvalidTransitionError, NotFoundError
from faktur.core.invoice_status import transition_invoice_status
from faktur.core.invoice_totals import compute_invoice_totals
from faktur.core.payments import apply_payment, revert_payment
from faktur.models.invoice import Invoice
from faktur.models.payment import Payment
from faktur.schemas.payment import PaymentCreate
from faktur.services.invoice_service import InvoiceService

logger = logging.getLogger(__name__)


class PaymentService:
    """Payment persistence and invoice balance updates."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.invoices = InvoiceService(db)

    async def list_payments(self, invoice_id: UUID) -> list[Payment]:
        await self.invoices.get_invoice(invoice_id)
        result = await self.db.execute(
            select(Payment)
            .where(Payment.invoice_id == invoice_id)
            .order_by(Payment.payment_date.desc(), Payment.created_at.desc()),
        )
        return list(result.scalars().all())

    async def record_payment(
        self, invoice_id: UUID, data: PaymentCreate, now: datetime,
    ) -> Payment:
        invoice = await self.invoices.get_invoice(invoice_id)
        outcome = apply_payment(
            invoice.status, _recomputed_total(invoice),
            invoice.amount_paid, data.amount,
        )

        payment = Payment(
            amount=data.amount,
            payment_date=data.payment_date,
            payment_method=data.payment_method.value,
            reference=data.reference,
            notes=data.notes,
            created_at=now,
        )
        invoice.payments.append(payment)
        invoice.amount_paid = outcome.amount_paid
        invoice.updated_at = now
        if outcome.settled:
            change = transition_invoice_status(invoice, InvoiceStatus.PAID, now)
            invoice.status = change.target.value
            invoice.paid_at = change.paid_at
        await self.db.commit()

        logger.info(
            f"Payment of {data.amount} recorded"
            + (" (invoice settled)" if outcome.settled else ""),
            extra={"invoice_id": invoice.id, "payment_id": payment.id},
        )
        return payment

    async def delete_payment(self, payment_id: UUID, now: datetime) -> None:
        result = await self.db.execute(
            select(Payment).where(Payment.id == payment_id),
        )
        payment = result.scalar_one_or_none()
        if not payment:
            raise NotFoundError("Payment", str(payment_id))

        invoice = await self.invoices.get_invoice(payment.invoice_id)
        try:
            outcome = revert_payment(
                invoice.status, _recomputed_total(invoice),
                invoice.amount_paid, payment.amount,
            )
        except InvalidTransitionError as exc:
            exc.context.invoice_id = str(invoice.id)
            raise

        invoice.payments.remove(payment)
        invoice.amount_paid = outcome.amount_paid
        invoice.updated_at = now
        await self.db.commit()
        logger.info(
            "Payment deleted",
            extra={"invoice_id": invoice.id, "payment_id": payment_id},
        )


def _recomputed_total(invoice: Invoice) -> Decimal:
    return compute_invoice_totals(
        invoice.items, invoice.tax_rate,
        invoice.discount_type, invoice.discount_value,
    ).total
