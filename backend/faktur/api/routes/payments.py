"""Payment Routes — record and remove manual payments on an invoice."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.api.dependencies import get_now
from faktur.infrastructure.database import get_db
from faktur.schemas.payment import PaymentCreate, PaymentResponse
from faktur.services.payment_service import PaymentService

router = APIRouter(prefix="/api/v1", tags=["payments"])


@router.get(
    "/invoices/{invoice_id}/payments", response_model=list[PaymentResponse],
)
async def list_payments(invoice_id: UUID, db: AsyncSession = Depends(get_db)):
    return await PaymentService(db).list_payments(invoice_id)


@router.post(
    "/invoices/{invoice_id}/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_payment(
    invoice_id: UUID,
    body: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    return await PaymentService(db).record_payment(invoice_id, body, now)


@router.delete("/payments/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: UUID,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    await PaymentService(db).delete_payment(payment_id, now)
