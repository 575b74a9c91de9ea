"""Payment Schemas — manual payment recording.

Invariants:
    - amount > 0; upper bound (outstanding balance) checked in core
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from faktur.core.domain_types import PaymentMethod


class PaymentCreate(BaseModel):
    amount: Decimal = Field(gt=0)
    payment_date: date
    payment_method: PaymentMethod
    reference: str | None = Field(None, max_length=200)
    notes: str | None = Field(None, max_length=2000)


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    invoice_id: UUID
    amount: Decimal
    payment_date: date
    payment_method: PaymentMethod
    reference: str | None = None
    notes: str | None = None
    created_at: datetime
