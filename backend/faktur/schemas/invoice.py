"""Invoice Schemas — request/response models for invoices, items and totals.

Invariants:
    - InvoiceCreate: 1-100 items, due_date >= issue_date, percentage discount <= 100
    - Money fields are Decimal end to end (serialized as strings)
    - Input precision never exceeds the column scale (quantity 3, rate 4,
      tax_rate 3, discount_value 2), so totals recomputed from stored rows
      equal the totals computed on write
    - Responses always carry RECOMPUTED totals and the EFFECTIVE status

Design Decisions:
    - TotalsPreviewRequest leaves range checks to compute_invoice_totals and
      only enforces precision, so preview and persistence reject the same inputs
    - InvoiceResponse.from_invoice builds from the ORM row + core, keeping
      routes free of arithmetic
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from faktur.core.domain_types import DiscountType, InvoiceStatus
from faktur.core.invoice_status import effective_status
from faktur.core.invoice_totals import InvoiceTotals, compute_invoice_totals
from faktur.core.payments import outstanding_balance
from faktur.schemas.business_profile import BusinessProfileResponse
from faktur.schemas.client import ClientResponse

# Scales of the columns these inputs are stored in
QUANTITY_PLACES = 3
RATE_PLACES = 4
TAX_RATE_PLACES = 3
DISCOUNT_PLACES = 2


class InvoiceItemIn(BaseModel):
    """One line item as submitted by the invoice form."""
    description: str = Field(min_length=1, max_length=500)
    quantity: Decimal = Field(gt=0, le=1_000_000, decimal_places=QUANTITY_PLACES)
    rate: Decimal = Field(ge=0, le=100_000_000, decimal_places=RATE_PLACES)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("description cannot be empty or whitespace")
        return v


class InvoiceCreate(BaseModel):
    """Invoice creation/edit payload."""
    client_id: UUID
    issue_date: date
    due_date: date
    currency: str | None = Field(None, min_length=3, max_length=3)
    tax_rate: Decimal = Field(
        Decimal("0"), ge=0, le=100, decimal_places=TAX_RATE_PLACES,
    )
    discount_type: DiscountType = DiscountType.NONE
    discount_value: Decimal = Field(
        Decimal("0"), ge=0, le=100_000_000, decimal_places=DISCOUNT_PLACES,
    )
    notes: str | None = Field(None, max_length=5000)
    terms: str | None = Field(None, max_length=5000)
    items: list[InvoiceItemIn] = Field(min_length=1, max_length=100)

    @model_validator(mode="after")
    def validate_dates_and_discount(self):
        if self.due_date < self.issue_date:
            raise ValueError("due_date must be on or after issue_date")
        if (
            self.discount_type is DiscountType.PERCENTAGE
            and self.discount_value > 100
        ):
            raise ValueError("percentage discount cannot exceed 100%")
        return self


class InvoiceUpdate(InvoiceCreate):
    """Full replacement of a draft invoice's editable fields."""


class PreviewLine(BaseModel):
    quantity: Decimal = Field(decimal_places=QUANTITY_PLACES)
    rate: Decimal = Field(decimal_places=RATE_PLACES)


class TotalsPreviewRequest(BaseModel):
    """Totals calculator input — range checks left to the core, precision
    checked here so preview and persistence agree."""
    items: list[PreviewLine] = Field(default_factory=list, max_length=100)
    tax_rate: Decimal = Field(Decimal("0"), decimal_places=TAX_RATE_PLACES)
    discount_type: str | None = None
    discount_value: Decimal = Field(Decimal("0"), decimal_places=DISCOUNT_PLACES)


class TotalsResponse(BaseModel):
    amounts: list[Decimal]
    subtotal: Decimal
    discount_amount: Decimal
    taxable_base: Decimal
    tax_amount: Decimal
    total: Decimal

    @classmethod
    def from_totals(cls, totals: InvoiceTotals) -> "TotalsResponse":
        return cls(
            amounts=list(totals.amounts),
            subtotal=totals.subtotal,
            discount_amount=totals.discount_amount,
            taxable_base=totals.taxable_base,
            tax_amount=totals.tax_amount,
            total=totals.total,
        )


class StatusChangeRequest(BaseModel):
    status: InvoiceStatus


class InvoiceItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal
    position: int


class InvoiceResponse(BaseModel):
    """Invoice detail — recomputed totals, effective status, ordered items."""
    id: UUID
    invoice_number: str
    client_id: UUID
    status: InvoiceStatus
    issue_date: date
    due_date: date
    currency: str
    tax_rate: Decimal
    discount_type: DiscountType
    discount_value: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal
    amount_paid: Decimal
    balance_due: Decimal
    notes: str | None = None
    terms: str | None = None
    paid_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    items: list[InvoiceItemResponse]

    @classmethod
    def from_invoice(cls, invoice, now: datetime) -> "InvoiceResponse":
        totals = compute_invoice_totals(
            invoice.items, invoice.tax_rate,
            invoice.discount_type, invoice.discount_value,
        )
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_id=invoice.client_id,
            status=effective_status(invoice.status, invoice.due_date, now),
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            currency=invoice.currency,
            tax_rate=invoice.tax_rate,
            discount_type=invoice.discount_type,
            discount_value=invoice.discount_value,
            subtotal=totals.subtotal,
            discount_amount=totals.discount_amount,
            tax_amount=totals.tax_amount,
            total=totals.total,
            amount_paid=invoice.amount_paid,
            balance_due=outstanding_balance(totals.total, invoice.amount_paid),
            notes=invoice.notes,
            terms=invoice.terms,
            paid_at=invoice.paid_at,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
            items=[InvoiceItemResponse.model_validate(i) for i in invoice.items],
        )


class InvoiceSummary(BaseModel):
    """Invoice list row."""
    id: UUID
    invoice_number: str
    status: InvoiceStatus
    issue_date: date
    due_date: date
    total: Decimal
    amount_paid: Decimal
    client_id: UUID
    client_name: str | None = None
    client_email: str | None = None
    created_at: datetime


class NextNumberResponse(BaseModel):
    invoice_number: str


class InvoiceDocument(BaseModel):
    """Everything a renderer needs to lay out one invoice."""
    invoice: InvoiceResponse
    client: ClientResponse
    business_profile: BusinessProfileResponse | None = None
