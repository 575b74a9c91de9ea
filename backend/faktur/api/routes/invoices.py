"""Invoice Routes — CRUD, status changes, totals preview and document data.

Invariants:
    - Every response carries recomputed totals and the effective status at get_now()
    - /calculate is side-effect free and rejects the same inputs as persistence
    - Static paths (/calculate, /next-number) are declared before /{invoice_id}
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from faktur.api.dependencies import get_invoice_service, get_now
from faktur.core.domain_types import InvoiceStatus
from faktur.core.invoice_totals import compute_invoice_totals
from faktur.schemas.business_profile import BusinessProfileResponse
from faktur.schemas.client import ClientResponse
from faktur.schemas.invoice import (
    InvoiceCreate, InvoiceDocument, InvoiceResponse, InvoiceSummary,
    InvoiceUpdate, NextNumberResponse, StatusChangeRequest,
    TotalsPreviewRequest, TotalsResponse,
)
from faktur.services.invoice_service import InvoiceService

router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


@router.get("", response_model=list[InvoiceSummary])
async def list_invoices(
    status_filter: InvoiceStatus | None = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: InvoiceService = Depends(get_invoice_service),
    now: datetime = Depends(get_now),
):
    return await service.list_invoices(now, status_filter, limit, offset)


@router.post("/calculate", response_model=TotalsResponse)
async def calculate_totals(body: TotalsPreviewRequest):
    """Preview totals for an unsaved invoice form."""
    totals = compute_invoice_totals(
        body.items, body.tax_rate, body.discount_type, body.discount_value,
    )
    return TotalsResponse.from_totals(totals)


@router.get("/next-number", response_model=NextNumberResponse)
async def next_number(service: InvoiceService = Depends(get_invoice_service)):
    return NextNumberResponse(invoice_number=await service.next_number())


@router.post(
    "", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    body: InvoiceCreate,
    service: InvoiceService = Depends(get_invoice_service),
    now: datetime = Depends(get_now),
):
    invoice = await service.create_invoice(body, now)
    return InvoiceResponse.from_invoice(invoice, now)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: UUID,
    service: InvoiceService = Depends(get_invoice_service),
    now: datetime = Depends(get_now),
):
    return InvoiceResponse.from_invoice(await service.get_invoice(invoice_id), now)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
async def update_invoice(
    invoice_id: UUID,
    body: InvoiceUpdate,
    service: InvoiceService = Depends(get_invoice_service),
    now: datetime = Depends(get_now),
):
    invoice = await service.update_invoice(invoice_id, body, now)
    return InvoiceResponse.from_invoice(invoice, now)


@router.post("/{invoice_id}/status", response_model=InvoiceResponse)
async def change_status(
    invoice_id: UUID,
    body: StatusChangeRequest,
    service: InvoiceService = Depends(get_invoice_service),
    now: datetime = Depends(get_now),
):
    invoice = await service.change_status(invoice_id, body.status, now)
    return InvoiceResponse.from_invoice(invoice, now)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: UUID, service: InvoiceService = Depends(get_invoice_service),
):
    await service.delete_invoice(invoice_id)


@router.get("/{invoice_id}/document", response_model=InvoiceDocument)
async def invoice_document(
    invoice_id: UUID,
    service: InvoiceService = Depends(get_invoice_service),
    now: datetime = Depends(get_now),
):
    """Data for rendering one invoice; layout happens client-side."""
    document = await service.build_document(invoice_id)
    profile = document["business_profile"]
    return InvoiceDocument(
        invoice=InvoiceResponse.from_invoice(document["invoice"], now),
        client=ClientResponse.model_validate(document["client"]),
        business_profile=(
            BusinessProfileResponse.model_validate(profile) if profile else None
        ),
    )
