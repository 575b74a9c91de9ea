"""Shared route dependencies — clock and configured services.

Design Decisions:
    - The clock is a dependency so overdue projection and timestamps are
      deterministic under test (dependency_overrides[get_now])
"""

from datetime import datetime, timezone

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from faktur.config import get_settings
from faktur.infrastructure.database import get_db
from faktur.services.invoice_service import InvoiceService


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_invoice_service(db: AsyncSession = Depends(get_db)) -> InvoiceService:
    settings = get_settings()
    return InvoiceService(
        db,
        number_prefix=settings.invoice_number_prefix,
        default_currency=settings.default_currency,
    )
