"""InvoiceItem ORM — one priced line on an invoice.

Invariants:
    - Always belongs to an Invoice (invoice_id FK, ON DELETE CASCADE)
    - amount = round2(quantity * rate), written by the service from compute_invoice_totals
    - position preserves insertion order for display and export
"""

import uuid
from decimal import Decimal

from sqlalchemy import Integer, Text, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from faktur.db.base import Base


class InvoiceItem(Base):
    """Line item entity."""
    __tablename__ = "invoice_items"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    invoice_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), nullable=False)
    rate: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    invoice: Mapped["Invoice"] = relationship(
        "Invoice", back_populates="items",
    )
