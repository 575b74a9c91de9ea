"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Client is the aggregate root for invoices; Invoice owns items and payments

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (standard SQLAlchemy pattern)
"""

from faktur.models.client import Client  # noqa: F401
from faktur.models.invoice import Invoice  # noqa: F401
from faktur.models.invoice_item import InvoiceItem  # noqa: F401
from faktur.models.payment import Payment  # noqa: F401
from faktur.models.business_profile import BusinessProfile  # noqa: F401
