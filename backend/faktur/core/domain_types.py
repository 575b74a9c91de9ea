"""Domain Types — enums for invoice lifecycle, discounts and payment channels.

Invariants:
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON and to DB string columns without custom encoders
"""

from enum import Enum


class InvoiceStatus(str, Enum):
    """Invoice lifecycle states — maps to DB `status` column.

    OVERDUE is a read-time projection over SENT; it is listed here because
    views and dashboards report it, not because transitions write it.
    """
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class DiscountType(str, Enum):
    """How discount_value is interpreted."""
    NONE = "none"
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class PaymentMethod(str, Enum):
    """Recorded payment channels (manual recording only)."""
    CASH = "cash"
    CHECK = "check"
    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    OTHER = "other"
