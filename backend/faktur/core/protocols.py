"""Boundary Protocols — structural contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - ORM rows, pydantic schemas and plain dataclasses all satisfy these contracts

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Read-only attributes only: core functions never mutate what they receive
"""

from datetime import date
from decimal import Decimal
from typing import Protocol, Sequence
from uuid import UUID


class PricedLine(Protocol):
    """Anything with a quantity and a unit rate — invoice items, preview rows."""
    quantity: Decimal
    rate: Decimal


class InvoiceLike(Protocol):
    """Structural contract for invoices passed to the status state machine.

    Avoids coupling the core to the ORM model while giving mypy
    real type information (unlike Any).
    """
    status: str
    due_date: date
    client_id: UUID | None
    items: Sequence[PricedLine]
