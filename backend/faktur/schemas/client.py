"""Client Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - email is stripped and lowercased before it reaches the DB (deletion token)
    - Optional text fields: blank strings normalized to None
    - ClientDeleteRequest carries the retyped email; matching happens in core

Design Decisions:
    - Regex patterns over extra validator packages: same rules the UI enforces
"""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_PATTERN = re.compile(r"^[\d\s\-+()]+$")


class ClientCreate(BaseModel):
    """Client creation/update — validates contact fields."""
    name: str = Field(min_length=2, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=200)
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    tax_id: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("name must be at least 2 characters long")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("email must be a valid email address")
        return v

    @field_validator(
        "phone", "company", "address", "city", "state", "country",
        "postal_code", "tax_id", "notes",
    )
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        if v and not _PHONE_PATTERN.match(v):
            raise ValueError(
                "phone can only contain digits, spaces, hyphens, plus signs, and parentheses",
            )
        return v

    @field_validator("tax_id")
    @classmethod
    def check_tax_id(cls, v: str | None) -> str | None:
        if v and len(v) < 5:
            raise ValueError("tax_id must be at least 5 characters if provided")
        return v


class ClientResponse(BaseModel):
    """Client response — public-facing client data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    phone: str | None = None
    company: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    tax_id: str | None = None
    notes: str | None = None
    created_at: datetime


class ClientDeleteRequest(BaseModel):
    """Deletion confirmation — the user retypes the client's email."""
    confirmation_email: str = Field(max_length=255)


class ClientDeleteResponse(BaseModel):
    client_id: UUID
    invoices_deleted: int
    items_deleted: int
    payments_deleted: int
