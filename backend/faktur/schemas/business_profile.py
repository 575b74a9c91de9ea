"""Business Profile Schemas — sender details shown on invoice documents.

Invariants:
    - company_name 2-200 chars, email lowercased
    - Bank identifiers uppercased with spaces removed (IBAN, SWIFT, VAT)
"""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


_SWIFT_PATTERN = re.compile(r"^[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?$")
_IBAN_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]+$")


class BusinessProfileUpsert(BaseModel):
    company_name: str = Field(min_length=2, max_length=200)
    email: str = Field(min_length=3, max_length=255)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    tax_id: str | None = Field(None, max_length=50)
    vat_number: str | None = Field(None, max_length=15)
    logo: str | None = None
    website: str | None = Field(None, max_length=500)
    bank_name: str | None = Field(None, max_length=200)
    bank_account_number: str | None = Field(None, max_length=34)
    bank_routing_number: str | None = Field(None, pattern=r"^\d{9}$")
    swift_code: str | None = None
    iban: str | None = None

    @field_validator("company_name")
    @classmethod
    def strip_company_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("vat_number", "swift_code", "iban")
    @classmethod
    def normalize_identifier(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = re.sub(r"\s", "", v).upper()
        return v or None

    @field_validator("swift_code")
    @classmethod
    def check_swift(cls, v: str | None) -> str | None:
        if v and not _SWIFT_PATTERN.match(v):
            raise ValueError("SWIFT code must be 8 or 11 characters (e.g., BOFAUS3N)")
        return v

    @field_validator("iban")
    @classmethod
    def check_iban(cls, v: str | None) -> str | None:
        if v and (not _IBAN_PATTERN.match(v) or not 15 <= len(v) <= 34):
            raise ValueError("IBAN must be 15-34 characters, starting with 2 letters and 2 digits")
        return v


class BusinessProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    company_name: str
    email: str
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    tax_id: str | None = None
    vat_number: str | None = None
    logo: str | None = None
    website: str | None = None
    bank_name: str | None = None
    bank_account_number: str | None = None
    bank_routing_number: str | None = None
    swift_code: str | None = None
    iban: str | None = None
    updated_at: datetime
