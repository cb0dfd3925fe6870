"""Schemas for customer and supplier records."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class CustomerFields(BaseModel):
    company_name: str = Field(min_length=1, max_length=200)
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = "Tripoli"
    country: str = "Libya"
    tax_number: str | None = None
    credit_limit: Decimal = Field(default=Decimal("0"), ge=0)
    payment_terms: int = Field(default=30, ge=0)
    is_active: bool = True


class CustomerCreate(CustomerFields):
    """Payload for registering a customer."""


class CustomerUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""

    company_name: str | None = Field(default=None, min_length=1, max_length=200)
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    tax_number: str | None = None
    credit_limit: Decimal | None = Field(default=None, ge=0)
    payment_terms: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class CustomerOut(CustomerFields):
    model_config = ConfigDict(from_attributes=True)

    id: str
    current_balance: Decimal = Decimal("0")
    created_at: datetime | None = None

    @field_serializer("credit_limit", "current_balance")
    def _serialize_decimal(self, value: Decimal) -> str:
        return str(value)


class SupplierOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    city: str | None = None
    country: str
    payment_terms: int
    is_active: bool


__all__ = ["CustomerCreate", "CustomerOut", "CustomerUpdate", "SupplierOut"]
