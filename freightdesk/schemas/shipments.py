"""Schemas for shipment records."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from freightdesk.models import PaymentStatus, ShipmentStatus


class ShipmentCreate(BaseModel):
    """Payload for booking a shipment; the number is generated when omitted."""

    customer_id: str = Field(min_length=1)
    shipment_number: str | None = None
    supplier_id: str | None = None
    origin_port: str = "Shanghai"
    destination_port: str = "Tripoli"
    departure_date: date | None = None
    estimated_arrival: date | None = None
    arrival_date: date | None = None
    status: ShipmentStatus = ShipmentStatus.PENDING
    container_number: str | None = None
    seal_number: str | None = None
    weight_kg: Decimal | None = Field(default=None, ge=0)
    volume_cbm: Decimal | None = Field(default=None, ge=0)
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None


class ShipmentUpdate(BaseModel):
    customer_id: str | None = Field(default=None, min_length=1)
    supplier_id: str | None = None
    origin_port: str | None = None
    destination_port: str | None = None
    departure_date: date | None = None
    estimated_arrival: date | None = None
    arrival_date: date | None = None
    status: ShipmentStatus | None = None
    container_number: str | None = None
    seal_number: str | None = None
    weight_kg: Decimal | None = Field(default=None, ge=0)
    volume_cbm: Decimal | None = Field(default=None, ge=0)
    total_amount: Decimal | None = Field(default=None, ge=0)
    paid_amount: Decimal | None = Field(default=None, ge=0)
    payment_status: PaymentStatus | None = None
    notes: str | None = None


class CustomerRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_name: str


class ShipmentOut(BaseModel):
    """A shipment annotated with its customer's name."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    shipment_number: str
    customer_id: str
    customer: CustomerRef | None = None
    supplier_id: str | None = None
    origin_port: str
    destination_port: str
    departure_date: date | None = None
    estimated_arrival: date | None = None
    arrival_date: date | None = None
    status: str
    container_number: str | None = None
    seal_number: str | None = None
    weight_kg: Decimal | None = None
    volume_cbm: Decimal | None = None
    total_amount: Decimal
    paid_amount: Decimal
    payment_status: str
    notes: str | None = None
    created_at: datetime | None = None

    @field_serializer("total_amount", "paid_amount")
    def _serialize_amount(self, value: Decimal) -> str:
        return str(value)


__all__ = ["CustomerRef", "ShipmentCreate", "ShipmentOut", "ShipmentUpdate"]
