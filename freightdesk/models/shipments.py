"""ORM model for freight shipments."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AMOUNT_TYPE, Base, Timestamped, UUIDPrimaryKey
from .customers import Customer, Supplier


class ShipmentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    PARTIAL = "partial"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Shipment(UUIDPrimaryKey, Timestamped, Base):
    """A consignment moved between two ports for a customer."""

    __tablename__ = "shipments"

    shipment_number: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id"), nullable=False)
    supplier_id: Mapped[str | None] = mapped_column(ForeignKey("suppliers.id"))
    origin_port: Mapped[str] = mapped_column(String(120), nullable=False)
    destination_port: Mapped[str] = mapped_column(String(120), nullable=False)
    departure_date: Mapped[date | None] = mapped_column(Date)
    estimated_arrival: Mapped[date | None] = mapped_column(Date)
    arrival_date: Mapped[date | None] = mapped_column(Date)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ShipmentStatus.PENDING.value
    )
    container_number: Mapped[str | None] = mapped_column(String(64))
    seal_number: Mapped[str | None] = mapped_column(String(64))
    weight_kg: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    volume_cbm: Mapped[Decimal | None] = mapped_column(Numeric(12, 3))
    total_amount: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False, default=Decimal("0"))
    paid_amount: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False, default=Decimal("0"))
    payment_status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=PaymentStatus.PENDING.value
    )
    notes: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[str | None] = mapped_column(String(36))

    customer: Mapped[Customer] = relationship()
    supplier: Mapped[Supplier | None] = relationship()
