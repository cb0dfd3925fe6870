"""Schemas for the landing dashboard."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, field_serializer

from .shipments import ShipmentOut


class DashboardStats(BaseModel):
    """Headline operational counters."""

    active_customers: int = 0
    in_transit: int = 0
    delivered: int = 0
    total_shipments: int = 0
    revenue: Decimal = Decimal("0")
    revenue_display: str = ""

    @field_serializer("revenue")
    def _serialize_revenue(self, value: Decimal) -> str:
        return str(value)


class DashboardOut(BaseModel):
    stats: DashboardStats
    recent_shipments: list[ShipmentOut]


__all__ = ["DashboardOut", "DashboardStats"]
