"""Database models for the freight administration domain."""
from __future__ import annotations

from .accounting import ChartOfAccount, JournalEntry, JournalEntryDetail
from .base import Base
from .customers import Customer, Supplier
from .shipments import PaymentStatus, Shipment, ShipmentStatus
from .users import User, UserRole

__all__ = [
    "Base",
    "ChartOfAccount",
    "Customer",
    "JournalEntry",
    "JournalEntryDetail",
    "PaymentStatus",
    "Shipment",
    "ShipmentStatus",
    "Supplier",
    "User",
    "UserRole",
]
