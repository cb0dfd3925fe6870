"""Shipment management."""
from __future__ import annotations

from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from freightdesk.repositories import ShipmentRepository
from freightdesk.schemas import ShipmentCreate, ShipmentOut, ShipmentUpdate


def _column_values(data: dict[str, Any]) -> dict[str, Any]:
    # Status columns store the plain enum value.
    return {key: value.value if isinstance(value, Enum) else value for key, value in data.items()}


class ShipmentsService:
    def list_shipments(self, session: Session, *, status: str | None = None) -> list[ShipmentOut]:
        return [
            ShipmentOut.model_validate(shipment)
            for shipment in ShipmentRepository(session).list_shipments(status=status)
        ]

    def create_shipment(
        self, session: Session, payload: ShipmentCreate, *, created_by: str | None = None
    ) -> ShipmentOut:
        """Book a shipment; the customer must exist."""

        shipment = ShipmentRepository(session).create_shipment(
            _column_values(payload.model_dump()), created_by=created_by
        )
        return ShipmentOut.model_validate(shipment)

    def update_shipment(
        self, session: Session, shipment_id: str, payload: ShipmentUpdate
    ) -> ShipmentOut:
        shipment = ShipmentRepository(session).update_shipment(
            shipment_id, _column_values(payload.model_dump(exclude_unset=True))
        )
        return ShipmentOut.model_validate(shipment)

    def delete_shipment(self, session: Session, shipment_id: str) -> None:
        ShipmentRepository(session).delete_shipment(shipment_id)


__all__ = ["ShipmentsService"]
