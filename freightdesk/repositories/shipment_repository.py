"""Data access for shipments."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from freightdesk.core.errors import RecordNotFoundError
from freightdesk.core.log import get_logger
from freightdesk.models import Customer, Shipment, ShipmentStatus

from .base import BaseRepository

LOGGER = get_logger(__name__)

_SHIPMENT_FIELDS = frozenset(
    {
        "shipment_number",
        "customer_id",
        "supplier_id",
        "origin_port",
        "destination_port",
        "departure_date",
        "estimated_arrival",
        "arrival_date",
        "status",
        "container_number",
        "seal_number",
        "weight_kg",
        "volume_cbm",
        "total_amount",
        "paid_amount",
        "payment_status",
        "notes",
    }
)


class ShipmentRepository(BaseRepository):
    """CRUD access to the ``shipments`` table."""

    def list_shipments(
        self, *, status: str | None = None, limit: int | None = None
    ) -> list[Shipment]:
        statement = (
            select(Shipment)
            .options(joinedload(Shipment.customer))
            .order_by(Shipment.created_at.desc())
        )
        if status:
            statement = statement.where(Shipment.status == status)
        if limit is not None:
            statement = statement.limit(limit)
        with self._guard("load shipments"):
            return list(self._session.execute(statement).scalars().all())

    def get_shipment(self, shipment_id: str) -> Shipment:
        return self._get_or_missing(
            Shipment, shipment_id, "Shipment", options=[joinedload(Shipment.customer)]
        )

    def _require_customer(self, customer_id: str | None) -> None:
        if not customer_id or self._session.get(Customer, customer_id) is None:
            raise RecordNotFoundError(f"Customer {customer_id} not found")

    def next_shipment_number(self, today: date | None = None) -> str:
        prefix = f"SH-{(today or date.today()).year}-"
        with self._guard("number the shipment"):
            numbers = (
                self._session.execute(
                    select(Shipment.shipment_number).where(
                        Shipment.shipment_number.like(f"{prefix}%")
                    )
                )
                .scalars()
                .all()
            )
        sequence = max(
            (int(n[len(prefix):]) for n in numbers if n[len(prefix):].isdigit()),
            default=0,
        )
        return f"{prefix}{sequence + 1:04d}"

    def create_shipment(
        self, data: Mapping[str, Any], *, created_by: str | None = None
    ) -> Shipment:
        values = {key: value for key, value in data.items() if key in _SHIPMENT_FIELDS}
        self._require_customer(values.get("customer_id"))
        if not values.get("shipment_number"):
            values["shipment_number"] = self.next_shipment_number()
        shipment = Shipment(**values, created_by=created_by)
        with self._guard("create the shipment"):
            self._session.add(shipment)
            self._session.commit()
        LOGGER.info(
            "Shipment created",
            extra={"shipment_id": shipment.id, "shipment_number": shipment.shipment_number},
        )
        return self.get_shipment(shipment.id)

    def update_shipment(self, shipment_id: str, data: Mapping[str, Any]) -> Shipment:
        shipment = self.get_shipment(shipment_id)
        if "customer_id" in data and data["customer_id"] != shipment.customer_id:
            self._require_customer(data["customer_id"])
        for key, value in data.items():
            if key in _SHIPMENT_FIELDS:
                setattr(shipment, key, value)
        with self._guard("update the shipment"):
            self._session.commit()
        return self.get_shipment(shipment_id)

    def delete_shipment(self, shipment_id: str) -> None:
        shipment = self.get_shipment(shipment_id)
        with self._guard("delete the shipment"):
            self._session.delete(shipment)
            self._session.commit()
        LOGGER.info("Shipment deleted", extra={"shipment_id": shipment_id})

    def count_by_status(self) -> dict[str, int]:
        statement = select(Shipment.status, func.count()).group_by(Shipment.status)
        with self._guard("count shipments"):
            result = self._session.execute(statement).all()
        counts = {status.value: 0 for status in ShipmentStatus}
        for status, total in result:
            counts[str(status)] = int(total)
        return counts

    def total_revenue(self) -> Decimal:
        with self._guard("sum shipment revenue"):
            value = self._session.execute(
                select(func.coalesce(func.sum(Shipment.total_amount), 0))
            ).scalar()
        return self._to_decimal(value)


__all__ = ["ShipmentRepository"]
