"""Landing dashboard counters and recent activity."""
from __future__ import annotations

from sqlalchemy.orm import Session

from freightdesk.core.formatting import humanize_currency
from freightdesk.core.log import get_logger
from freightdesk.models import ShipmentStatus
from freightdesk.repositories import CustomerRepository, ShipmentRepository
from freightdesk.schemas import DashboardOut, DashboardStats, ShipmentOut

LOGGER = get_logger(__name__)

RECENT_SHIPMENTS = 5


class DashboardService:
    """Aggregate operational metrics shown to every role."""

    def __init__(self, currency_code: str = "LYD") -> None:
        self._currency = currency_code

    def get_dashboard(self, session: Session) -> DashboardOut:
        shipments = ShipmentRepository(session)
        counts = shipments.count_by_status()
        revenue = shipments.total_revenue()
        stats = DashboardStats(
            active_customers=CustomerRepository(session).count_active_customers(),
            in_transit=counts.get(ShipmentStatus.IN_TRANSIT.value, 0),
            delivered=counts.get(ShipmentStatus.DELIVERED.value, 0),
            total_shipments=sum(counts.values()),
            revenue=revenue,
            revenue_display=humanize_currency(revenue, code=self._currency),
        )
        recent = shipments.list_shipments(limit=RECENT_SHIPMENTS)
        LOGGER.debug("Dashboard computed", extra={"total_shipments": stats.total_shipments})
        return DashboardOut(
            stats=stats,
            recent_shipments=[ShipmentOut.model_validate(shipment) for shipment in recent],
        )


__all__ = ["DashboardService", "RECENT_SHIPMENTS"]
