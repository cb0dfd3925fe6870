"""Shipment routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from freightdesk.core.permissions import Section
from freightdesk.core.security import AuthenticatedUser, require_section
from freightdesk.models import ShipmentStatus
from freightdesk.schemas import ShipmentCreate, ShipmentOut, ShipmentUpdate
from freightdesk.services import ShipmentsService

from .deps import get_db_session

router = APIRouter(prefix="/shipments", tags=["shipments"])
require_shipments = require_section(Section.SHIPMENTS)


def get_shipments_service() -> ShipmentsService:
    return ShipmentsService()


@router.get("", response_model=list[ShipmentOut])
def list_shipments(
    status_filter: ShipmentStatus | None = Query(default=None, alias="status"),
    user: AuthenticatedUser = Depends(require_shipments),
    session: Session = Depends(get_db_session),
    service: ShipmentsService = Depends(get_shipments_service),
) -> list[ShipmentOut]:
    return service.list_shipments(
        session, status=status_filter.value if status_filter else None
    )


@router.post("", response_model=ShipmentOut, status_code=status.HTTP_201_CREATED)
def create_shipment(
    payload: ShipmentCreate,
    user: AuthenticatedUser = Depends(require_shipments),
    session: Session = Depends(get_db_session),
    service: ShipmentsService = Depends(get_shipments_service),
) -> ShipmentOut:
    return service.create_shipment(session, payload, created_by=user.user_id)


@router.put("/{shipment_id}", response_model=ShipmentOut)
def update_shipment(
    shipment_id: str,
    payload: ShipmentUpdate,
    user: AuthenticatedUser = Depends(require_shipments),
    session: Session = Depends(get_db_session),
    service: ShipmentsService = Depends(get_shipments_service),
) -> ShipmentOut:
    return service.update_shipment(session, shipment_id, payload)


@router.delete("/{shipment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shipment(
    shipment_id: str,
    user: AuthenticatedUser = Depends(require_shipments),
    session: Session = Depends(get_db_session),
    service: ShipmentsService = Depends(get_shipments_service),
) -> Response:
    service.delete_shipment(session, shipment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
