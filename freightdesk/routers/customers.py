"""Customer and supplier routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from freightdesk.core.permissions import Section
from freightdesk.core.security import AuthenticatedUser, require_section
from freightdesk.schemas import CustomerCreate, CustomerOut, CustomerUpdate, SupplierOut
from freightdesk.services import CustomersService

from .deps import get_db_session

router = APIRouter(prefix="/customers", tags=["customers"])
require_customers = require_section(Section.CUSTOMERS)


def get_customers_service() -> CustomersService:
    """Return a service instance per request."""

    return CustomersService()


@router.get("", response_model=list[CustomerOut])
def list_customers(
    search: str | None = Query(default=None),
    user: AuthenticatedUser = Depends(require_customers),
    session: Session = Depends(get_db_session),
    service: CustomersService = Depends(get_customers_service),
) -> list[CustomerOut]:
    return service.list_customers(session, search=search)


@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    user: AuthenticatedUser = Depends(require_customers),
    session: Session = Depends(get_db_session),
    service: CustomersService = Depends(get_customers_service),
) -> CustomerOut:
    return service.create_customer(session, payload, created_by=user.user_id)


@router.get("/suppliers", response_model=list[SupplierOut])
def list_suppliers(
    user: AuthenticatedUser = Depends(require_customers),
    session: Session = Depends(get_db_session),
    service: CustomersService = Depends(get_customers_service),
) -> list[SupplierOut]:
    return service.list_suppliers(session)


@router.put("/{customer_id}", response_model=CustomerOut)
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    user: AuthenticatedUser = Depends(require_customers),
    session: Session = Depends(get_db_session),
    service: CustomersService = Depends(get_customers_service),
) -> CustomerOut:
    return service.update_customer(session, customer_id, payload)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: str,
    user: AuthenticatedUser = Depends(require_customers),
    session: Session = Depends(get_db_session),
    service: CustomersService = Depends(get_customers_service),
) -> Response:
    service.delete_customer(session, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
