"""Customer and supplier management."""
from __future__ import annotations

from sqlalchemy.orm import Session

from freightdesk.core.log import get_logger
from freightdesk.repositories import CustomerRepository
from freightdesk.schemas import CustomerCreate, CustomerOut, CustomerUpdate, SupplierOut

LOGGER = get_logger(__name__)


class CustomersService:
    """Thin orchestration over ``CustomerRepository`` returning schemas."""

    def list_customers(self, session: Session, *, search: str | None = None) -> list[CustomerOut]:
        customers = CustomerRepository(session).list_customers(search=search)
        LOGGER.debug("Loaded %d customers", len(customers))
        return [CustomerOut.model_validate(customer) for customer in customers]

    def create_customer(
        self, session: Session, payload: CustomerCreate, *, created_by: str | None = None
    ) -> CustomerOut:
        customer = CustomerRepository(session).create_customer(
            payload.model_dump(), created_by=created_by
        )
        return CustomerOut.model_validate(customer)

    def update_customer(
        self, session: Session, customer_id: str, payload: CustomerUpdate
    ) -> CustomerOut:
        customer = CustomerRepository(session).update_customer(
            customer_id, payload.model_dump(exclude_unset=True)
        )
        return CustomerOut.model_validate(customer)

    def delete_customer(self, session: Session, customer_id: str) -> None:
        CustomerRepository(session).delete_customer(customer_id)

    def list_suppliers(self, session: Session) -> list[SupplierOut]:
        return [
            SupplierOut.model_validate(supplier)
            for supplier in CustomerRepository(session).list_suppliers()
        ]


__all__ = ["CustomersService"]
