"""Data access for customers and suppliers."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import func, or_, select

from freightdesk.core.log import get_logger
from freightdesk.models import Customer, Supplier

from .base import BaseRepository

LOGGER = get_logger(__name__)

_CUSTOMER_FIELDS = frozenset(
    {
        "company_name",
        "contact_person",
        "email",
        "phone",
        "address",
        "city",
        "country",
        "tax_number",
        "credit_limit",
        "payment_terms",
        "is_active",
    }
)


class CustomerRepository(BaseRepository):
    """CRUD access to the ``customers`` table plus the supplier lookup list."""

    def list_customers(self, *, search: str | None = None) -> list[Customer]:
        statement = select(Customer).order_by(Customer.created_at.desc())
        pattern = self._search_pattern(search)
        if pattern is not None:
            statement = statement.where(
                or_(
                    func.lower(Customer.company_name).like(pattern),
                    func.lower(func.coalesce(Customer.contact_person, "")).like(pattern),
                    func.lower(func.coalesce(Customer.email, "")).like(pattern),
                )
            )
        with self._guard("load customers"):
            return list(self._session.execute(statement).scalars().all())

    def get_customer(self, customer_id: str) -> Customer:
        return self._get_or_missing(Customer, customer_id, "Customer")

    def create_customer(
        self, data: Mapping[str, Any], *, created_by: str | None = None
    ) -> Customer:
        values = {key: value for key, value in data.items() if key in _CUSTOMER_FIELDS}
        customer = Customer(**values, created_by=created_by)
        with self._guard("create the customer"):
            self._session.add(customer)
            self._session.commit()
        LOGGER.info("Customer created", extra={"customer_id": customer.id})
        return customer

    def update_customer(self, customer_id: str, data: Mapping[str, Any]) -> Customer:
        customer = self.get_customer(customer_id)
        for key, value in data.items():
            if key in _CUSTOMER_FIELDS:
                setattr(customer, key, value)
        with self._guard("update the customer"):
            self._session.commit()
        return customer

    def delete_customer(self, customer_id: str) -> None:
        customer = self.get_customer(customer_id)
        with self._guard("delete the customer"):
            self._session.delete(customer)
            self._session.commit()
        LOGGER.info("Customer deleted", extra={"customer_id": customer_id})

    def count_active_customers(self) -> int:
        with self._guard("count customers"):
            value = self._session.execute(
                select(func.count()).select_from(Customer).where(Customer.is_active.is_(True))
            ).scalar()
        return int(value or 0)

    def list_suppliers(self, *, active_only: bool = True) -> list[Supplier]:
        statement = select(Supplier).order_by(Supplier.company_name)
        if active_only:
            statement = statement.where(Supplier.is_active.is_(True))
        with self._guard("load suppliers"):
            return list(self._session.execute(statement).scalars().all())


__all__ = ["CustomerRepository"]
