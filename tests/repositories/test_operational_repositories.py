"""Tests for the customer, shipment and user repositories."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from freightdesk.core.errors import DuplicateRecordError, RecordNotFoundError
from freightdesk.core.security import verify_password
from freightdesk.models import Supplier
from freightdesk.repositories import CustomerRepository, ShipmentRepository, UserRepository


@pytest.fixture()
def customer(session):
    return CustomerRepository(session).create_customer(
        {"company_name": "Sahara Traders", "contact_person": "Omar", "city": "Benghazi"},
        created_by="u1",
    )


def test_customer_crud_and_search(session, customer) -> None:
    repo = CustomerRepository(session)
    repo.create_customer({"company_name": "Atlas Imports", "email": "ops@atlas.ly"})

    assert repo.get_customer(customer.id).created_by == "u1"
    assert [c.company_name for c in repo.list_customers(search="sahara")] == ["Sahara Traders"]
    assert [c.company_name for c in repo.list_customers(search="ATLAS.LY")] == ["Atlas Imports"]
    assert len(repo.list_customers()) == 2

    updated = repo.update_customer(customer.id, {"is_active": False, "unknown": "ignored"})
    assert updated.is_active is False
    assert repo.count_active_customers() == 1

    repo.delete_customer(customer.id)
    with pytest.raises(RecordNotFoundError):
        repo.get_customer(customer.id)


def test_suppliers_filtered_and_sorted(session) -> None:
    session.add_all(
        [
            Supplier(company_name="Zeta Lines"),
            Supplier(company_name="Alpha Shipping"),
            Supplier(company_name="Dormant Agents", is_active=False),
        ]
    )
    session.commit()
    repo = CustomerRepository(session)

    assert [s.company_name for s in repo.list_suppliers()] == ["Alpha Shipping", "Zeta Lines"]
    assert len(repo.list_suppliers(active_only=False)) == 3


def test_shipment_numbers_are_generated(session, customer) -> None:
    repo = ShipmentRepository(session)
    year = date.today().year
    base = {"customer_id": customer.id, "origin_port": "Shanghai", "destination_port": "Tripoli"}

    first = repo.create_shipment({**base, "total_amount": Decimal("1500")})
    second = repo.create_shipment({**base, "total_amount": Decimal("500"), "status": "in_transit"})

    assert first.shipment_number == f"SH-{year}-0001"
    assert second.shipment_number == f"SH-{year}-0002"
    assert first.customer.company_name == "Sahara Traders"
    assert repo.total_revenue() == Decimal("2000")
    counts = repo.count_by_status()
    assert counts["pending"] == 1
    assert counts["in_transit"] == 1
    assert counts["delivered"] == 0
    assert [s.id for s in repo.list_shipments(status="in_transit")] == [second.id]


def test_shipment_requires_existing_customer(session) -> None:
    repo = ShipmentRepository(session)

    with pytest.raises(RecordNotFoundError):
        repo.create_shipment(
            {"customer_id": "nope", "origin_port": "Shanghai", "destination_port": "Tripoli"}
        )


def test_shipment_update_and_delete(session, customer) -> None:
    repo = ShipmentRepository(session)
    shipment = repo.create_shipment(
        {
            "customer_id": customer.id,
            "shipment_number": "MANUAL-1",
            "origin_port": "Ningbo",
            "destination_port": "Misrata",
        }
    )

    updated = repo.update_shipment(shipment.id, {"status": "delivered", "paid_amount": Decimal("10")})
    assert updated.status == "delivered"
    assert updated.shipment_number == "MANUAL-1"

    with pytest.raises(RecordNotFoundError):
        repo.update_shipment(shipment.id, {"customer_id": "missing"})

    repo.delete_shipment(shipment.id)
    with pytest.raises(RecordNotFoundError):
        repo.get_shipment(shipment.id)


def test_user_passwords_are_hashed(session) -> None:
    repo = UserRepository(session)

    user = repo.create_user(
        {"username": "layla", "full_name": "Layla A.", "role": "financial"},
        password="secret1",
        created_by="admin",
    )

    assert user.password_hash != "secret1"
    assert verify_password("secret1", user.password_hash)

    repo.update_user(user.id, {"full_name": "Layla B."}, password="secret2")
    assert verify_password("secret2", repo.get_user(user.id).password_hash)
    assert repo.get_user(user.id).full_name == "Layla B."


def test_duplicate_username_is_rejected(session) -> None:
    repo = UserRepository(session)
    repo.create_user({"username": "sami", "full_name": "Sami"}, password="secret1")
    other = repo.create_user({"username": "nour", "full_name": "Nour"}, password="secret1")

    with pytest.raises(DuplicateRecordError):
        repo.create_user({"username": "sami", "full_name": "Another"}, password="secret1")
    with pytest.raises(DuplicateRecordError):
        repo.update_user(other.id, {"username": "sami"})

    repo.delete_user(other.id)
    assert [u.username for u in repo.list_users()] == ["sami"]


def test_customer_with_shipments_cannot_be_deleted(session, customer) -> None:
    ShipmentRepository(session).create_shipment(
        {"customer_id": customer.id, "origin_port": "Ningbo", "destination_port": "Tripoli"}
    )

    with pytest.raises(DuplicateRecordError, match="delete the customer"):
        CustomerRepository(session).delete_customer(customer.id)

    assert CustomerRepository(session).get_customer(customer.id).company_name == "Sahara Traders"
