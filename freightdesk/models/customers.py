"""ORM models for trading partners: customers and suppliers."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import AMOUNT_TYPE, Base, Timestamped, UUIDPrimaryKey


class Customer(UUIDPrimaryKey, Timestamped, Base):
    """A company shipping freight with us."""

    __tablename__ = "customers"

    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_person: Mapped[str | None] = mapped_column(String(120))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))
    address: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(String(120))
    country: Mapped[str] = mapped_column(String(120), nullable=False, default="Libya")
    tax_number: Mapped[str | None] = mapped_column(String(64))
    credit_limit: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False, default=Decimal("0"))
    current_balance: Mapped[Decimal] = mapped_column(
        AMOUNT_TYPE, nullable=False, default=Decimal("0")
    )
    payment_terms: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[str | None] = mapped_column(String(36))


class Supplier(UUIDPrimaryKey, Timestamped, Base):
    """A carrier or agent we buy services from."""

    __tablename__ = "suppliers"

    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_person: Mapped[str | None] = mapped_column(String(120))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))
    address: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(String(120))
    country: Mapped[str] = mapped_column(String(120), nullable=False, default="Libya")
    tax_number: Mapped[str | None] = mapped_column(String(64))
    payment_terms: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[str | None] = mapped_column(String(36))
