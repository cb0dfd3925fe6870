"""ORM model for application users."""
from __future__ import annotations

from enum import Enum

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, Timestamped, UUIDPrimaryKey


class UserRole(str, Enum):
    """Roles a staff member can hold."""

    ADMIN = "admin"
    FINANCIAL = "financial"
    SALES = "sales"
    CUSTOMER_SERVICE = "customer_service"
    OPERATIONS = "operations"


class User(UUIDPrimaryKey, Timestamped, Base):
    """Staff account able to sign in to the application."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(120), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default=UserRole.SALES.value)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[str | None] = mapped_column(String(36))
