"""Base declarative class and column helpers shared by all ORM models."""
from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Three decimal places: the dinar is divided into 1000 dirhams.
AMOUNT_TYPE = Numeric(18, 3)


def new_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""

    pass


class UUIDPrimaryKey:
    """Mixin giving a model a string UUID primary key."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class Timestamped:
    """Mixin adding ``created_at`` / ``updated_at`` columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
