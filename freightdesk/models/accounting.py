"""ORM models for the general ledger."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AMOUNT_TYPE, Base, UUIDPrimaryKey, utcnow


class ChartOfAccount(UUIDPrimaryKey, Base):
    """Account in the hierarchical chart of accounts."""

    __tablename__ = "chart_of_accounts"

    account_code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    account_name: Mapped[str] = mapped_column(String(200), nullable=False)
    account_type: Mapped[str] = mapped_column(String(16), nullable=False)
    parent_account_id: Mapped[str | None] = mapped_column(ForeignKey("chart_of_accounts.id"))
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    balance: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False, default=Decimal("0"))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class JournalEntry(UUIDPrimaryKey, Base):
    """Double-entry journal header."""

    __tablename__ = "journal_entries"

    entry_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    total_debit: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False)
    total_credit: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False)
    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    approved_by: Mapped[str | None] = mapped_column(String(36))
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_by: Mapped[str | None] = mapped_column(String(36))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    details: Mapped[list["JournalEntryDetail"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalEntryDetail.line_number",
    )


class JournalEntryDetail(UUIDPrimaryKey, Base):
    """Debit-or-credit posting line of a journal entry."""

    __tablename__ = "journal_entry_details"

    journal_entry_id: Mapped[str] = mapped_column(
        ForeignKey("journal_entries.id", ondelete="CASCADE"), nullable=False
    )
    account_id: Mapped[str] = mapped_column(ForeignKey("chart_of_accounts.id"), nullable=False)
    debit_amount: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False, default=Decimal("0"))
    credit_amount: Mapped[Decimal] = mapped_column(AMOUNT_TYPE, nullable=False, default=Decimal("0"))
    description: Mapped[str | None] = mapped_column(Text)
    line_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    entry: Mapped[JournalEntry] = relationship(back_populates="details")
    account: Mapped[ChartOfAccount] = relationship()
