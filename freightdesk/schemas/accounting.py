"""Schemas for the chart of accounts and journal entry screens."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from freightdesk.domain.accounting import AccountType

from .common import Amount, ScreenPayload


class AccountOut(BaseModel):
    """One chart-of-accounts node."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    name: str
    account_type: AccountType
    level: int = 1
    balance: Amount = Decimal("0")
    is_active: bool = True
    parent_id: str | None = None


class TreeRowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    account: AccountOut
    indent: int
    depth: int
    has_children: bool
    is_expanded: bool
    subtree_balance: Amount


class AccountTreeOut(BaseModel):
    """Visible rows of the tree plus the expansion set that produced them."""

    rows: list[TreeRowOut]
    expanded: list[str]


class ChartScreen(ScreenPayload):
    data: list[AccountOut] | None = None


class AccountTreeScreen(ScreenPayload):
    data: AccountTreeOut | None = None


class JournalLineIn(BaseModel):
    """A draft detail line as typed by the user; blank amounts count as zero."""

    account_id: str = ""
    debit_amount: Decimal | None = None
    credit_amount: Decimal | None = None
    description: str = ""


class JournalEntryIn(BaseModel):
    entry_date: date
    description: str = ""
    details: list[JournalLineIn] = Field(default_factory=list)


class JournalTotalsOut(BaseModel):
    debit: Amount
    credit: Amount
    difference: Amount
    is_balanced: bool


class PostedLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    account_id: str
    debit_amount: Amount
    credit_amount: Amount
    description: str | None = None
    account_code: str | None = None
    account_name: str | None = None


class PostedEntryOut(BaseModel):
    """A posted journal entry with its detail lines."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    entry_number: str
    entry_date: date
    description: str
    total_debit: Amount
    total_credit: Amount
    is_approved: bool
    lines: list[PostedLineOut]
    created_at: datetime | None = None
    created_by: str | None = None


class JournalScreen(ScreenPayload):
    data: list[PostedEntryOut] | None = None


class JournalEntryCreated(BaseModel):
    """Result of a successful submit with both screens reloaded."""

    id: str
    entries: JournalScreen
    accounts: ChartScreen


__all__ = [
    "AccountOut",
    "AccountTreeOut",
    "AccountTreeScreen",
    "ChartScreen",
    "JournalEntryCreated",
    "JournalEntryIn",
    "JournalLineIn",
    "JournalScreen",
    "JournalTotalsOut",
    "PostedEntryOut",
    "PostedLineOut",
    "TreeRowOut",
]
