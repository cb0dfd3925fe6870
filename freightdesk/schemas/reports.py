"""Schemas for the trial balance, income statement and balance sheet."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from .common import Amount, ScreenPayload


class TrialBalanceLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    account_id: str
    account_code: str
    account_name: str
    total_debit: Amount
    total_credit: Amount


class TrialBalanceOut(BaseModel):
    rows: list[TrialBalanceLineOut]
    grand_total_debit: Amount
    grand_total_credit: Amount
    difference: Amount
    is_balanced: bool


class IncomeLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    account_name: str
    amount: Amount


class IncomeStatementOut(BaseModel):
    """Revenues and expenses for an inclusive date range."""

    start: date
    end: date
    revenues: list[IncomeLineOut]
    expenses: list[IncomeLineOut]
    unclassified: list[IncomeLineOut]
    total_revenue: Amount
    total_expense: Amount
    net_income: Amount
    result_label: str


class BalanceSheetLineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sub_category: str
    account_name: str
    balance: Amount


class BalanceSheetSectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sub_category: str
    lines: list[BalanceSheetLineOut]
    total: Amount


class BalanceSheetOut(BaseModel):
    """Assets against liabilities plus equity at a point in time."""

    as_of: date
    assets: list[BalanceSheetSectionOut]
    liabilities: list[BalanceSheetSectionOut]
    equity: list[BalanceSheetSectionOut]
    total_assets: Amount
    total_liabilities: Amount
    total_equity: Amount
    total_liabilities_and_equity: Amount
    is_balanced: bool


class TrialBalanceScreen(ScreenPayload):
    data: TrialBalanceOut | None = None


class IncomeStatementScreen(ScreenPayload):
    data: IncomeStatementOut | None = None


class BalanceSheetScreen(ScreenPayload):
    data: BalanceSheetOut | None = None


__all__ = [
    "BalanceSheetLineOut",
    "BalanceSheetOut",
    "BalanceSheetScreen",
    "BalanceSheetSectionOut",
    "IncomeLineOut",
    "IncomeStatementOut",
    "IncomeStatementScreen",
    "TrialBalanceLineOut",
    "TrialBalanceOut",
    "TrialBalanceScreen",
]
