"""Pure aggregation of report rows into the three classic financial statements.

Every function here is deterministic and side-effect free; callers recompute
the statements from freshly fetched rows instead of caching them.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Sequence

from .errors import ReportPeriodError
from .types import ZERO, within_tolerance


class IncomeCategory(str, Enum):
    REVENUE = "revenue"
    EXPENSE = "expense"


class BalanceCategory(str, Enum):
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"


# ----------------------------------------------------------------------
# Input rows, as returned by the persistence collaborator
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class TrialBalanceRow:
    account_id: str
    account_code: str
    account_name: str
    total_debit: Decimal
    total_credit: Decimal


@dataclass(frozen=True, slots=True)
class IncomeStatementRow:
    category: str
    account_name: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class BalanceSheetRow:
    category: str
    sub_category: str
    account_name: str
    balance: Decimal


# ----------------------------------------------------------------------
# Trial balance
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class TrialBalance:
    rows: tuple[TrialBalanceRow, ...]
    grand_total_debit: Decimal
    grand_total_credit: Decimal

    @property
    def difference(self) -> Decimal:
        return self.grand_total_debit - self.grand_total_credit

    @property
    def is_balanced(self) -> bool:
        return within_tolerance(self.grand_total_debit, self.grand_total_credit)


def build_trial_balance(rows: Iterable[TrialBalanceRow]) -> TrialBalance:
    """Sum debits and credits per account, keeping first-seen account order."""

    merged: dict[str, TrialBalanceRow] = {}
    for row in rows:
        current = merged.get(row.account_id)
        if current is None:
            merged[row.account_id] = row
            continue
        merged[row.account_id] = TrialBalanceRow(
            account_id=current.account_id,
            account_code=current.account_code,
            account_name=current.account_name,
            total_debit=current.total_debit + row.total_debit,
            total_credit=current.total_credit + row.total_credit,
        )

    accounts = tuple(merged.values())
    return TrialBalance(
        rows=accounts,
        grand_total_debit=sum((row.total_debit for row in accounts), ZERO),
        grand_total_credit=sum((row.total_credit for row in accounts), ZERO),
    )


# ----------------------------------------------------------------------
# Income statement
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class IncomeStatement:
    start: date
    end: date
    revenues: tuple[IncomeStatementRow, ...]
    expenses: tuple[IncomeStatementRow, ...]
    total_revenue: Decimal
    total_expense: Decimal
    unclassified: tuple[IncomeStatementRow, ...] = ()

    @property
    def net_income(self) -> Decimal:
        return self.total_revenue - self.total_expense

    @property
    def result_label(self) -> str:
        return "profit" if self.net_income >= ZERO else "loss"


def validate_period(start: date, end: date) -> None:
    if start > end:
        raise ReportPeriodError("The start date must not be after the end date.")


def build_income_statement(
    rows: Iterable[IncomeStatementRow], *, start: date, end: date
) -> IncomeStatement:
    validate_period(start, end)
    revenues: list[IncomeStatementRow] = []
    expenses: list[IncomeStatementRow] = []
    unclassified: list[IncomeStatementRow] = []
    for row in rows:
        if row.category == IncomeCategory.REVENUE.value:
            revenues.append(row)
        elif row.category == IncomeCategory.EXPENSE.value:
            expenses.append(row)
        else:
            unclassified.append(row)

    return IncomeStatement(
        start=start,
        end=end,
        revenues=tuple(revenues),
        expenses=tuple(expenses),
        total_revenue=sum((row.amount for row in revenues), ZERO),
        total_expense=sum((row.amount for row in expenses), ZERO),
        unclassified=tuple(unclassified),
    )


# ----------------------------------------------------------------------
# Balance sheet
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class BalanceSheetSection:
    """Lines sharing one sub-category within a balance sheet category."""

    sub_category: str
    lines: tuple[BalanceSheetRow, ...]
    total: Decimal


def _group_by_sub_category(lines: Sequence[BalanceSheetRow]) -> tuple[BalanceSheetSection, ...]:
    grouped: dict[str, list[BalanceSheetRow]] = {}
    for line in lines:
        grouped.setdefault(line.sub_category, []).append(line)
    return tuple(
        BalanceSheetSection(
            sub_category=name,
            lines=tuple(items),
            total=sum((item.balance for item in items), ZERO),
        )
        for name, items in grouped.items()
    )


@dataclass(frozen=True, slots=True)
class BalanceSheet:
    as_of: date
    assets: tuple[BalanceSheetRow, ...]
    liabilities: tuple[BalanceSheetRow, ...]
    equity: tuple[BalanceSheetRow, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity

    @property
    def is_balanced(self) -> bool:
        return within_tolerance(self.total_assets, self.total_liabilities_and_equity)

    def sections(self, category: BalanceCategory) -> tuple[BalanceSheetSection, ...]:
        lines = {
            BalanceCategory.ASSET: self.assets,
            BalanceCategory.LIABILITY: self.liabilities,
            BalanceCategory.EQUITY: self.equity,
        }[category]
        return _group_by_sub_category(lines)


def build_balance_sheet(rows: Iterable[BalanceSheetRow], *, as_of: date) -> BalanceSheet:
    partitions: dict[str, list[BalanceSheetRow]] = {
        BalanceCategory.ASSET.value: [],
        BalanceCategory.LIABILITY.value: [],
        BalanceCategory.EQUITY.value: [],
    }
    for row in rows:
        bucket = partitions.get(row.category)
        if bucket is not None:
            bucket.append(row)

    def _total(items: list[BalanceSheetRow]) -> Decimal:
        return sum((item.balance for item in items), ZERO)

    assets = partitions[BalanceCategory.ASSET.value]
    liabilities = partitions[BalanceCategory.LIABILITY.value]
    equity = partitions[BalanceCategory.EQUITY.value]
    return BalanceSheet(
        as_of=as_of,
        assets=tuple(assets),
        liabilities=tuple(liabilities),
        equity=tuple(equity),
        total_assets=_total(assets),
        total_liabilities=_total(liabilities),
        total_equity=_total(equity),
    )


__all__ = [
    "BalanceCategory",
    "BalanceSheet",
    "BalanceSheetRow",
    "BalanceSheetSection",
    "IncomeCategory",
    "IncomeStatement",
    "IncomeStatementRow",
    "TrialBalance",
    "TrialBalanceRow",
    "build_balance_sheet",
    "build_income_statement",
    "build_trial_balance",
    "validate_period",
]
