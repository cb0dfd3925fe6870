"""Double-entry accounting rules: journal validation, reports and the account tree."""

from .chart import AccountTree, ChartAccount, TreeRow, build_tree, toggle
from .errors import (
    IncompleteEntryError,
    InvalidAmountError,
    LedgerValidationError,
    MinimumLinesError,
    ReportPeriodError,
    UnbalancedEntryError,
)
from .journal import MIN_LINES, DraftLine, JournalDraft, JournalTotals, PostedEntry, PostedLine
from .reports import (
    BalanceCategory,
    BalanceSheet,
    BalanceSheetRow,
    BalanceSheetSection,
    IncomeCategory,
    IncomeStatement,
    IncomeStatementRow,
    TrialBalance,
    TrialBalanceRow,
    build_balance_sheet,
    build_income_statement,
    build_trial_balance,
    validate_period,
)
from .types import BALANCE_TOLERANCE, ZERO, AccountType, to_amount

__all__ = [
    "AccountTree",
    "AccountType",
    "BALANCE_TOLERANCE",
    "BalanceCategory",
    "BalanceSheet",
    "BalanceSheetRow",
    "BalanceSheetSection",
    "ChartAccount",
    "DraftLine",
    "IncomeCategory",
    "IncomeStatement",
    "IncomeStatementRow",
    "IncompleteEntryError",
    "InvalidAmountError",
    "JournalDraft",
    "JournalTotals",
    "LedgerValidationError",
    "MIN_LINES",
    "MinimumLinesError",
    "PostedEntry",
    "PostedLine",
    "ReportPeriodError",
    "TreeRow",
    "TrialBalance",
    "TrialBalanceRow",
    "UnbalancedEntryError",
    "ZERO",
    "build_balance_sheet",
    "build_income_statement",
    "build_tree",
    "build_trial_balance",
    "to_amount",
    "toggle",
    "validate_period",
]
