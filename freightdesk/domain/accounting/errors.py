"""Local validation errors raised by the ledger rules.

These never involve I/O: they are detected synchronously from the draft or the
requested report parameters and are fully recoverable by editing the input.
"""
from __future__ import annotations


class LedgerValidationError(ValueError):
    """Base class for user-facing ledger validation failures."""


class UnbalancedEntryError(LedgerValidationError):
    """Debits and credits differ, or both sum to zero."""


class IncompleteEntryError(LedgerValidationError):
    """A detail line is missing its account or its amount."""


class MinimumLinesError(LedgerValidationError):
    """An entry would be left with fewer than two detail lines."""


class InvalidAmountError(LedgerValidationError):
    """An amount is negative, not numeric, or set on both sides of a line."""


class ReportPeriodError(LedgerValidationError):
    """A report was requested for an impossible date range."""


__all__ = [
    "IncompleteEntryError",
    "InvalidAmountError",
    "LedgerValidationError",
    "MinimumLinesError",
    "ReportPeriodError",
    "UnbalancedEntryError",
]
