"""Shared value types for the accounting domain."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from .errors import InvalidAmountError

ZERO = Decimal("0")

# Absolute currency-unit tolerance absorbing rounding noise in report totals.
BALANCE_TOLERANCE = Decimal("0.001")


class AccountType(str, Enum):
    """Chart-of-accounts classification."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @property
    def is_debit_normal(self) -> bool:
        """Assets and expenses grow with debits; everything else with credits."""

        return self in (AccountType.ASSET, AccountType.EXPENSE)

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]


_TYPE_LABELS = {
    AccountType.ASSET: "Assets",
    AccountType.LIABILITY: "Liabilities",
    AccountType.EQUITY: "Equity",
    AccountType.REVENUE: "Revenue",
    AccountType.EXPENSE: "Expenses",
}


def to_amount(value: Any) -> Decimal:
    """Coerce ``value`` into a ``Decimal`` currency amount.

    Empty values count as zero, mirroring a blank amount field. Floats go
    through ``str`` so ``0.1`` stays ``Decimal("0.1")``.
    """

    if value is None or value == "":
        return ZERO
    if isinstance(value, bool):
        raise InvalidAmountError("Amount must be a number.")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmountError(f"Amount {value!r} is not a number.") from exc
    if not amount.is_finite():
        raise InvalidAmountError("Amount must be a finite number.")
    return amount


def within_tolerance(left: Decimal, right: Decimal) -> bool:
    return abs(left - right) < BALANCE_TOLERANCE


__all__ = [
    "AccountType",
    "BALANCE_TOLERANCE",
    "ZERO",
    "to_amount",
    "within_tolerance",
]
