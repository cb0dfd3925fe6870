"""Journal entry drafts and the rules that decide whether one may be posted."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Collection, Iterable, Mapping

from .errors import (
    IncompleteEntryError,
    InvalidAmountError,
    MinimumLinesError,
    UnbalancedEntryError,
)
from .types import ZERO, to_amount

MIN_LINES = 2


def _non_negative(value: Any) -> Decimal:
    amount = to_amount(value)
    if amount < ZERO:
        raise InvalidAmountError("Amounts cannot be negative.")
    return amount


@dataclass(frozen=True, slots=True)
class DraftLine:
    """One debit-or-credit posting line of an unposted entry."""

    account_id: str = ""
    debit_amount: Decimal = ZERO
    credit_amount: Decimal = ZERO
    description: str = ""

    def with_debit(self, value: Any) -> "DraftLine":
        amount = _non_negative(value)
        if amount > ZERO:
            return replace(self, debit_amount=amount, credit_amount=ZERO)
        return replace(self, debit_amount=amount)

    def with_credit(self, value: Any) -> "DraftLine":
        amount = _non_negative(value)
        if amount > ZERO:
            return replace(self, credit_amount=amount, debit_amount=ZERO)
        return replace(self, credit_amount=amount)

    @property
    def is_blank_amount(self) -> bool:
        return self.debit_amount == ZERO and self.credit_amount == ZERO

    def as_payload(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "debit_amount": self.debit_amount,
            "credit_amount": self.credit_amount,
            "description": self.description,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DraftLine":
        """Build a line from submitted data without the edit-time exclusivity reset.

        A line arriving with both sides set is kept as-is so ``validate`` can
        reject it instead of silently dropping one of the amounts.
        """

        return cls(
            account_id=str(data.get("account_id") or "").strip(),
            debit_amount=_non_negative(data.get("debit_amount")),
            credit_amount=_non_negative(data.get("credit_amount")),
            description=str(data.get("description") or ""),
        )


@dataclass(frozen=True, slots=True)
class JournalTotals:
    debit: Decimal
    credit: Decimal

    @property
    def difference(self) -> Decimal:
        return self.debit - self.credit

    @property
    def is_balanced(self) -> bool:
        return self.debit == self.credit and self.debit > ZERO


@dataclass(frozen=True, slots=True)
class JournalDraft:
    """Immutable draft of a journal entry; every edit returns a new draft."""

    entry_date: date
    description: str = ""
    lines: tuple[DraftLine, ...] = field(default=(DraftLine(), DraftLine()))

    @classmethod
    def blank(cls, *, today: date | None = None) -> "JournalDraft":
        return cls(entry_date=today or date.today())

    @classmethod
    def from_payload(
        cls,
        *,
        entry_date: date,
        description: str,
        details: Iterable[Mapping[str, Any]],
    ) -> "JournalDraft":
        return cls(
            entry_date=entry_date,
            description=description.strip(),
            lines=tuple(DraftLine.from_mapping(item) for item in details),
        )

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def _replace_line(self, index: int, line: DraftLine) -> "JournalDraft":
        if not 0 <= index < len(self.lines):
            raise IndexError(f"No detail line at position {index}")
        lines = list(self.lines)
        lines[index] = line
        return replace(self, lines=tuple(lines))

    def set_debit(self, index: int, value: Any) -> "JournalDraft":
        return self._replace_line(index, self.lines[index].with_debit(value))

    def set_credit(self, index: int, value: Any) -> "JournalDraft":
        return self._replace_line(index, self.lines[index].with_credit(value))

    def set_account(self, index: int, account_id: str) -> "JournalDraft":
        return self._replace_line(
            index, replace(self.lines[index], account_id=(account_id or "").strip())
        )

    def set_line_description(self, index: int, text: str) -> "JournalDraft":
        return self._replace_line(index, replace(self.lines[index], description=text))

    def add_line(self) -> "JournalDraft":
        return replace(self, lines=self.lines + (DraftLine(),))

    def remove_line(self, index: int) -> "JournalDraft":
        if len(self.lines) <= MIN_LINES:
            raise MinimumLinesError("An entry must keep at least two lines.")
        if not 0 <= index < len(self.lines):
            raise IndexError(f"No detail line at position {index}")
        return replace(self, lines=self.lines[:index] + self.lines[index + 1 :])

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @property
    def totals(self) -> JournalTotals:
        debit = sum((line.debit_amount for line in self.lines), ZERO)
        credit = sum((line.credit_amount for line in self.lines), ZERO)
        return JournalTotals(debit=debit, credit=credit)

    def validate(self, postable_account_ids: Collection[str] | None = None) -> JournalTotals:
        """Raise a ``LedgerValidationError`` unless the draft may be submitted."""

        if len(self.lines) < MIN_LINES:
            raise MinimumLinesError("An entry must have at least two lines.")

        for position, line in enumerate(self.lines, start=1):
            if line.debit_amount > ZERO and line.credit_amount > ZERO:
                raise InvalidAmountError(
                    f"Line {position} has both a debit and a credit amount."
                )

        totals = self.totals
        if not totals.is_balanced:
            raise UnbalancedEntryError(
                "The entry is not balanced: total debit "
                f"{totals.debit} must equal total credit {totals.credit} "
                "and be greater than zero."
            )

        for position, line in enumerate(self.lines, start=1):
            if not line.account_id:
                raise IncompleteEntryError(f"Choose an account for line {position}.")
            if postable_account_ids is not None and line.account_id not in postable_account_ids:
                raise IncompleteEntryError(
                    f"Line {position} references an account that cannot be posted to."
                )
            if line.is_blank_amount:
                raise IncompleteEntryError(f"Line {position} has no amount.")

        return totals

    def as_payload(self) -> dict[str, Any]:
        return {
            "entry_date": self.entry_date,
            "description": self.description,
            "details": [line.as_payload() for line in self.lines],
        }


@dataclass(frozen=True, slots=True)
class PostedLine:
    """A detail line of a posted entry, annotated with its account for display."""

    id: str
    account_id: str
    debit_amount: Decimal
    credit_amount: Decimal
    description: str | None = None
    account_code: str | None = None
    account_name: str | None = None


@dataclass(frozen=True, slots=True)
class PostedEntry:
    """A journal entry accepted by the ledger; never edited afterwards."""

    id: str
    entry_number: str
    entry_date: date
    description: str
    total_debit: Decimal
    total_credit: Decimal
    is_approved: bool
    lines: tuple[PostedLine, ...]
    created_at: datetime | None = None
    created_by: str | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None


__all__ = [
    "DraftLine",
    "JournalDraft",
    "JournalTotals",
    "MIN_LINES",
    "PostedEntry",
    "PostedLine",
]
