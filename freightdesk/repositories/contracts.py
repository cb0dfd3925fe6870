"""Request/response contract of the ledger persistence collaborator."""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Protocol

from freightdesk.domain.accounting import (
    BalanceSheetRow,
    ChartAccount,
    IncomeStatementRow,
    PostedEntry,
    TrialBalanceRow,
)


class LedgerBackend(Protocol):
    """Every method may raise ``BackendError`` carrying the collaborator's message."""

    def fetch_chart_of_accounts(self) -> list[ChartAccount]:
        """Return all accounts ordered by code."""

    def fetch_journal_entries(self) -> list[PostedEntry]:
        """Return posted entries, newest entry date first."""

    def create_journal_entry(
        self,
        *,
        entry_date: date,
        description: str,
        details: Iterable[Mapping[str, Any]],
        created_by: str | None = None,
    ) -> str:
        """Atomically record a balanced entry and return its generated id."""

    def fetch_trial_balance(self) -> list[TrialBalanceRow]:
        ...

    def fetch_income_statement(self, start: date, end: date) -> list[IncomeStatementRow]:
        ...

    def fetch_balance_sheet(self, as_of: date) -> list[BalanceSheetRow]:
        ...


__all__ = ["LedgerBackend"]
