"""Trial balance, income statement and balance sheet screens.

Each report is recomputed from freshly fetched rows on every request; the
aggregation itself lives in ``freightdesk.domain.accounting``.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, TypeVar

from freightdesk.core.errors import BackendError
from freightdesk.core.log import get_logger, timeit
from freightdesk.domain.accounting import (
    BalanceCategory,
    build_balance_sheet,
    build_income_statement,
    build_trial_balance,
    validate_period,
)
from freightdesk.repositories import LedgerBackend
from freightdesk.schemas import (
    BalanceSheetOut,
    BalanceSheetScreen,
    IncomeStatementOut,
    IncomeStatementScreen,
    TrialBalanceOut,
    TrialBalanceScreen,
)
from freightdesk.schemas.reports import BalanceSheetSectionOut, IncomeLineOut, TrialBalanceLineOut

from .screen import DEFAULT_REGISTRY, EMPTY, ERROR, LOADED, ScreenRegistry

LOGGER = get_logger(__name__)

R = TypeVar("R")


def default_income_period(days: int, *, today: date | None = None) -> tuple[date, date]:
    """Return the inclusive ``days``-long window ending ``today``."""

    end = today or date.today()
    return end - timedelta(days=days), end


class ReportService:
    """Builds the three financial statements for a screen owner."""

    def __init__(
        self,
        backend: LedgerBackend,
        *,
        income_statement_days: int = 30,
        screens: ScreenRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._backend = backend
        self._days = income_statement_days
        self._screens = screens

    def _load(self, owner: str, screen: str, label: str, fetch: Callable[[], list[R]]):
        state = self._screens.get(owner, screen)
        ticket = state.begin()
        try:
            with timeit(f"{label.capitalize()} load", logger=LOGGER) as timer:
                rows = fetch()
                timer.add(len(rows))
        except BackendError as exc:
            message = f"Failed to load {label}: {exc.message}"
            state.fail(ticket, message)
            return state, ticket, None, message
        return state, ticket, rows, None

    def trial_balance(self, owner: str) -> TrialBalanceScreen:
        state, ticket, rows, error = self._load(
            owner, "trial_balance", "trial balance", self._backend.fetch_trial_balance
        )
        if rows is None:
            return TrialBalanceScreen(status=ERROR, error=error)
        if not rows:
            payload = TrialBalanceScreen(status=EMPTY)
            state.resolve(ticket, payload, empty=True)
            return payload

        report = build_trial_balance(rows)
        if not report.is_balanced:
            LOGGER.warning("Trial balance is out of balance", extra={"difference": str(report.difference)})
        payload = TrialBalanceScreen(
            status=LOADED,
            data=TrialBalanceOut(
                rows=[TrialBalanceLineOut.model_validate(row) for row in report.rows],
                grand_total_debit=report.grand_total_debit,
                grand_total_credit=report.grand_total_credit,
                difference=report.difference,
                is_balanced=report.is_balanced,
            ),
        )
        state.resolve(ticket, payload)
        return payload

    def income_statement(
        self,
        owner: str,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> IncomeStatementScreen:
        """Build the statement for ``start``..``end``; a reversed range raises before any fetch."""

        default_start, default_end = default_income_period(self._days)
        start = start or default_start
        end = end or default_end
        validate_period(start, end)

        state, ticket, rows, error = self._load(
            owner,
            "income_statement",
            "income statement",
            lambda: self._backend.fetch_income_statement(start, end),
        )
        if rows is None:
            return IncomeStatementScreen(status=ERROR, error=error)
        if not rows:
            payload = IncomeStatementScreen(status=EMPTY)
            state.resolve(ticket, payload, empty=True)
            return payload

        statement = build_income_statement(rows, start=start, end=end)
        if statement.unclassified:
            LOGGER.warning(
                "Income statement rows with unknown category",
                extra={"count": len(statement.unclassified)},
            )
        payload = IncomeStatementScreen(
            status=LOADED,
            data=IncomeStatementOut(
                start=statement.start,
                end=statement.end,
                revenues=[IncomeLineOut.model_validate(row) for row in statement.revenues],
                expenses=[IncomeLineOut.model_validate(row) for row in statement.expenses],
                unclassified=[IncomeLineOut.model_validate(row) for row in statement.unclassified],
                total_revenue=statement.total_revenue,
                total_expense=statement.total_expense,
                net_income=statement.net_income,
                result_label=statement.result_label,
            ),
        )
        state.resolve(ticket, payload)
        return payload

    def balance_sheet(self, owner: str, *, as_of: date | None = None) -> BalanceSheetScreen:
        as_of = as_of or date.today()
        state, ticket, rows, error = self._load(
            owner,
            "balance_sheet",
            "balance sheet",
            lambda: self._backend.fetch_balance_sheet(as_of),
        )
        if rows is None:
            return BalanceSheetScreen(status=ERROR, error=error)
        if not rows:
            payload = BalanceSheetScreen(status=EMPTY)
            state.resolve(ticket, payload, empty=True)
            return payload

        sheet = build_balance_sheet(rows, as_of=as_of)

        def _sections(category: BalanceCategory) -> list[BalanceSheetSectionOut]:
            return [BalanceSheetSectionOut.model_validate(s) for s in sheet.sections(category)]

        payload = BalanceSheetScreen(
            status=LOADED,
            data=BalanceSheetOut(
                as_of=sheet.as_of,
                assets=_sections(BalanceCategory.ASSET),
                liabilities=_sections(BalanceCategory.LIABILITY),
                equity=_sections(BalanceCategory.EQUITY),
                total_assets=sheet.total_assets,
                total_liabilities=sheet.total_liabilities,
                total_equity=sheet.total_equity,
                total_liabilities_and_equity=sheet.total_liabilities_and_equity,
                is_balanced=sheet.is_balanced,
            ),
        )
        state.resolve(ticket, payload)
        return payload


__all__ = ["ReportService", "default_income_period"]
