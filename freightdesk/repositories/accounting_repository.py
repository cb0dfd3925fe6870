"""SQL implementation of the ledger persistence collaborator.

The report "procedures" aggregate posted detail lines in the database and hand
flat rows to the domain aggregators, the same shape a hosted backend's RPCs
return.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping

from sqlalchemy import func, select
from sqlalchemy.orm import aliased, selectinload

from freightdesk.core.errors import BackendError
from freightdesk.core.log import get_logger
from freightdesk.domain.accounting import (
    AccountType,
    BalanceSheetRow,
    ChartAccount,
    IncomeStatementRow,
    JournalDraft,
    LedgerValidationError,
    PostedEntry,
    PostedLine,
    TrialBalanceRow,
)
from freightdesk.models import ChartOfAccount, JournalEntry, JournalEntryDetail

from .base import BaseRepository

LOGGER = get_logger(__name__)

CURRENT_EARNINGS_NAME = "Current earnings"
RETAINED_EARNINGS_SUB_CATEGORY = "Retained earnings"

_INCOME_TYPES = (AccountType.REVENUE, AccountType.EXPENSE)


def _normal_balance(account_type: AccountType, debit: Decimal, credit: Decimal) -> Decimal:
    return debit - credit if account_type.is_debit_normal else credit - debit


class SqlLedgerBackend(BaseRepository):
    """Ledger backend reading and writing the accounting tables directly."""

    # ------------------------------------------------------------------
    # Chart of accounts
    # ------------------------------------------------------------------
    def fetch_chart_of_accounts(self) -> list[ChartAccount]:
        with self._guard("load the chart of accounts"):
            rows = (
                self._session.execute(
                    select(ChartOfAccount).order_by(ChartOfAccount.account_code)
                )
                .scalars()
                .all()
            )
        return [self._to_chart_account(row) for row in rows]

    @classmethod
    def _to_chart_account(cls, row: ChartOfAccount) -> ChartAccount:
        return ChartAccount(
            id=row.id,
            code=row.account_code,
            name=row.account_name,
            account_type=AccountType(row.account_type),
            level=int(row.level or 1),
            balance=cls._to_decimal(row.balance),
            is_active=bool(row.is_active),
            parent_id=row.parent_account_id,
        )

    # ------------------------------------------------------------------
    # Journal entries
    # ------------------------------------------------------------------
    def fetch_journal_entries(self) -> list[PostedEntry]:
        statement = (
            select(JournalEntry)
            .options(selectinload(JournalEntry.details).joinedload(JournalEntryDetail.account))
            .order_by(JournalEntry.entry_date.desc(), JournalEntry.created_at.desc())
        )
        with self._guard("load journal entries"):
            entries = self._session.execute(statement).scalars().all()
            return [self._to_posted_entry(entry) for entry in entries]

    @classmethod
    def _to_posted_entry(cls, entry: JournalEntry) -> PostedEntry:
        return PostedEntry(
            id=entry.id,
            entry_number=entry.entry_number,
            entry_date=cls._coerce_date(entry.entry_date),
            description=entry.description or "",
            total_debit=cls._to_decimal(entry.total_debit),
            total_credit=cls._to_decimal(entry.total_credit),
            is_approved=bool(entry.is_approved),
            created_at=entry.created_at,
            created_by=entry.created_by,
            approved_by=entry.approved_by,
            approved_at=entry.approved_at,
            lines=tuple(
                PostedLine(
                    id=detail.id,
                    account_id=detail.account_id,
                    debit_amount=cls._to_decimal(detail.debit_amount),
                    credit_amount=cls._to_decimal(detail.credit_amount),
                    description=detail.description,
                    account_code=detail.account.account_code if detail.account else None,
                    account_name=detail.account.account_name if detail.account else None,
                )
                for detail in entry.details
            ),
        )

    def _next_entry_number(self, entry_date: date) -> str:
        prefix = f"JE-{entry_date.year}-"
        numbers = (
            self._session.execute(
                select(JournalEntry.entry_number).where(
                    JournalEntry.entry_number.like(f"{prefix}%")
                )
            )
            .scalars()
            .all()
        )
        sequence = max(
            (int(number[len(prefix):]) for number in numbers if number[len(prefix):].isdigit()),
            default=0,
        )
        return f"{prefix}{sequence + 1:05d}"

    def create_journal_entry(
        self,
        *,
        entry_date: date,
        description: str,
        details: Iterable[Mapping[str, Any]],
        created_by: str | None = None,
    ) -> str:
        """Record a balanced entry and post it to account balances in one transaction."""

        try:
            draft = JournalDraft.from_payload(
                entry_date=entry_date, description=description, details=details
            )
            totals = draft.validate()
        except LedgerValidationError as exc:
            raise BackendError(f"Journal entry rejected: {exc}") from exc

        account_ids = {line.account_id for line in draft.lines}
        with self._guard("create the journal entry"):
            accounts = {
                account.id: account
                for account in self._session.execute(
                    select(ChartOfAccount).where(ChartOfAccount.id.in_(account_ids))
                ).scalars()
            }
            missing = account_ids - accounts.keys()
            if missing:
                raise BackendError(f"Journal entry rejected: unknown account {sorted(missing)[0]}")
            inactive = sorted(a.account_code for a in accounts.values() if not a.is_active)
            if inactive:
                raise BackendError(f"Journal entry rejected: account {inactive[0]} is inactive")
            headers = set(
                self._session.execute(
                    select(ChartOfAccount.parent_account_id)
                    .where(ChartOfAccount.parent_account_id.in_(account_ids))
                    .distinct()
                ).scalars()
            )
            if headers:
                code = sorted(accounts[i].account_code for i in headers)[0]
                raise BackendError(
                    f"Journal entry rejected: account {code} has sub-accounts and cannot be posted to"
                )

            entry = JournalEntry(
                entry_number=self._next_entry_number(draft.entry_date),
                entry_date=draft.entry_date,
                description=draft.description,
                total_debit=totals.debit,
                total_credit=totals.credit,
                is_approved=False,
                created_by=created_by,
            )
            for position, line in enumerate(draft.lines, start=1):
                entry.details.append(
                    JournalEntryDetail(
                        account_id=line.account_id,
                        debit_amount=line.debit_amount,
                        credit_amount=line.credit_amount,
                        description=line.description or None,
                        line_number=position,
                    )
                )
                account = accounts[line.account_id]
                delta = _normal_balance(
                    AccountType(account.account_type), line.debit_amount, line.credit_amount
                )
                account.balance = self._to_decimal(account.balance) + delta

            self._session.add(entry)
            self._session.commit()
            entry_id = entry.id

        LOGGER.info(
            "Journal entry posted",
            extra={"entry_id": entry_id, "lines": len(draft.lines), "total": str(totals.debit)},
        )
        return entry_id

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------
    @staticmethod
    def _sums():
        return (
            func.coalesce(func.sum(JournalEntryDetail.debit_amount), 0).label("total_debit"),
            func.coalesce(func.sum(JournalEntryDetail.credit_amount), 0).label("total_credit"),
        )

    def fetch_trial_balance(self) -> list[TrialBalanceRow]:
        statement = (
            select(
                ChartOfAccount.id,
                ChartOfAccount.account_code,
                ChartOfAccount.account_name,
                *self._sums(),
            )
            .join(JournalEntryDetail, JournalEntryDetail.account_id == ChartOfAccount.id)
            .group_by(ChartOfAccount.id, ChartOfAccount.account_code, ChartOfAccount.account_name)
            .order_by(ChartOfAccount.account_code)
        )
        with self._guard("load the trial balance"):
            result = self._session.execute(statement).all()
        return [
            TrialBalanceRow(
                account_id=row.id,
                account_code=row.account_code,
                account_name=row.account_name,
                total_debit=self._to_decimal(row.total_debit),
                total_credit=self._to_decimal(row.total_credit),
            )
            for row in result
        ]

    def fetch_income_statement(self, start: date, end: date) -> list[IncomeStatementRow]:
        statement = (
            select(
                ChartOfAccount.account_code,
                ChartOfAccount.account_name,
                ChartOfAccount.account_type,
                *self._sums(),
            )
            .join(JournalEntryDetail, JournalEntryDetail.account_id == ChartOfAccount.id)
            .join(JournalEntry, JournalEntry.id == JournalEntryDetail.journal_entry_id)
            .where(
                ChartOfAccount.account_type.in_([t.value for t in _INCOME_TYPES]),
                JournalEntry.entry_date >= start,
                JournalEntry.entry_date <= end,
            )
            .group_by(
                ChartOfAccount.id,
                ChartOfAccount.account_code,
                ChartOfAccount.account_name,
                ChartOfAccount.account_type,
            )
            .order_by(ChartOfAccount.account_code)
        )
        with self._guard("load the income statement"):
            result = self._session.execute(statement).all()

        rows: list[IncomeStatementRow] = []
        for row in result:
            account_type = AccountType(row.account_type)
            amount = _normal_balance(
                account_type, self._to_decimal(row.total_debit), self._to_decimal(row.total_credit)
            )
            if amount == 0:
                continue
            rows.append(
                IncomeStatementRow(
                    category=account_type.value,
                    account_name=row.account_name,
                    amount=amount,
                )
            )
        return rows

    def fetch_balance_sheet(self, as_of: date) -> list[BalanceSheetRow]:
        parent = aliased(ChartOfAccount)
        statement = (
            select(
                ChartOfAccount.account_code,
                ChartOfAccount.account_name,
                ChartOfAccount.account_type,
                parent.account_name.label("parent_name"),
                *self._sums(),
            )
            .join(JournalEntryDetail, JournalEntryDetail.account_id == ChartOfAccount.id)
            .join(JournalEntry, JournalEntry.id == JournalEntryDetail.journal_entry_id)
            .outerjoin(parent, parent.id == ChartOfAccount.parent_account_id)
            .where(JournalEntry.entry_date <= as_of)
            .group_by(
                ChartOfAccount.id,
                ChartOfAccount.account_code,
                ChartOfAccount.account_name,
                ChartOfAccount.account_type,
                parent.account_name,
            )
            .order_by(ChartOfAccount.account_code)
        )
        with self._guard("load the balance sheet"):
            result = self._session.execute(statement).all()

        rows: list[BalanceSheetRow] = []
        earnings = Decimal(0)
        for row in result:
            account_type = AccountType(row.account_type)
            balance = _normal_balance(
                account_type, self._to_decimal(row.total_debit), self._to_decimal(row.total_credit)
            )
            if account_type in _INCOME_TYPES:
                earnings += balance if account_type is AccountType.REVENUE else -balance
                continue
            rows.append(
                BalanceSheetRow(
                    category=account_type.value,
                    sub_category=row.parent_name or account_type.label,
                    account_name=row.account_name,
                    balance=balance,
                )
            )

        # Without closing entries, period earnings still sit in revenue/expense.
        if earnings != 0:
            rows.append(
                BalanceSheetRow(
                    category=AccountType.EQUITY.value,
                    sub_category=RETAINED_EARNINGS_SUB_CATEGORY,
                    account_name=CURRENT_EARNINGS_NAME,
                    balance=earnings,
                )
            )
        return rows


__all__ = ["CURRENT_EARNINGS_NAME", "SqlLedgerBackend"]
