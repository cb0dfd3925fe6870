"""Ledger backend speaking to a hosted PostgREST-style API over HTTP.

Tables are read from ``/rest/v1/<table>`` and the accounting procedures are
invoked through ``/rest/v1/rpc/<function>``. The hosted procedures label
report categories in Arabic; they are normalised to the account-type values
the domain aggregators expect.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterable, Mapping, TypeVar

import httpx

from freightdesk.core.config import BackendSettings
from freightdesk.core.errors import BackendError
from freightdesk.core.log import get_logger, timeit
from freightdesk.domain.accounting import (
    AccountType,
    BalanceSheetRow,
    ChartAccount,
    IncomeStatementRow,
    PostedEntry,
    PostedLine,
    TrialBalanceRow,
    to_amount,
)

LOGGER = get_logger(__name__)

RowT = TypeVar("RowT")

CATEGORY_ALIASES: Mapping[str, str] = {
    "الإيرادات": AccountType.REVENUE.value,
    "المصاريف": AccountType.EXPENSE.value,
    "الأصول": AccountType.ASSET.value,
    "الخصوم": AccountType.LIABILITY.value,
    "حقوق الملكية": AccountType.EQUITY.value,
}

_JOURNAL_SELECT = "*,journal_entry_details(*,chart_of_accounts(account_name,account_code))"


def normalize_category(value: Any) -> str:
    text = str(value or "").strip()
    return CATEGORY_ALIASES.get(text, text.lower())


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class RestLedgerBackend:
    """``LedgerBackend`` implementation backed by ``httpx``."""

    def __init__(
        self,
        settings: BackendSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"apikey": settings.anon_key, "Content-Type": "application/json"}
        if settings.anon_key:
            headers["Authorization"] = f"Bearer {settings.anon_key}"
        self._client = httpx.Client(
            base_url=f"{settings.url}/rest/v1",
            headers=headers,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RestLedgerBackend":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, Mapping):
            for key in ("message", "error_description", "error", "hint"):
                if body.get(key):
                    return str(body[key])
        return f"HTTP {response.status_code}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        with timeit(f"{method} {path}", logger=LOGGER) as timer:
            try:
                response = self._client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                LOGGER.error("Ledger backend unreachable", extra={"path": path, "reason": str(exc)})
                raise BackendError(f"Backend request failed: {exc}") from exc

            if response.is_error:
                message = self._error_message(response)
                LOGGER.warning(
                    "Ledger backend rejected request",
                    extra={"path": path, "status": response.status_code, "reason": message},
                )
                raise BackendError(message)

            payload = response.json() if response.content else None
            if isinstance(payload, list):
                timer.add(len(payload))
            return payload

    def _select(self, table: str, *, select: str = "*", order: str | None = None) -> list[dict]:
        params = {"select": select}
        if order:
            params["order"] = order
        return self._request("GET", f"/{table}", params=params) or []

    def _rpc(self, function: str, arguments: Mapping[str, Any] | None = None) -> Any:
        return self._request("POST", f"/rpc/{function}", json=dict(arguments or {}))

    # ------------------------------------------------------------------
    # LedgerBackend
    # ------------------------------------------------------------------
    def fetch_chart_of_accounts(self) -> list[ChartAccount]:
        rows = self._select("chart_of_accounts", order="account_code.asc")
        return _map_rows("chart of accounts", rows, _account_from_row)

    def fetch_journal_entries(self) -> list[PostedEntry]:
        rows = self._select(
            "journal_entries", select=_JOURNAL_SELECT, order="entry_date.desc,created_at.desc"
        )
        return _map_rows("journal entries", rows, _entry_from_row)

    def create_journal_entry(
        self,
        *,
        entry_date: date,
        description: str,
        details: Iterable[Mapping[str, Any]],
        created_by: str | None = None,
    ) -> str:
        # Amounts travel as decimal strings; PostgREST casts them to numeric.
        payload = [
            {
                "account_id": item.get("account_id"),
                "debit_amount": str(to_amount(item.get("debit_amount"))),
                "credit_amount": str(to_amount(item.get("credit_amount"))),
                "description": item.get("description") or "",
            }
            for item in details
        ]
        result = self._rpc(
            "create_journal_entry",
            {
                "p_entry_date": entry_date.isoformat(),
                "p_description": description,
                "p_details": payload,
            },
        )
        if not result:
            raise BackendError("Backend did not return the new entry id")
        LOGGER.info("Journal entry submitted", extra={"entry_id": str(result), "lines": len(payload)})
        return str(result)

    def fetch_trial_balance(self) -> list[TrialBalanceRow]:
        rows = self._rpc("get_trial_balance") or []
        return _map_rows("trial balance", rows, _trial_balance_from_row)

    def fetch_income_statement(self, start: date, end: date) -> list[IncomeStatementRow]:
        rows = self._rpc(
            "get_income_statement",
            {"start_date": start.isoformat(), "end_date": end.isoformat()},
        ) or []
        return _map_rows("income statement", rows, _income_line_from_row)

    def fetch_balance_sheet(self, as_of: date) -> list[BalanceSheetRow]:
        rows = self._rpc("get_balance_sheet", {"as_of_date": as_of.isoformat()}) or []
        return _map_rows("balance sheet", rows, _balance_line_from_row)


def _map_rows(what: str, rows: Any, mapper: Callable[[Mapping[str, Any]], RowT]) -> list[RowT]:
    """Apply ``mapper`` to every row; rows the domain types reject become ``BackendError``."""

    try:
        return [mapper(row) for row in rows]
    except (KeyError, TypeError, AttributeError, ValueError, ArithmeticError) as exc:
        reason = f"missing field {exc}" if isinstance(exc, KeyError) else str(exc)
        LOGGER.warning("Malformed ledger backend rows", extra={"rows": what, "reason": reason})
        raise BackendError(f"Malformed {what} response: {reason}") from exc


def _account_from_row(row: Mapping[str, Any]) -> ChartAccount:
    return ChartAccount(
        id=str(row["id"]),
        code=str(row["account_code"]),
        name=str(row["account_name"]),
        account_type=AccountType(normalize_category(row["account_type"])),
        level=int(row.get("level") or 1),
        balance=to_amount(row.get("balance")),
        is_active=bool(row.get("is_active", True)),
        parent_id=row.get("parent_account_id") or None,
    )


def _line_from_detail(detail: Mapping[str, Any]) -> PostedLine:
    account = detail.get("chart_of_accounts") or {}
    return PostedLine(
        id=str(detail["id"]),
        account_id=str(detail["account_id"]),
        debit_amount=to_amount(detail.get("debit_amount")),
        credit_amount=to_amount(detail.get("credit_amount")),
        description=detail.get("description"),
        account_code=account.get("account_code"),
        account_name=account.get("account_name"),
    )


def _entry_from_row(row: Mapping[str, Any]) -> PostedEntry:
    return PostedEntry(
        id=str(row["id"]),
        entry_number=str(row["entry_number"]),
        entry_date=_parse_date(row["entry_date"]),
        description=row.get("description") or "",
        total_debit=to_amount(row.get("total_debit")),
        total_credit=to_amount(row.get("total_credit")),
        is_approved=bool(row.get("is_approved")),
        created_by=row.get("created_by"),
        approved_by=row.get("approved_by"),
        lines=tuple(_line_from_detail(d) for d in row.get("journal_entry_details") or []),
    )


def _trial_balance_from_row(row: Mapping[str, Any]) -> TrialBalanceRow:
    return TrialBalanceRow(
        account_id=str(row["account_id"]),
        account_code=str(row["account_code"]),
        account_name=str(row["account_name"]),
        total_debit=to_amount(row.get("total_debit")),
        total_credit=to_amount(row.get("total_credit")),
    )


def _income_line_from_row(row: Mapping[str, Any]) -> IncomeStatementRow:
    return IncomeStatementRow(
        category=normalize_category(row.get("category")),
        account_name=str(row["account_name"]),
        amount=to_amount(row.get("amount")),
    )


def _balance_line_from_row(row: Mapping[str, Any]) -> BalanceSheetRow:
    return BalanceSheetRow(
        category=normalize_category(row.get("category")),
        sub_category=str(row.get("sub_category") or ""),
        account_name=str(row["account_name"]),
        balance=to_amount(row.get("balance")),
    )


__all__ = ["CATEGORY_ALIASES", "RestLedgerBackend", "normalize_category"]
