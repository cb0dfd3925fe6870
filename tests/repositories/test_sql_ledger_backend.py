"""Tests for the SQL ledger backend against the seeded chart of accounts."""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from freightdesk.core.errors import BackendError
from freightdesk.db.seed import STANDARD_CHART, seed_chart_of_accounts
from freightdesk.domain.accounting import build_balance_sheet, build_trial_balance
from freightdesk.repositories import CURRENT_EARNINGS_NAME, SqlLedgerBackend


def _post(backend, entry_date, debit_id, credit_id, amount, description="Posting"):
    return backend.create_journal_entry(
        entry_date=entry_date,
        description=description,
        details=[
            {"account_id": debit_id, "debit_amount": amount},
            {"account_id": credit_id, "credit_amount": amount},
        ],
        created_by="tester",
    )


def test_chart_is_ordered_by_code_with_hierarchy(session, chart) -> None:
    accounts = SqlLedgerBackend(session).fetch_chart_of_accounts()

    codes = [account.code for account in accounts]
    assert codes == sorted(codes)
    by_code = {account.code: account for account in accounts}
    assert by_code["1101"].parent_id == chart["11"].id
    assert by_code["1101"].level == 3
    assert by_code["1"].parent_id is None


def test_posting_updates_balances_and_numbers_entries(session, chart) -> None:
    backend = SqlLedgerBackend(session)

    _post(backend, date(2024, 3, 1), chart["1101"].id, chart["41"].id, "500")
    _post(backend, date(2024, 3, 2), chart["51"].id, chart["1101"].id, "200")

    balances = {a.code: a.balance for a in backend.fetch_chart_of_accounts()}
    assert balances["1101"] == Decimal("300")
    assert balances["41"] == Decimal("500")
    assert balances["51"] == Decimal("200")

    entries = backend.fetch_journal_entries()
    assert [entry.entry_number for entry in entries] == ["JE-2024-00002", "JE-2024-00001"]
    assert entries[0].created_by == "tester"
    assert entries[0].is_approved is False
    assert [line.account_code for line in entries[1].lines] == ["1101", "41"]
    assert entries[1].total_debit == Decimal("500")


def test_unbalanced_entry_is_rejected(session, chart) -> None:
    backend = SqlLedgerBackend(session)

    with pytest.raises(BackendError, match="Journal entry rejected"):
        backend.create_journal_entry(
            entry_date=date(2024, 3, 1),
            description="Broken",
            details=[
                {"account_id": chart["1101"].id, "debit_amount": "500"},
                {"account_id": chart["41"].id, "credit_amount": "300"},
            ],
        )

    assert backend.fetch_journal_entries() == []


def test_header_account_cannot_be_posted_to(session, chart) -> None:
    backend = SqlLedgerBackend(session)

    with pytest.raises(BackendError, match="sub-accounts"):
        _post(backend, date(2024, 3, 1), chart["11"].id, chart["41"].id, "10")


def test_unknown_and_inactive_accounts_are_rejected(session, chart) -> None:
    backend = SqlLedgerBackend(session)
    chart["1201"].is_active = False
    session.commit()

    with pytest.raises(BackendError, match="unknown account"):
        _post(backend, date(2024, 3, 1), "missing", chart["41"].id, "10")
    with pytest.raises(BackendError, match="inactive"):
        _post(backend, date(2024, 3, 1), chart["1201"].id, chart["41"].id, "10")


def test_trial_balance_rows_balance(session, chart) -> None:
    backend = SqlLedgerBackend(session)
    _post(backend, date(2024, 3, 1), chart["1101"].id, chart["41"].id, "500")
    _post(backend, date(2024, 3, 2), chart["51"].id, chart["1101"].id, "200")

    rows = backend.fetch_trial_balance()

    assert [row.account_code for row in rows] == ["1101", "41", "51"]
    assert rows[0].total_debit == Decimal("500")
    assert rows[0].total_credit == Decimal("200")
    assert build_trial_balance(rows).is_balanced


def test_income_statement_respects_period(session, chart) -> None:
    backend = SqlLedgerBackend(session)
    _post(backend, date(2024, 1, 15), chart["1101"].id, chart["41"].id, "1200")
    _post(backend, date(2024, 1, 20), chart["51"].id, chart["1101"].id, "450")
    _post(backend, date(2024, 2, 5), chart["1101"].id, chart["42"].id, "99")

    rows = backend.fetch_income_statement(date(2024, 1, 1), date(2024, 1, 31))

    assert [(row.category, row.account_name, row.amount) for row in rows] == [
        ("revenue", "Freight revenue", Decimal("1200")),
        ("expense", "Carrier charges", Decimal("450")),
    ]


def test_balance_sheet_carries_current_earnings(session, chart) -> None:
    backend = SqlLedgerBackend(session)
    _post(backend, date(2024, 1, 2), chart["1102"].id, chart["31"].id, "1000")
    _post(backend, date(2024, 1, 15), chart["1101"].id, chart["41"].id, "300")
    _post(backend, date(2024, 1, 20), chart["51"].id, chart["2101"].id, "120")
    _post(backend, date(2024, 6, 1), chart["1101"].id, chart["42"].id, "50")

    rows = backend.fetch_balance_sheet(date(2024, 3, 31))

    names = {row.account_name: row for row in rows}
    assert names["Bank accounts"].sub_category == "Current assets"
    assert names["Accounts payable"].balance == Decimal("120")
    assert names[CURRENT_EARNINGS_NAME].balance == Decimal("180")
    assert names[CURRENT_EARNINGS_NAME].category == "equity"
    sheet = build_balance_sheet(rows, as_of=date(2024, 3, 31))
    assert sheet.total_assets == Decimal("1300")
    assert sheet.is_balanced


def test_seeding_is_idempotent(session, chart) -> None:
    again = seed_chart_of_accounts(session)

    assert len(again) == len(STANDARD_CHART)
    assert again["1101"].id == chart["1101"].id


def test_seeding_logs_how_many_accounts_were_added(session, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="freightdesk.db.seed"):
        seed_chart_of_accounts(session)
        seed_chart_of_accounts(session)

    counts = [r.seeded for r in caplog.records if r.name == "freightdesk.db.seed"]
    assert counts == [len(STANDARD_CHART), 0]
