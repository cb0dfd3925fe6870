"""Tests for the trial balance, income statement and balance sheet aggregators."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from freightdesk.domain.accounting import (
    BalanceCategory,
    BalanceSheetRow,
    IncomeStatementRow,
    ReportPeriodError,
    TrialBalanceRow,
    build_balance_sheet,
    build_income_statement,
    build_trial_balance,
)


def _tb(account_id: str, debit: str, credit: str) -> TrialBalanceRow:
    return TrialBalanceRow(
        account_id=account_id,
        account_code=account_id.upper(),
        account_name=f"Account {account_id}",
        total_debit=Decimal(debit),
        total_credit=Decimal(credit),
    )


def test_trial_balance_sums_and_balances() -> None:
    report = build_trial_balance([_tb("cash", "700", "200"), _tb("revenue", "0", "500")])

    assert report.grand_total_debit == Decimal("700")
    assert report.grand_total_credit == Decimal("700")
    assert report.is_balanced
    assert report.difference == 0


def test_trial_balance_tolerates_rounding_noise() -> None:
    report = build_trial_balance([_tb("cash", "100.0004", "0"), _tb("revenue", "0", "100")])

    assert report.is_balanced


def test_trial_balance_flags_a_one_unit_discrepancy() -> None:
    report = build_trial_balance([_tb("cash", "101", "0"), _tb("revenue", "0", "100")])

    assert not report.is_balanced
    assert report.difference == Decimal("1")


def test_trial_balance_flags_a_discrepancy_at_the_tolerance() -> None:
    report = build_trial_balance([_tb("cash", "100.001", "0"), _tb("revenue", "0", "100")])

    assert not report.is_balanced


def test_trial_balance_merges_duplicate_accounts_in_first_seen_order() -> None:
    report = build_trial_balance(
        [_tb("revenue", "0", "50"), _tb("cash", "30", "0"), _tb("revenue", "0", "25")]
    )

    assert [row.account_id for row in report.rows] == ["revenue", "cash"]
    assert report.rows[0].total_credit == Decimal("75")


def test_empty_trial_balance_is_balanced_at_zero() -> None:
    report = build_trial_balance([])

    assert report.rows == ()
    assert report.is_balanced


def test_income_statement_profit() -> None:
    rows = [
        IncomeStatementRow("revenue", "Freight", Decimal("1000")),
        IncomeStatementRow("revenue", "Clearance", Decimal("200")),
        IncomeStatementRow("expense", "Carriers", Decimal("300")),
        IncomeStatementRow("expense", "Rent", Decimal("150")),
    ]

    statement = build_income_statement(rows, start=date(2024, 1, 1), end=date(2024, 1, 31))

    assert statement.total_revenue == Decimal("1200")
    assert statement.total_expense == Decimal("450")
    assert statement.net_income == Decimal("750")
    assert statement.result_label == "profit"


def test_income_statement_loss_and_unknown_categories() -> None:
    rows = [
        IncomeStatementRow("revenue", "Freight", Decimal("100")),
        IncomeStatementRow("expense", "Carriers", Decimal("180")),
        IncomeStatementRow("other", "Mystery", Decimal("5")),
    ]

    statement = build_income_statement(rows, start=date(2024, 1, 1), end=date(2024, 1, 1))

    assert statement.net_income == Decimal("-80")
    assert statement.result_label == "loss"
    assert [row.account_name for row in statement.unclassified] == ["Mystery"]


def test_break_even_counts_as_profit() -> None:
    statement = build_income_statement([], start=date(2024, 1, 1), end=date(2024, 1, 31))

    assert statement.net_income == 0
    assert statement.result_label == "profit"


def test_income_statement_rejects_reversed_period() -> None:
    with pytest.raises(ReportPeriodError):
        build_income_statement([], start=date(2024, 2, 1), end=date(2024, 1, 1))


def test_balance_sheet_balances() -> None:
    rows = [
        BalanceSheetRow("asset", "Current assets", "Cash", Decimal("100")),
        BalanceSheetRow("asset", "Current assets", "Receivables", Decimal("50")),
        BalanceSheetRow("liability", "Current liabilities", "Payables", Decimal("30")),
        BalanceSheetRow("equity", "Equity", "Capital", Decimal("120")),
    ]

    sheet = build_balance_sheet(rows, as_of=date(2024, 3, 31))

    assert sheet.total_assets == Decimal("150")
    assert sheet.total_liabilities_and_equity == Decimal("150")
    assert sheet.is_balanced


def test_balance_sheet_groups_sections_by_sub_category() -> None:
    rows = [
        BalanceSheetRow("asset", "Current assets", "Cash", Decimal("100")),
        BalanceSheetRow("asset", "Fixed assets", "Trucks", Decimal("400")),
        BalanceSheetRow("asset", "Current assets", "Bank", Decimal("60")),
        BalanceSheetRow("revenue", "Revenue", "Ignored", Decimal("999")),
    ]

    sheet = build_balance_sheet(rows, as_of=date(2024, 3, 31))
    sections = sheet.sections(BalanceCategory.ASSET)

    assert [section.sub_category for section in sections] == ["Current assets", "Fixed assets"]
    assert sections[0].total == Decimal("160")
    assert sheet.total_assets == Decimal("560")
    assert not sheet.is_balanced
