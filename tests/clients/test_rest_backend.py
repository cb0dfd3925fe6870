"""Tests for the HTTP ledger backend using a mocked transport."""
from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import httpx
import pytest

from freightdesk.clients import RestLedgerBackend, normalize_category
from freightdesk.core.config import BackendSettings
from freightdesk.core.errors import BackendError
from freightdesk.domain.accounting import AccountType
from freightdesk.services import ReportService

SETTINGS = BackendSettings(kind="rest", url="https://ledger.example", anon_key="anon-key")


def _backend(handler) -> RestLedgerBackend:
    return RestLedgerBackend(SETTINGS, transport=httpx.MockTransport(handler))


def test_chart_request_and_mapping() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {
                    "id": "a1",
                    "account_code": "1",
                    "account_name": "Assets",
                    "account_type": "asset",
                    "level": 1,
                    "balance": 150.5,
                    "is_active": True,
                    "parent_account_id": None,
                },
                {
                    "id": "a2",
                    "account_code": "41",
                    "account_name": "Freight revenue",
                    "account_type": "revenue",
                    "level": 2,
                    "balance": "10",
                    "parent_account_id": "a4",
                },
            ],
        )

    with _backend(handler) as backend:
        accounts = backend.fetch_chart_of_accounts()

    request = seen[0]
    assert request.url.path == "/rest/v1/chart_of_accounts"
    assert request.url.params["order"] == "account_code.asc"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"
    assert accounts[0].balance == Decimal("150.5")
    assert accounts[1].account_type is AccountType.REVENUE
    assert accounts[1].parent_id == "a4"


def test_journal_entries_embed_account_names() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "journal_entry_details" in request.url.params["select"]
        return httpx.Response(
            200,
            json=[
                {
                    "id": "e1",
                    "entry_number": "JE-2024-00001",
                    "entry_date": "2024-03-01",
                    "description": "Freight",
                    "total_debit": 500,
                    "total_credit": 500,
                    "is_approved": False,
                    "journal_entry_details": [
                        {
                            "id": "d1",
                            "account_id": "a1",
                            "debit_amount": 500,
                            "credit_amount": 0,
                            "chart_of_accounts": {"account_name": "Cash", "account_code": "1101"},
                        }
                    ],
                }
            ],
        )

    entries = _backend(handler).fetch_journal_entries()

    assert entries[0].entry_date == date(2024, 3, 1)
    assert entries[0].lines[0].account_name == "Cash"
    assert entries[0].lines[0].debit_amount == Decimal("500")


def test_create_entry_calls_rpc() -> None:
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json="new-entry-id")

    entry_id = _backend(handler).create_journal_entry(
        entry_date=date(2024, 3, 1),
        description="Freight",
        details=[
            {"account_id": "a1", "debit_amount": Decimal("500"), "credit_amount": Decimal("0")},
            {"account_id": "a2", "debit_amount": None, "credit_amount": "500"},
        ],
    )

    assert entry_id == "new-entry-id"
    assert captured["path"] == "/rest/v1/rpc/create_journal_entry"
    assert captured["body"]["p_entry_date"] == "2024-03-01"
    assert captured["body"]["p_details"][1] == {
        "account_id": "a2",
        "debit_amount": "0",
        "credit_amount": "500",
        "description": "",
    }


def test_reports_normalise_arabic_categories() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("get_income_statement"):
            assert json.loads(request.content) == {"start_date": "2024-01-01", "end_date": "2024-01-31"}
            return httpx.Response(
                200,
                json=[
                    {"category": "الإيرادات", "account_name": "Freight", "amount": 1200},
                    {"category": "المصاريف", "account_name": "Carriers", "amount": 450},
                ],
            )
        assert json.loads(request.content) == {"as_of_date": "2024-03-31"}
        return httpx.Response(
            200,
            json=[
                {"category": "الأصول", "sub_category": "Current", "account_name": "Cash", "balance": 100},
                {"category": "حقوق الملكية", "sub_category": "Capital", "account_name": "Owner", "balance": 100},
            ],
        )

    backend = _backend(handler)
    income = backend.fetch_income_statement(date(2024, 1, 1), date(2024, 1, 31))
    sheet = backend.fetch_balance_sheet(date(2024, 3, 31))

    assert [row.category for row in income] == ["revenue", "expense"]
    assert [row.category for row in sheet] == ["asset", "equity"]


def test_error_response_message_is_surfaced() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Entry is not balanced", "code": "P0001"})

    with pytest.raises(BackendError) as excinfo:
        _backend(handler).fetch_trial_balance()

    assert excinfo.value.message == "Entry is not balanced"


def test_transport_failure_becomes_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendError, match="Backend request failed"):
        _backend(handler).fetch_chart_of_accounts()


def test_empty_rpc_result_is_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=None)

    with pytest.raises(BackendError):
        _backend(handler).create_journal_entry(
            entry_date=date(2024, 3, 1), description="", details=[]
        )


def test_malformed_rows_become_backend_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("get_trial_balance"):
            return httpx.Response(200, json=[{"account_code": "1101", "account_name": "Cash"}])
        if request.url.path.endswith("get_income_statement"):
            return httpx.Response(
                200, json=[{"category": "revenue", "account_name": "Freight", "amount": "n/a"}]
            )
        return httpx.Response(
            200,
            json=[{"id": "a1", "account_code": "9", "account_name": "Odd", "account_type": "bogus"}],
        )

    backend = _backend(handler)

    with pytest.raises(BackendError, match="Malformed trial balance response: missing field .account_id."):
        backend.fetch_trial_balance()
    with pytest.raises(BackendError, match="Malformed income statement response"):
        backend.fetch_income_statement(date(2024, 3, 1), date(2024, 3, 31))
    with pytest.raises(BackendError, match="Malformed chart of accounts response"):
        backend.fetch_chart_of_accounts()


def test_malformed_trial_balance_leaves_an_error_screen(screens) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"account_code": "1101", "account_name": "Cash"}])

    service = ReportService(_backend(handler), screens=screens)

    screen = service.trial_balance("u1")

    assert screen.status == "error"
    assert screen.error.startswith("Failed to load trial balance: Malformed trial balance response")
    assert screens.get("u1", "trial_balance").loading is False


def test_normalize_category() -> None:
    assert normalize_category("الخصوم") == "liability"
    assert normalize_category(" Revenue ") == "revenue"
    assert normalize_category(None) == ""
