"""Request-scoped dependencies shared by the routers."""
from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends

from freightdesk.clients import RestLedgerBackend
from freightdesk.core.config import get_settings
from freightdesk.core.log import get_logger
from freightdesk.db.session import get_db_session, request_session
from freightdesk.repositories import LedgerBackend, SqlLedgerBackend
from freightdesk.services import (
    ChartOfAccountsService,
    JournalEntryService,
    ReportService,
)

LOGGER = get_logger(__name__)


def get_ledger_backend() -> Iterator[LedgerBackend]:
    """Yield the configured ledger backend (``LEDGER_BACKEND``).

    Only the SQL backend opens a database session.
    """

    settings = get_settings()
    if settings.backend.uses_rest:
        with RestLedgerBackend(settings.backend) as backend:
            yield backend
        return
    with request_session() as session:
        yield SqlLedgerBackend(session)


def get_chart_service(backend: LedgerBackend = Depends(get_ledger_backend)) -> ChartOfAccountsService:
    return ChartOfAccountsService(backend)


def get_journal_service(backend: LedgerBackend = Depends(get_ledger_backend)) -> JournalEntryService:
    return JournalEntryService(backend)


def get_report_service(backend: LedgerBackend = Depends(get_ledger_backend)) -> ReportService:
    return ReportService(backend, income_statement_days=get_settings().income_statement_days)


__all__ = [
    "get_chart_service",
    "get_db_session",
    "get_journal_service",
    "get_ledger_backend",
    "get_report_service",
]
