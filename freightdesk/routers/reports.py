"""Financial report routes."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from freightdesk.core.permissions import Section
from freightdesk.core.security import AuthenticatedUser, require_section
from freightdesk.schemas import BalanceSheetScreen, IncomeStatementScreen, TrialBalanceScreen
from freightdesk.services import ReportService

from .deps import get_report_service

router = APIRouter(prefix="/reports", tags=["reports"])
require_reports = require_section(Section.REPORTS)


@router.get("/trial-balance", response_model=TrialBalanceScreen)
def trial_balance(
    user: AuthenticatedUser = Depends(require_reports),
    service: ReportService = Depends(get_report_service),
) -> TrialBalanceScreen:
    return service.trial_balance(user.user_id)


@router.get("/income-statement", response_model=IncomeStatementScreen)
def income_statement(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    user: AuthenticatedUser = Depends(require_reports),
    service: ReportService = Depends(get_report_service),
) -> IncomeStatementScreen:
    return service.income_statement(user.user_id, start=start, end=end)


@router.get("/balance-sheet", response_model=BalanceSheetScreen)
def balance_sheet(
    as_of: date | None = Query(default=None),
    user: AuthenticatedUser = Depends(require_reports),
    service: ReportService = Depends(get_report_service),
) -> BalanceSheetScreen:
    return service.balance_sheet(user.user_id, as_of=as_of)


__all__ = ["router"]
