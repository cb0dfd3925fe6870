"""Chart of accounts and journal entry routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from freightdesk.core.permissions import Section
from freightdesk.core.security import AuthenticatedUser, require_section
from freightdesk.schemas import (
    AccountTreeScreen,
    ChartScreen,
    JournalEntryCreated,
    JournalEntryIn,
    JournalScreen,
    JournalTotalsOut,
)
from freightdesk.services import ChartOfAccountsService, JournalEntryService

from .deps import get_chart_service, get_journal_service

router = APIRouter(prefix="/accounting", tags=["accounting"])
require_accounting = require_section(Section.ACCOUNTING)


@router.get("/accounts", response_model=ChartScreen)
def list_accounts(
    user: AuthenticatedUser = Depends(require_accounting),
    service: ChartOfAccountsService = Depends(get_chart_service),
) -> ChartScreen:
    return service.list_accounts(user.user_id)


@router.get("/accounts/tree", response_model=AccountTreeScreen)
def account_tree(
    expanded: list[str] | None = Query(default=None),
    toggle: str | None = Query(default=None),
    collapsed_all: bool = Query(default=False),
    user: AuthenticatedUser = Depends(require_accounting),
    service: ChartOfAccountsService = Depends(get_chart_service),
) -> AccountTreeScreen:
    """Visible tree rows; pass the current ``expanded`` ids and optionally one id to ``toggle``.

    Omitting ``expanded`` opens the level-1 accounts. A client whose state has
    no expanded ids left sends ``collapsed_all=1`` instead.
    """

    if collapsed_all and not expanded:
        expanded = []
    return service.tree(user.user_id, expanded=expanded, toggle_id=toggle)


@router.get("/accounts/postable", response_model=ChartScreen)
def postable_accounts(
    user: AuthenticatedUser = Depends(require_accounting),
    service: ChartOfAccountsService = Depends(get_chart_service),
) -> ChartScreen:
    return service.postable_accounts(user.user_id)


@router.get("/journal-entries", response_model=JournalScreen)
def list_journal_entries(
    user: AuthenticatedUser = Depends(require_accounting),
    service: JournalEntryService = Depends(get_journal_service),
) -> JournalScreen:
    return service.list_entries(user.user_id)


@router.post("/journal-entries/validate", response_model=JournalTotalsOut)
def validate_journal_entry(
    payload: JournalEntryIn,
    user: AuthenticatedUser = Depends(require_accounting),
) -> JournalTotalsOut:
    """Check the posting rules without contacting the ledger backend."""

    return JournalEntryService.validate(payload)


@router.post(
    "/journal-entries",
    response_model=JournalEntryCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_journal_entry(
    payload: JournalEntryIn,
    user: AuthenticatedUser = Depends(require_accounting),
    service: JournalEntryService = Depends(get_journal_service),
) -> JournalEntryCreated:
    return service.submit(user.user_id, payload)


__all__ = ["router"]
