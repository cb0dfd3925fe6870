"""Chart of accounts and journal entry screens."""
from __future__ import annotations

from typing import Iterable

from freightdesk.core.errors import BackendError
from freightdesk.core.log import get_logger, log_context, timeit
from freightdesk.domain.accounting import JournalDraft, build_tree, toggle
from freightdesk.repositories import LedgerBackend
from freightdesk.schemas import (
    AccountOut,
    AccountTreeOut,
    AccountTreeScreen,
    ChartScreen,
    JournalEntryCreated,
    JournalEntryIn,
    JournalScreen,
    JournalTotalsOut,
    PostedEntryOut,
    TreeRowOut,
)

from .screen import DEFAULT_REGISTRY, EMPTY, ERROR, LOADED, ScreenRegistry

LOGGER = get_logger(__name__)


def draft_from_payload(payload: JournalEntryIn) -> JournalDraft:
    return JournalDraft.from_payload(
        entry_date=payload.entry_date,
        description=payload.description,
        details=[line.model_dump() for line in payload.details],
    )


class ChartOfAccountsService:
    """Loads the chart of accounts as a flat list or an expandable tree."""

    def __init__(self, backend: LedgerBackend, *, screens: ScreenRegistry = DEFAULT_REGISTRY) -> None:
        self._backend = backend
        self._screens = screens

    def _fetch(self, owner: str, screen: str):
        state = self._screens.get(owner, screen)
        ticket = state.begin()
        try:
            with timeit("Chart of accounts load", logger=LOGGER) as timer:
                accounts = self._backend.fetch_chart_of_accounts()
                timer.add(len(accounts))
        except BackendError as exc:
            message = f"Failed to load chart of accounts: {exc.message}"
            state.fail(ticket, message)
            return ticket, state, None, message
        return ticket, state, accounts, None

    def list_accounts(self, owner: str) -> ChartScreen:
        ticket, state, accounts, error = self._fetch(owner, "chart")
        if accounts is None:
            return ChartScreen(status=ERROR, error=error)
        payload = ChartScreen(
            status=LOADED if accounts else EMPTY,
            data=[AccountOut.model_validate(account) for account in accounts],
        )
        state.resolve(ticket, payload, empty=not accounts)
        return payload

    def postable_accounts(self, owner: str) -> ChartScreen:
        """Active leaf accounts offered in the journal line account picker."""

        ticket, state, accounts, error = self._fetch(owner, "postable")
        if accounts is None:
            return ChartScreen(status=ERROR, error=error)
        postable = build_tree(accounts).postable()
        payload = ChartScreen(
            status=LOADED if postable else EMPTY,
            data=[AccountOut.model_validate(account) for account in postable],
        )
        state.resolve(ticket, payload, empty=not postable)
        return payload

    def tree(
        self,
        owner: str,
        *,
        expanded: Iterable[str] | None = None,
        toggle_id: str | None = None,
    ) -> AccountTreeScreen:
        """Render the visible rows for ``expanded``; level-1 accounts open by default."""

        ticket, state, accounts, error = self._fetch(owner, "tree")
        if accounts is None:
            return AccountTreeScreen(status=ERROR, error=error)

        account_tree = build_tree(accounts)
        if expanded is None:
            current = account_tree.default_expanded()
        else:
            current = frozenset(i for i in expanded if i in account_tree)
        if toggle_id and toggle_id in account_tree:
            current = toggle(current, toggle_id)

        payload = AccountTreeScreen(
            status=LOADED if accounts else EMPTY,
            data=AccountTreeOut(
                rows=[TreeRowOut.model_validate(row) for row in account_tree.rows(current)],
                expanded=sorted(current),
            ),
        )
        state.resolve(ticket, payload, empty=not accounts)
        return payload


class JournalEntryService:
    """Lists posted entries and submits new ones after local validation."""

    def __init__(self, backend: LedgerBackend, *, screens: ScreenRegistry = DEFAULT_REGISTRY) -> None:
        self._backend = backend
        self._screens = screens
        self._chart = ChartOfAccountsService(backend, screens=screens)

    @staticmethod
    def validate(payload: JournalEntryIn) -> JournalTotalsOut:
        """Dry run of the posting rules; raises ``LedgerValidationError``."""

        totals = draft_from_payload(payload).validate()
        return JournalTotalsOut(
            debit=totals.debit,
            credit=totals.credit,
            difference=totals.difference,
            is_balanced=totals.is_balanced,
        )

    def list_entries(self, owner: str) -> JournalScreen:
        state = self._screens.get(owner, "journal")
        ticket = state.begin()
        try:
            with timeit("Journal entries load", logger=LOGGER) as timer:
                entries = self._backend.fetch_journal_entries()
                timer.add(len(entries))
        except BackendError as exc:
            message = f"Failed to load journal entries: {exc.message}"
            state.fail(ticket, message)
            return JournalScreen(status=ERROR, error=message)

        payload = JournalScreen(
            status=LOADED if entries else EMPTY,
            data=[PostedEntryOut.model_validate(entry) for entry in entries],
        )
        state.resolve(ticket, payload, empty=not entries)
        return payload

    def submit(self, owner: str, payload: JournalEntryIn) -> JournalEntryCreated:
        """Validate, create the entry, then reload the journal and the chart.

        Validation errors propagate before the backend is contacted. A second
        submit from the same owner while one is running raises
        ``RequestInFlightError``.
        """

        draft = draft_from_payload(payload)
        totals = draft.validate()

        state = self._screens.get(owner, "journal_submit")
        ticket = state.begin(exclusive=True)
        with log_context.scoped(owner=owner, screen="journal_submit"):
            try:
                with timeit("Journal entry submit", logger=LOGGER, unit="lines", total=len(draft.lines)):
                    entry_id = self._backend.create_journal_entry(
                        entry_date=draft.entry_date,
                        description=draft.description,
                        details=[line.as_payload() for line in draft.lines],
                        created_by=owner,
                    )
            except BackendError as exc:
                message = f"Failed to save journal entry: {exc.message}"
                state.fail(ticket, message)
                raise BackendError(message) from exc
            except Exception:
                state.fail(ticket, "Unexpected error while saving the journal entry")
                raise
            state.resolve(ticket, entry_id)
            LOGGER.info(
                "Journal entry saved",
                extra={"entry_id": entry_id, "total": str(totals.debit)},
            )

        return JournalEntryCreated(
            id=entry_id,
            entries=self.list_entries(owner),
            accounts=self._chart.list_accounts(owner),
        )


__all__ = ["ChartOfAccountsService", "JournalEntryService", "draft_from_payload"]
