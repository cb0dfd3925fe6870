"""Tests for journal entry drafts and the posting rules."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from freightdesk.domain.accounting import (
    DraftLine,
    IncompleteEntryError,
    InvalidAmountError,
    JournalDraft,
    MinimumLinesError,
    UnbalancedEntryError,
    to_amount,
)

ENTRY_DATE = date(2024, 3, 1)


def _draft(*lines: tuple[str, str, str]) -> JournalDraft:
    return JournalDraft(
        entry_date=ENTRY_DATE,
        description="Freight invoice",
        lines=tuple(
            DraftLine(account_id=account, debit_amount=Decimal(debit), credit_amount=Decimal(credit))
            for account, debit, credit in lines
        ),
    )


def test_blank_draft_has_two_empty_lines() -> None:
    draft = JournalDraft.blank(today=ENTRY_DATE)

    assert draft.entry_date == ENTRY_DATE
    assert len(draft.lines) == 2
    assert all(line.is_blank_amount for line in draft.lines)


def test_balanced_entry_validates_and_returns_totals() -> None:
    draft = _draft(("cash", "500", "0"), ("revenue", "0", "500"))

    totals = draft.validate()

    assert totals.debit == Decimal("500")
    assert totals.credit == Decimal("500")
    assert totals.is_balanced
    assert totals.difference == 0


def test_unbalanced_entry_is_rejected_with_totals_in_message() -> None:
    draft = _draft(("cash", "500", "0"), ("revenue", "0", "300"))

    with pytest.raises(UnbalancedEntryError) as excinfo:
        draft.validate()

    assert "500" in str(excinfo.value)
    assert "300" in str(excinfo.value)


def test_zero_amount_entry_is_rejected() -> None:
    draft = _draft(("cash", "0", "0"), ("revenue", "0", "0"))

    with pytest.raises(UnbalancedEntryError):
        draft.validate()


def test_line_without_account_is_incomplete() -> None:
    draft = _draft(("cash", "100", "0"), ("", "0", "100"))

    with pytest.raises(IncompleteEntryError, match="line 2"):
        draft.validate()


def test_line_without_amount_is_incomplete() -> None:
    draft = _draft(("cash", "100", "0"), ("revenue", "0", "100"), ("fees", "0", "0"))

    with pytest.raises(IncompleteEntryError, match="Line 3"):
        draft.validate()


def test_account_outside_postable_set_is_rejected() -> None:
    draft = _draft(("cash", "100", "0"), ("assets", "0", "100"))

    with pytest.raises(IncompleteEntryError):
        draft.validate(postable_account_ids={"cash", "revenue"})


def test_line_with_both_sides_is_rejected() -> None:
    draft = _draft(("cash", "100", "100"), ("revenue", "0", "0"))

    with pytest.raises(InvalidAmountError):
        draft.validate()


def test_single_line_entry_is_rejected() -> None:
    draft = JournalDraft(entry_date=ENTRY_DATE, lines=(DraftLine(account_id="cash"),))

    with pytest.raises(MinimumLinesError):
        draft.validate()


def test_setting_debit_clears_credit_and_vice_versa() -> None:
    draft = _draft(("cash", "0", "250"), ("revenue", "0", "0"))

    draft = draft.set_debit(0, "250")
    assert draft.lines[0].debit_amount == Decimal("250")
    assert draft.lines[0].credit_amount == 0

    draft = draft.set_credit(0, Decimal("75.5"))
    assert draft.lines[0].credit_amount == Decimal("75.5")
    assert draft.lines[0].debit_amount == 0


def test_setting_the_same_debit_twice_is_idempotent() -> None:
    draft = JournalDraft.blank(today=ENTRY_DATE)

    once = draft.set_debit(0, "40")
    twice = once.set_debit(0, "40")

    assert once == twice


def test_zero_debit_leaves_credit_untouched() -> None:
    draft = _draft(("cash", "0", "90"), ("revenue", "0", "0"))

    draft = draft.set_debit(0, "")

    assert draft.lines[0].credit_amount == Decimal("90")


def test_negative_amount_is_rejected_when_editing() -> None:
    draft = JournalDraft.blank(today=ENTRY_DATE)

    with pytest.raises(InvalidAmountError):
        draft.set_debit(0, "-5")


def test_remove_line_refused_when_two_remain() -> None:
    draft = JournalDraft.blank(today=ENTRY_DATE)

    with pytest.raises(MinimumLinesError):
        draft.remove_line(0)

    assert len(draft.lines) == 2


def test_add_then_remove_line() -> None:
    draft = JournalDraft.blank(today=ENTRY_DATE).add_line().set_account(2, "fees")

    assert len(draft.lines) == 3
    trimmed = draft.remove_line(2)

    assert len(trimmed.lines) == 2
    assert all(line.account_id != "fees" for line in trimmed.lines)


def test_edits_return_new_drafts() -> None:
    draft = JournalDraft.blank(today=ENTRY_DATE)

    edited = draft.set_account(0, " cash ").set_line_description(0, "Deposit")

    assert draft.lines[0].account_id == ""
    assert edited.lines[0].account_id == "cash"
    assert edited.lines[0].description == "Deposit"


def test_edit_out_of_range_raises_index_error() -> None:
    with pytest.raises(IndexError):
        JournalDraft.blank(today=ENTRY_DATE).set_debit(5, "1")


def test_from_payload_keeps_both_sides_for_validation() -> None:
    draft = JournalDraft.from_payload(
        entry_date=ENTRY_DATE,
        description="  Mixed  ",
        details=[
            {"account_id": "cash", "debit_amount": "10", "credit_amount": "10"},
            {"account_id": "revenue", "debit_amount": None, "credit_amount": ""},
        ],
    )

    assert draft.description == "Mixed"
    assert draft.lines[0].debit_amount == Decimal("10")
    assert draft.lines[0].credit_amount == Decimal("10")
    assert draft.lines[1].is_blank_amount


def test_to_amount_coerces_inputs() -> None:
    assert to_amount(None) == 0
    assert to_amount("") == 0
    assert to_amount(0.1) == Decimal("0.1")
    assert to_amount("12.345") == Decimal("12.345")
    with pytest.raises(InvalidAmountError):
        to_amount("abc")
    with pytest.raises(InvalidAmountError):
        to_amount(True)
    with pytest.raises(InvalidAmountError):
        to_amount("NaN")
