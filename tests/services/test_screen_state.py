"""Tests for screen state tickets and the registry."""
from __future__ import annotations

import pytest

from freightdesk.services import RequestInFlightError, ScreenRegistry, ScreenState


def test_stale_response_is_discarded() -> None:
    state = ScreenState(name="journal")
    first = state.begin()
    second = state.begin()

    assert state.resolve(second, ["new"]) is True
    assert state.resolve(first, ["old"]) is False
    assert state.data == ["new"]
    assert state.status == "loaded"


def test_stale_failure_does_not_clobber_newer_result() -> None:
    state = ScreenState(name="chart")
    first = state.begin()
    second = state.begin()

    state.resolve(second, ["fresh"])
    state.fail(first, "timeout")

    assert state.error is None
    assert state.data == ["fresh"]


def test_failure_clears_previous_data() -> None:
    state = ScreenState(name="chart")
    state.resolve(state.begin(), ["rows"])

    state.fail(state.begin(), "Failed to load chart of accounts: timeout")

    assert state.status == "error"
    assert state.data is None
    assert state.loading is False


def test_empty_result_status() -> None:
    state = ScreenState(name="trial_balance")

    state.resolve(state.begin(), None, empty=True)

    assert state.status == "empty"


def test_exclusive_begin_while_loading() -> None:
    state = ScreenState(name="journal_submit")
    ticket = state.begin(exclusive=True)

    with pytest.raises(RequestInFlightError):
        state.begin(exclusive=True)

    state.resolve(ticket, "entry-1")
    assert state.begin(exclusive=True) == ticket + 1


def test_registry_scopes_state_per_owner() -> None:
    registry = ScreenRegistry()

    assert registry.get("u1", "chart") is registry.get("u1", "chart")
    assert registry.get("u1", "chart") is not registry.get("u2", "chart")

    first = registry.get("u1", "chart")
    registry.clear("u1")
    assert registry.get("u1", "chart") is not first
