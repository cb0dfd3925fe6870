"""Tests for the chart-of-accounts tree."""
from __future__ import annotations

from decimal import Decimal

from fakes import make_account
from freightdesk.domain.accounting import build_tree, toggle


def _ids(rows) -> list[str]:
    return [row.account.id for row in rows]


def test_expanded_parent_renders_child_row() -> None:
    tree = build_tree([make_account("A", level=1), make_account("B", parent_id="A", level=2)])

    rows = tree.rows(frozenset({"A"}))

    assert _ids(rows) == ["A", "B"]
    assert rows[0].has_children and rows[0].is_expanded
    assert rows[1].depth == 1
    assert rows[1].indent == 1


def test_collapsed_parent_hides_children() -> None:
    tree = build_tree([make_account("A", level=1), make_account("B", parent_id="A", level=2)])

    assert _ids(tree.rows(frozenset())) == ["A"]


def test_default_expansion_opens_level_one_only() -> None:
    accounts = [
        make_account("A", level=1),
        make_account("B", parent_id="A", level=2),
        make_account("C", parent_id="B", level=3),
    ]
    tree = build_tree(accounts)

    expanded = tree.default_expanded()

    assert expanded == frozenset({"A"})
    assert _ids(tree.rows(expanded)) == ["A", "B"]


def test_toggle_returns_new_set() -> None:
    expanded = frozenset({"A"})

    opened = toggle(expanded, "B")
    closed = toggle(opened, "A")

    assert expanded == frozenset({"A"})
    assert opened == frozenset({"A", "B"})
    assert closed == frozenset({"B"})


def test_orphans_become_roots_and_level_mismatch_does_not_crash() -> None:
    tree = build_tree(
        [
            make_account("A", level=1),
            make_account("X", parent_id="missing", level=4),
        ]
    )

    rows = tree.rows(frozenset())

    assert _ids(rows) == ["A", "X"]
    assert rows[1].indent == 3
    assert rows[1].depth == 0


def test_self_parent_and_cycles_terminate() -> None:
    tree = build_tree(
        [
            make_account("S", parent_id="S"),
            make_account("P", parent_id="Q", level=2, balance="5"),
            make_account("Q", parent_id="P", level=2, balance="7"),
        ]
    )

    assert _ids(tree.rows(frozenset({"S", "P", "Q"}))) == ["S"]
    assert tree.subtree_balance("P") == Decimal("12")


def test_subtree_balance_rolls_up_descendants() -> None:
    tree = build_tree(
        [
            make_account("A", balance="10"),
            make_account("B", parent_id="A", level=2, balance="5"),
            make_account("C", parent_id="B", level=3, balance="2.5"),
        ]
    )

    assert tree.subtree_balance("A") == Decimal("17.5")
    assert tree.subtree_balance("C") == Decimal("2.5")
    assert [account.id for account in tree.children("A")] == ["B"]
    assert tree.children("C") == []


def test_postable_accounts_are_active_leaves() -> None:
    tree = build_tree(
        [
            make_account("A"),
            make_account("B", parent_id="A", level=2),
            make_account("C", parent_id="A", level=2, is_active=False),
            make_account("D"),
        ]
    )

    assert [account.id for account in tree.postable()] == ["B", "D"]
