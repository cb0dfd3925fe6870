"""Chart-of-accounts hierarchy built from a flat parent-pointer list."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator, Sequence

from .types import ZERO, AccountType


@dataclass(frozen=True, slots=True)
class ChartAccount:
    """A node in the chart of accounts."""

    id: str
    code: str
    name: str
    account_type: AccountType
    level: int = 1
    balance: Decimal = ZERO
    is_active: bool = True
    parent_id: str | None = None


@dataclass(frozen=True, slots=True)
class TreeRow:
    """One rendered row of the chart-of-accounts tree."""

    account: ChartAccount
    indent: int
    depth: int
    has_children: bool
    is_expanded: bool
    subtree_balance: Decimal


def toggle(expanded: frozenset[str], account_id: str) -> frozenset[str]:
    """Return a new expansion set with ``account_id`` flipped."""

    if account_id in expanded:
        return expanded - {account_id}
    return expanded | {account_id}


class AccountTree:
    """Adjacency index over a chart of accounts.

    The index (parent id -> ordered child ids) is built once; rendering never
    rescans the flat list. Accounts pointing at an unknown parent are treated
    as roots, and a cycle is cut at the first revisited id.
    """

    def __init__(self, accounts: Iterable[ChartAccount]) -> None:
        self._accounts: dict[str, ChartAccount] = {}
        for account in accounts:
            self._accounts.setdefault(account.id, account)

        self._children: dict[str | None, list[str]] = {None: []}
        for account in self._accounts.values():
            parent = account.parent_id
            if parent is not None and (parent not in self._accounts or parent == account.id):
                parent = None
            self._children.setdefault(parent, []).append(account.id)

        self._subtree_cache: dict[str, Decimal] = {}

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def get(self, account_id: str) -> ChartAccount | None:
        return self._accounts.get(account_id)

    def roots(self) -> list[ChartAccount]:
        return [self._accounts[i] for i in self._children[None]]

    def children(self, account_id: str) -> list[ChartAccount]:
        return [self._accounts[i] for i in self._children.get(account_id, ())]

    def has_children(self, account_id: str) -> bool:
        return bool(self._children.get(account_id))

    def default_expanded(self) -> frozenset[str]:
        """Level-1 accounts start expanded, deeper levels collapsed."""

        return frozenset(a.id for a in self._accounts.values() if a.level == 1)

    def postable(self) -> list[ChartAccount]:
        """Active leaf accounts, the only ones a journal line may reference."""

        return [
            account
            for account in self._accounts.values()
            if account.is_active and not self.has_children(account.id)
        ]

    def subtree_balance(self, account_id: str) -> Decimal:
        cached = self._subtree_cache.get(account_id)
        if cached is not None:
            return cached
        total = ZERO
        for node_id in self._walk(account_id):
            total += self._accounts[node_id].balance
        self._subtree_cache[account_id] = total
        return total

    def _walk(self, account_id: str) -> Iterator[str]:
        seen: set[str] = set()
        stack = [account_id]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            yield current
            stack.extend(self._children.get(current, ()))

    def rows(self, expanded: frozenset[str] | set[str]) -> list[TreeRow]:
        """Render visible rows depth-first; collapsed nodes hide their subtree."""

        rendered: list[TreeRow] = []
        visited: set[str] = set()

        def _render(parent_id: str | None, depth: int) -> None:
            for child_id in self._children.get(parent_id, ()):
                if child_id in visited:
                    continue
                visited.add(child_id)
                account = self._accounts[child_id]
                is_expanded = child_id in expanded
                rendered.append(
                    TreeRow(
                        account=account,
                        indent=max(account.level - 1, 0),
                        depth=depth,
                        has_children=self.has_children(child_id),
                        is_expanded=is_expanded,
                        subtree_balance=self.subtree_balance(child_id),
                    )
                )
                if is_expanded:
                    _render(child_id, depth + 1)

        _render(None, 0)
        return rendered


def build_tree(accounts: Sequence[ChartAccount]) -> AccountTree:
    return AccountTree(accounts)


__all__ = ["AccountTree", "ChartAccount", "TreeRow", "build_tree", "toggle"]
