"""Per-user screen state: loading flag, request generation and last accepted result."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from freightdesk.core.log import get_logger

LOGGER = get_logger(__name__)

LOADED = "loaded"
EMPTY = "empty"
ERROR = "error"


class RequestInFlightError(RuntimeError):
    """An exclusive action was started while the previous one is still running."""


@dataclass
class ScreenState:
    """Tracks the requests issued for one screen.

    Every ``begin`` hands out a ticket. Only the holder of the newest ticket
    may store its outcome, so a slow response that lost the race against a
    newer request is dropped instead of overwriting fresher data.
    """

    name: str
    loading: bool = False
    generation: int = 0
    status: str | None = None
    error: str | None = None
    data: Any = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def begin(self, *, exclusive: bool = False) -> int:
        with self._lock:
            if exclusive and self.loading:
                raise RequestInFlightError(f"A {self.name} request is already in progress.")
            self.generation += 1
            self.loading = True
            return self.generation

    def is_current(self, ticket: int) -> bool:
        return ticket == self.generation

    def _settle(self, ticket: int, status: str, error: str | None, data: Any) -> bool:
        with self._lock:
            if not self.is_current(ticket):
                LOGGER.debug(
                    "Discarding superseded response",
                    extra={"screen": self.name, "ticket": ticket, "current": self.generation},
                )
                return False
            self.loading = False
            self.status = status
            self.error = error
            self.data = data
            return True

    def resolve(self, ticket: int, data: Any, *, empty: bool = False) -> bool:
        """Store a successful result; returns ``False`` when the ticket is stale."""

        return self._settle(ticket, EMPTY if empty else LOADED, None, data)

    def fail(self, ticket: int, message: str) -> bool:
        # Data from the previous successful load is cleared along with the error.
        return self._settle(ticket, ERROR, message, None)


class ScreenRegistry:
    """Process-wide store of screen states keyed by owner and screen name."""

    def __init__(self) -> None:
        self._states: dict[tuple[str, str], ScreenState] = {}
        self._lock = threading.Lock()

    def get(self, owner: str, name: str) -> ScreenState:
        key = (owner, name)
        with self._lock:
            state = self._states.get(key)
            if state is None:
                state = self._states[key] = ScreenState(name=name)
            return state

    def clear(self, owner: str | None = None) -> None:
        with self._lock:
            if owner is None:
                self._states.clear()
                return
            for key in [key for key in self._states if key[0] == owner]:
                del self._states[key]


DEFAULT_REGISTRY = ScreenRegistry()


__all__ = [
    "DEFAULT_REGISTRY",
    "EMPTY",
    "ERROR",
    "LOADED",
    "RequestInFlightError",
    "ScreenRegistry",
    "ScreenState",
]
