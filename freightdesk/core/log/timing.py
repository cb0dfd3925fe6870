"""Timing of ledger backend and database calls."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional

_DEFAULT_LOGGER = "freightdesk.timing"


@dataclass
class CallTimer:
    """Counts the items a timed call produced; the total may be known up front."""

    label: str
    unit: str = "rows"
    total: Optional[int] = None
    count: int = 0
    started: float = field(default_factory=perf_counter)

    def add(self, amount: int = 1) -> None:
        self.count += amount

    @property
    def elapsed_ms(self) -> float:
        return (perf_counter() - self.started) * 1000

    def summary(self) -> str:
        items = self.total if self.total is not None else self.count
        suffix = f", {items:,} {self.unit}" if items else ""
        return f"{self.label} took {self.elapsed_ms:.0f} ms{suffix}"


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    unit: str = "rows",
    total: Optional[int] = None,
) -> Iterator[CallTimer]:
    """Log how long the wrapped block ran; failures are logged at ERROR and re-raised."""

    log = logger or logging.getLogger(_DEFAULT_LOGGER)
    timer = CallTimer(label=label, unit=unit, total=total)
    try:
        yield timer
    except Exception:
        log.error(f"{label} failed after {timer.elapsed_ms:.0f} ms")
        raise
    log.log(level, timer.summary(), extra={"elapsed_ms": round(timer.elapsed_ms, 1)})


__all__ = ["CallTimer", "timeit"]
