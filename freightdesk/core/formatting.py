"""Compact display of ledger amounts for dashboard tiles."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple


class _Scale(NamedTuple):
    factor: Decimal
    word: str
    suffix: str


_SCALES = (
    _Scale(Decimal(10) ** 12, "trillion", "T"),
    _Scale(Decimal(10) ** 9, "billion", "B"),
    _Scale(Decimal(10) ** 6, "million", "M"),
    _Scale(Decimal(10) ** 3, "thousand", "k"),
)

# Smaller amounts are printed in full.
_COMPACT_FROM = Decimal(10_000)


def _strip_zeros(amount: Decimal) -> str:
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def humanize_number(value: int | float | Decimal, short: bool = False, decimals: int = 1) -> str:
    """Render ``value`` as ``1.3 million`` (or ``1.3M`` when ``short``).

    Amounts under ten thousand keep their digits, with trailing zeros dropped
    and fractions rounded to ``decimals`` places.
    """

    amount = Decimal(str(value))
    sign = "-" if amount < 0 else ""
    amount = abs(amount)

    if amount >= _COMPACT_FROM:
        scale = next(s for s in _SCALES if amount >= s.factor)
        scaled = f"{amount / scale.factor:.{decimals}f}"
        return f"{sign}{scaled}{scale.suffix}" if short else f"{sign}{scaled} {scale.word}"

    if amount != amount.to_integral_value():
        amount = amount.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    return sign + _strip_zeros(amount)


def humanize_currency(
    value: int | float | Decimal, code: str = "LYD", short: bool = False, decimals: int = 1
) -> str:
    return f"{code.upper()} {humanize_number(value, short=short, decimals=decimals)}"


__all__ = ["humanize_currency", "humanize_number"]
