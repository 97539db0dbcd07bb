from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
CENT = Decimal("0.01")


def as_money(value: Decimal | int | float | str | None) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of the binary float expansion.
    return Decimal(str(value))


def money_to_json(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))
