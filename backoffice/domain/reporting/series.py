from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Mapping, TypeVar

import pandas as pd

from backoffice.domain.money import ZERO, money_to_json

V = TypeVar("V")


@dataclass(frozen=True)
class DailyPoint:
    date: date
    sales: Decimal = ZERO
    profit: Decimal = ZERO

    def plus(self, sales: Decimal, profit: Decimal) -> "DailyPoint":
        return DailyPoint(date=self.date, sales=self.sales + sales, profit=self.profit + profit)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "sales": money_to_json(self.sales),
            "profit": money_to_json(self.profit),
        }


def calendar_days(start: date, end: date) -> list[date]:
    if end < start:
        raise ValueError("range end must not be before start")
    return [ts.date() for ts in pd.date_range(start=start, end=end, freq="D")]


def densify(sparse: Mapping[date, V], start: date, end: date, zero: V) -> list[tuple[date, V]]:
    """Expand a sparse day -> value map into one entry per day of [start, end].

    Keys outside the range are ignored; missing days get ``zero``.
    """
    return [(day, sparse.get(day, zero)) for day in calendar_days(start, end)]


def densify_daily(sparse: Mapping[date, DailyPoint], start: date, end: date) -> tuple[DailyPoint, ...]:
    return tuple(
        point if point is not None else DailyPoint(date=day)
        for day, point in densify(sparse, start, end, None)
    )
