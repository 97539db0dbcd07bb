from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from backoffice.domain.reporting.series import DailyPoint, densify, densify_daily


@pytest.mark.parametrize(
    "start, end",
    [
        (date(2026, 1, 1), date(2026, 1, 1)),
        (date(2026, 1, 1), date(2026, 1, 31)),
        (date(2024, 2, 20), date(2024, 3, 5)),
        (date(2025, 12, 25), date(2026, 1, 10)),
    ],
)
def test_densify_emits_every_day_once_in_order(start, end):
    series = densify({}, start, end, 0)
    days = [day for day, _ in series]

    assert len(series) == (end - start).days + 1
    assert days == sorted(set(days))
    assert days[0] == start and days[-1] == end


def test_densify_fills_gaps_with_zero():
    sparse = {date(2026, 1, 2): 5, date(2026, 1, 4): 7}
    assert densify(sparse, date(2026, 1, 1), date(2026, 1, 5), 0) == [
        (date(2026, 1, 1), 0),
        (date(2026, 1, 2), 5),
        (date(2026, 1, 3), 0),
        (date(2026, 1, 4), 7),
        (date(2026, 1, 5), 0),
    ]


def test_densify_ignores_days_outside_range():
    sparse = {date(2025, 12, 31): 9, date(2026, 1, 1): 1}
    assert densify(sparse, date(2026, 1, 1), date(2026, 1, 2), 0) == [(date(2026, 1, 1), 1), (date(2026, 1, 2), 0)]


def test_densify_is_repeatable():
    sparse = {date(2026, 1, 3): 3}
    first = densify(sparse, date(2026, 1, 1), date(2026, 1, 10), 0)
    second = densify(sparse, date(2026, 1, 1), date(2026, 1, 10), 0)
    assert first == second
    assert sparse == {date(2026, 1, 3): 3}


def test_densify_rejects_inverted_range():
    with pytest.raises(ValueError):
        densify({}, date(2026, 1, 2), date(2026, 1, 1), 0)


def test_densify_daily_zero_points_carry_their_date():
    start = date(2026, 2, 27)
    sparse = {date(2026, 3, 1): DailyPoint(date(2026, 3, 1), Decimal("10"), Decimal("4"))}
    series = densify_daily(sparse, start, start + timedelta(days=3))

    assert [point.date for point in series] == [start + timedelta(days=i) for i in range(4)]
    assert series[0] == DailyPoint(date(2026, 2, 27))
    assert series[2].sales == Decimal("10")
    assert series[2].to_dict() == {"date": "2026-03-01", "sales": 10.0, "profit": 4.0}
