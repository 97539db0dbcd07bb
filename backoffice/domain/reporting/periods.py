from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

ONE_DAY = timedelta(days=1)


def utc_day(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of UTC calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("window end must not be before start")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def start_at(self) -> datetime:
        return datetime.combine(self.start, time.min, tzinfo=timezone.utc)

    def end_before(self) -> datetime:
        # Exclusive upper bound: midnight after the last day.
        return datetime.combine(self.end + ONE_DAY, time.min, tzinfo=timezone.utc)

    def contains(self, value: datetime | date) -> bool:
        day = utc_day(value) if isinstance(value, datetime) else value
        return self.start <= day <= self.end

    def to_dict(self) -> dict:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class ResolvedPeriod:
    current: DateWindow
    previous: DateWindow


def resolve_period(period_days: int, anchor: date | datetime | None = None) -> ResolvedPeriod:
    if isinstance(period_days, bool) or not isinstance(period_days, int) or period_days < 1:
        raise ValueError("period_days must be a positive integer")

    if anchor is None:
        anchor_day = today_utc()
    elif isinstance(anchor, datetime):
        anchor_day = utc_day(anchor)
    else:
        anchor_day = anchor

    length = timedelta(days=period_days)
    current_end = anchor_day
    current_start = current_end - length
    previous_end = current_start - ONE_DAY
    previous_start = previous_end - length
    return ResolvedPeriod(
        current=DateWindow(current_start, current_end),
        previous=DateWindow(previous_start, previous_end),
    )


def change_percent(current: Decimal | int | float, previous: Decimal | int | float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return float((Decimal(str(current)) - Decimal(str(previous))) / Decimal(str(previous)) * 100)
