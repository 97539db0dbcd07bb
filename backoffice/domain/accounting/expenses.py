from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from backoffice.domain.money import ZERO, as_money, money_to_json


@dataclass(frozen=True)
class Expense:
    expense_id: str
    name: str
    amount: Decimal
    date: date
    notes: str | None = None
    created_at: datetime | None = None
    created_by_user_email: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", as_money(self.amount))

    def to_dict(self) -> dict:
        return {
            "id": self.expense_id,
            "name": self.name,
            "amount": money_to_json(self.amount),
            "date": self.date.isoformat(),
            "notes": self.notes,
            "created_at": self.created_at.isoformat().replace("+00:00", "Z") if self.created_at else None,
            "created_by_user_email": self.created_by_user_email,
        }


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


def expense_ledger(expenses: Iterable[Expense]) -> tuple[Expense, ...]:
    # Newest first; expenses on the same day keep their fetch order.
    return tuple(sorted(expenses, key=lambda expense: expense.date, reverse=True))
