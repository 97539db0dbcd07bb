from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from backoffice.domain.accounting.expenses import Expense, expense_ledger, total_expenses


@dataclass(frozen=True)
class ProfitAndLoss:
    revenue: Decimal
    gross_profit: Decimal
    expenses_total: Decimal
    net_profit: Decimal
    expenses: tuple[Expense, ...]


def generate_pnl(revenue: Decimal, gross_profit: Decimal, expenses: Iterable[Expense]) -> ProfitAndLoss:
    """Net profit is gross profit from orders minus the flat expense ledger.

    Expenses are not attributed to orders; they are summed over the same
    reporting range and subtracted once.
    """
    ledger = expense_ledger(expenses)
    expenses_total = total_expenses(ledger)
    return ProfitAndLoss(
        revenue=revenue,
        gross_profit=gross_profit,
        expenses_total=expenses_total,
        net_profit=gross_profit - expenses_total,
        expenses=ledger,
    )
