from __future__ import annotations

from decimal import Decimal

from backoffice.domain.money import ZERO
from backoffice.domain.orders.aggregates import LineItem, Order

HUNDRED = Decimal("100")


def realized_unit_price(item: LineItem) -> Decimal:
    return item.unit_price * (1 - item.discount_percent / HUNDRED)


def realized_unit_cost(item: LineItem) -> Decimal:
    # Legacy rows without cost data count their whole realized price as profit.
    if not item.cost_foreign or not item.exchange_rate:
        return ZERO
    return item.cost_foreign * item.exchange_rate


def line_revenue(item: LineItem) -> Decimal:
    return realized_unit_price(item) * item.quantity


def line_profit(item: LineItem) -> Decimal:
    return (realized_unit_price(item) - realized_unit_cost(item)) * item.quantity


def order_profit(order: Order) -> Decimal:
    return sum((line_profit(item) for item in order.items), ZERO)
