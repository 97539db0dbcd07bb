from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from backoffice.domain.money import as_money


class OrderStatus(str, Enum):
    ORDERED = "Ordered"
    SHIPPED = "Shipped"
    RECEIVED = "Received"
    CALCULATION = "Calculation"
    AWAITING_APPROVAL = "AwaitingApproval"
    PAID_BY_CLIENT = "PaidByClient"
    WRITTEN_OFF = "WrittenOff"
    READY_FOR_PICKUP = "ReadyForPickup"


@dataclass(frozen=True)
class LineItem:
    """One sold line with the prices and rates captured at sale time."""

    product_id: str | None
    product_name: str
    quantity: int
    unit_price: Decimal
    discount_percent: Decimal = Decimal("0")
    cost_foreign: Decimal | None = None
    exchange_rate: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", as_money(self.unit_price))
        object.__setattr__(self, "discount_percent", as_money(self.discount_percent))
        if self.cost_foreign is not None:
            object.__setattr__(self, "cost_foreign", as_money(self.cost_foreign))
        if self.exchange_rate is not None:
            object.__setattr__(self, "exchange_rate", as_money(self.exchange_rate))
        if not 0 <= self.discount_percent <= 100:
            raise ValueError(f"discount_percent out of range: {self.discount_percent}")


@dataclass(frozen=True)
class Order:
    order_id: str
    customer_id: str
    date: datetime
    status: OrderStatus
    total_amount: Decimal
    customer_name: str | None = None
    manager_email: str | None = None
    items: tuple[LineItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", OrderStatus(self.status))
        object.__setattr__(self, "total_amount", as_money(self.total_amount))
        object.__setattr__(self, "items", tuple(self.items))
