from __future__ import annotations

import threading
from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

from backoffice.domain.accounting.expenses import Expense
from backoffice.domain.catalog.shards import CatalogShard
from backoffice.domain.catalog.stock import StockLevel
from backoffice.domain.customers import Customer
from backoffice.domain.orders.aggregates import LineItem, Order, OrderStatus
from backoffice.domain.reporting.periods import DateWindow


def utc(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def item(
    product_id: str | None,
    quantity: int = 1,
    price: int | str = 100,
    discount: int | str = 0,
    cost: str | None = None,
    rate: str | None = None,
    name: str | None = None,
) -> LineItem:
    return LineItem(
        product_id=product_id,
        product_name=name or f"product {product_id}",
        quantity=quantity,
        unit_price=Decimal(str(price)),
        discount_percent=Decimal(str(discount)),
        cost_foreign=Decimal(cost) if cost is not None else None,
        exchange_rate=Decimal(rate) if rate is not None else None,
    )


def order(
    order_id: str,
    when: datetime,
    total: int | str,
    status: OrderStatus = OrderStatus.RECEIVED,
    customer_id: str = "c1",
    customer_name: str | None = "Olena",
    manager_email: str | None = None,
    items: Sequence[LineItem] = (),
) -> Order:
    return Order(
        order_id=order_id,
        customer_id=customer_id,
        customer_name=customer_name,
        date=when,
        status=status,
        total_amount=Decimal(str(total)),
        manager_email=manager_email,
        items=tuple(items),
    )


class FakeReportSource:
    """In-memory ReportDataSource recording every call it receives."""

    def __init__(
        self,
        orders: Sequence[Order] = (),
        customers: Sequence[Customer] = (),
        expenses: Sequence[Expense] = (),
        shard_ids: dict[CatalogShard, list[str]] | None = None,
        stock: dict[CatalogShard, list[StockLevel]] | None = None,
        failing_shards: set[CatalogShard] | None = None,
        fail_orders: bool = False,
        fail_expenses: bool = False,
        fail_customers: bool = False,
    ):
        self.orders = list(orders)
        self.customers = list(customers)
        self.expenses = list(expenses)
        self.shard_ids = shard_ids or {}
        self.stock = stock or {}
        self.failing_shards = failing_shards or set()
        self.fail_orders = fail_orders
        self.fail_expenses = fail_expenses
        self.fail_customers = fail_customers
        self.calls: list[tuple] = []
        self._lock = threading.Lock()

    def _record(self, *call) -> None:
        with self._lock:
            self.calls.append(call)

    def fetch_orders(self, window: DateWindow, statuses=None, manager_email=None) -> list[Order]:
        self._record("fetch_orders", window, tuple(statuses) if statuses else None, manager_email)
        if self.fail_orders:
            raise ConnectionError("orders store unreachable")
        rows = [o for o in self.orders if window.contains(o.date)]
        if statuses is not None:
            rows = [o for o in rows if o.status in set(statuses)]
        if manager_email is not None:
            rows = [o for o in rows if o.manager_email == manager_email]
        return rows

    def fetch_customers(self, window: DateWindow) -> list[Customer]:
        self._record("fetch_customers", window)
        if self.fail_customers:
            raise ConnectionError("customers store unreachable")
        return [c for c in self.customers if window.contains(c.created_at)]

    def fetch_expenses(self, window: DateWindow) -> list[Expense]:
        self._record("fetch_expenses", window)
        if self.fail_expenses:
            raise ConnectionError("expenses store unreachable")
        return [e for e in self.expenses if window.contains(e.date)]

    def read_ids(self, shard: CatalogShard) -> list[str]:
        self._record("read_ids", shard)
        if shard in self.failing_shards:
            raise ConnectionError(f"{shard.table_name} unreachable")
        return list(self.shard_ids.get(shard, []))

    def read_low_stock(self, shard: CatalogShard, threshold: int) -> list[StockLevel]:
        self._record("read_low_stock", shard, threshold)
        if shard in self.failing_shards:
            raise ConnectionError(f"{shard.table_name} unreachable")
        return [level for level in self.stock.get(shard, []) if level.quantity < threshold]
