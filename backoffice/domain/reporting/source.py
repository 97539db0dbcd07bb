from __future__ import annotations

from typing import Protocol, Sequence

from backoffice.domain.accounting.expenses import Expense
from backoffice.domain.catalog.shards import CatalogShard
from backoffice.domain.catalog.stock import StockLevel
from backoffice.domain.customers import Customer
from backoffice.domain.orders.aggregates import Order, OrderStatus
from backoffice.domain.reporting.periods import DateWindow


class ReportDataSource(Protocol):
    """Synchronous reads the reporting engine consumes.

    Windows are inclusive UTC calendar days. Implementations must be safe to
    call from several threads at once.
    """

    def fetch_orders(
        self,
        window: DateWindow,
        statuses: Sequence[OrderStatus] | None = None,
        manager_email: str | None = None,
    ) -> Sequence[Order]:
        ...

    def fetch_customers(self, window: DateWindow) -> Sequence[Customer]:
        ...

    def fetch_expenses(self, window: DateWindow) -> Sequence[Expense]:
        ...

    def read_ids(self, shard: CatalogShard) -> Sequence[str]:
        ...

    def read_low_stock(self, shard: CatalogShard, threshold: int) -> Sequence[StockLevel]:
        ...
