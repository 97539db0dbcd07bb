from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from functools import reduce
from typing import Callable, Iterable, Sequence, TypeVar

from backoffice.domain.catalog.shard_index import ShardIndex
from backoffice.domain.money import ZERO, money_to_json
from backoffice.domain.orders.aggregates import Order, OrderStatus
from backoffice.domain.reporting.periods import utc_day
from backoffice.domain.reporting.profit import line_revenue, order_profit
from backoffice.domain.reporting.series import DailyPoint

T = TypeVar("T")

UNKNOWN_CUSTOMER = "Unknown"
UNASSIGNED_MANAGER = "unassigned"


@dataclass(frozen=True)
class ProductTotal:
    product_id: str
    product_name: str
    group: str
    total_quantity: int
    total_revenue: Decimal

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "group": self.group,
            "total_quantity": self.total_quantity,
            "total_revenue": money_to_json(self.total_revenue),
        }


@dataclass(frozen=True)
class CustomerTotal:
    customer_id: str
    customer_name: str
    total_spent: Decimal
    order_count: int

    def to_dict(self) -> dict:
        return {
            "customer_id": self.customer_id,
            "customer_name": self.customer_name,
            "total_spent": money_to_json(self.total_spent),
            "order_count": self.order_count,
        }


@dataclass(frozen=True)
class GroupRevenue:
    group: str
    revenue: Decimal

    def to_dict(self) -> dict:
        return {"group": self.group, "revenue": money_to_json(self.revenue)}


@dataclass(frozen=True)
class ManagerTotal:
    manager_email: str
    order_count: int
    sales: Decimal
    profit: Decimal

    def to_dict(self) -> dict:
        return {
            "manager_email": self.manager_email,
            "total_orders": self.order_count,
            "total_sales": money_to_json(self.sales),
            "total_profit": money_to_json(self.profit),
        }


@dataclass(frozen=True)
class SalesAggregate:
    """Totals folded from a set of orders.

    Keyed collections are tuples in first-seen order, so rankings built from
    them break ties deterministically.
    """

    revenue: Decimal = ZERO
    profit: Decimal = ZERO
    order_count: int = 0
    line_revenue: Decimal = ZERO
    daily: tuple[DailyPoint, ...] = ()
    products: tuple[ProductTotal, ...] = ()
    customers: tuple[CustomerTotal, ...] = ()
    groups: tuple[GroupRevenue, ...] = ()

    @property
    def distinct_customers(self) -> int:
        return len(self.customers)

    def daily_map(self) -> dict[date, DailyPoint]:
        return {point.date: point for point in self.daily}


@dataclass
class _Accumulator:
    revenue: Decimal = ZERO
    profit: Decimal = ZERO
    order_count: int = 0
    line_revenue: Decimal = ZERO
    daily: dict[date, DailyPoint] = field(default_factory=dict)
    products: dict[str, ProductTotal] = field(default_factory=dict)
    customers: dict[str, CustomerTotal] = field(default_factory=dict)
    groups: dict[str, Decimal] = field(default_factory=dict)

    def _add_day(self, day: date, sales: Decimal, profit: Decimal) -> None:
        point = self.daily.get(day) or DailyPoint(date=day)
        self.daily[day] = point.plus(sales, profit)

    def _add_product(self, product: ProductTotal) -> None:
        current = self.products.get(product.product_id)
        if current is None:
            self.products[product.product_id] = product
            return
        self.products[product.product_id] = ProductTotal(
            product_id=current.product_id,
            product_name=current.product_name,
            group=current.group,
            total_quantity=current.total_quantity + product.total_quantity,
            total_revenue=current.total_revenue + product.total_revenue,
        )

    def _add_customer(self, customer: CustomerTotal) -> None:
        current = self.customers.get(customer.customer_id)
        if current is None:
            self.customers[customer.customer_id] = customer
            return
        self.customers[customer.customer_id] = CustomerTotal(
            customer_id=current.customer_id,
            customer_name=current.customer_name,
            total_spent=current.total_spent + customer.total_spent,
            order_count=current.order_count + customer.order_count,
        )

    def _add_group(self, group: str, revenue: Decimal) -> None:
        self.groups[group] = self.groups.get(group, ZERO) + revenue

    def add_order(self, order: Order, shard_index: ShardIndex) -> "_Accumulator":
        profit = order_profit(order)
        self.revenue += order.total_amount
        self.profit += profit
        self.order_count += 1
        self._add_day(utc_day(order.date), order.total_amount, profit)
        self._add_customer(
            CustomerTotal(
                customer_id=order.customer_id,
                customer_name=order.customer_name or UNKNOWN_CUSTOMER,
                total_spent=order.total_amount,
                order_count=1,
            )
        )

        for item in order.items:
            revenue = line_revenue(item)
            group = shard_index.group_for(item.product_id)
            self.line_revenue += revenue
            self._add_group(group, revenue)
            if item.product_id:
                self._add_product(
                    ProductTotal(
                        product_id=item.product_id,
                        product_name=item.product_name,
                        group=group,
                        total_quantity=item.quantity,
                        total_revenue=revenue,
                    )
                )
        return self

    def freeze(self) -> SalesAggregate:
        return SalesAggregate(
            revenue=self.revenue,
            profit=self.profit,
            order_count=self.order_count,
            line_revenue=self.line_revenue,
            daily=tuple(self.daily.values()),
            products=tuple(self.products.values()),
            customers=tuple(self.customers.values()),
            groups=tuple(GroupRevenue(group=group, revenue=revenue) for group, revenue in self.groups.items()),
        )


def aggregate_orders(orders: Iterable[Order], shard_index: ShardIndex) -> SalesAggregate:
    accumulator = reduce(lambda acc, order: acc.add_order(order, shard_index), orders, _Accumulator())
    return accumulator.freeze()


def top_n(entries: Iterable[T], key: Callable[[T], Decimal | int], n: int) -> list[T]:
    # sorted() is stable with reverse=True, so equal keys keep first-seen order.
    if n < 0:
        raise ValueError("n must be non-negative")
    return sorted(entries, key=key, reverse=True)[:n]


def recent_orders(orders: Iterable[Order], limit: int) -> list[Order]:
    return sorted(orders, key=lambda order: order.date, reverse=True)[:limit]


def confirmed_orders(orders: Sequence[Order], confirmed_status: OrderStatus) -> list[Order]:
    return [order for order in orders if order.status == confirmed_status]


def aggregate_by_manager(orders: Iterable[Order]) -> list[ManagerTotal]:
    totals: dict[str, ManagerTotal] = {}
    for order in orders:
        email = order.manager_email or UNASSIGNED_MANAGER
        current = totals.get(email) or ManagerTotal(manager_email=email, order_count=0, sales=ZERO, profit=ZERO)
        totals[email] = ManagerTotal(
            manager_email=email,
            order_count=current.order_count + 1,
            sales=current.sales + order.total_amount,
            profit=current.profit + order_profit(order),
        )
    return top_n(totals.values(), key=lambda total: total.profit, n=len(totals))
