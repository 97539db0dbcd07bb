from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from backoffice.domain.catalog import CatalogShard, merge_shard_ids
from backoffice.domain.orders.aggregates import OrderStatus
from backoffice.domain.reporting.aggregation import (
    SalesAggregate,
    aggregate_by_manager,
    aggregate_orders,
    confirmed_orders,
    recent_orders,
    top_n,
)
from backoffice.domain.reporting.profit import line_revenue
from fakes import item, order, utc

INDEX = merge_shard_ids({CatalogShard.BDR: ["p1", "p2"], CatalogShard.LA: ["p3"]})


def _orders():
    return [
        order(
            "o1",
            utc(2026, 1, 5, 9),
            total=290,
            customer_id="c1",
            customer_name="Olena",
            items=[item("p1", quantity=2, price=100, discount=10), item("p3", quantity=1, price=110)],
        ),
        order(
            "o2",
            utc(2026, 1, 5, 23, 30),
            total=300,
            customer_id="c2",
            customer_name=None,
            items=[item("p2", quantity=3, price=100, cost="1", rate="40")],
        ),
        order(
            "o3",
            utc(2026, 1, 7),
            total=150,
            customer_id="c1",
            customer_name="Olena",
            items=[item("gone", quantity=1, price=100), item(None, quantity=1, price=50, name="deleted")],
        ),
    ]


def test_fold_totals():
    aggregate = aggregate_orders(_orders(), INDEX)

    assert aggregate.order_count == 3
    assert aggregate.revenue == Decimal("740")
    # o1: 180 + 110, o2: (100 - 40) * 3, o3: 100 + 50
    assert aggregate.profit == Decimal("620")
    assert aggregate.distinct_customers == 2


def test_daily_buckets_use_utc_days():
    daily = aggregate_orders(_orders(), INDEX).daily_map()
    assert set(daily) == {date(2026, 1, 5), date(2026, 1, 7)}
    assert daily[date(2026, 1, 5)].sales == Decimal("590")
    assert daily[date(2026, 1, 7)].profit == Decimal("150")


def test_group_revenue_sums_to_total_line_revenue():
    orders = _orders()
    aggregate = aggregate_orders(orders, INDEX)
    independent = sum(line_revenue(line) for o in orders for line in o.items)

    assert sum(entry.revenue for entry in aggregate.groups) == independent
    assert aggregate.line_revenue == independent
    groups = {entry.group: entry.revenue for entry in aggregate.groups}
    assert groups == {"BDR": Decimal("480"), "LA": Decimal("110"), "Other": Decimal("150")}


def test_products_skip_lines_without_product_id():
    products = {p.product_id: p for p in aggregate_orders(_orders(), INDEX).products}
    assert set(products) == {"p1", "p3", "p2", "gone"}
    assert products["gone"].group == "Other"
    assert products["p2"].total_quantity == 3


def test_customers_aggregate_spend_and_count():
    customers = {c.customer_id: c for c in aggregate_orders(_orders(), INDEX).customers}
    assert customers["c1"].total_spent == Decimal("440")
    assert customers["c1"].order_count == 2
    assert customers["c2"].customer_name == "Unknown"


def test_empty_fold_is_zero():
    aggregate = aggregate_orders([], INDEX)
    assert aggregate == SalesAggregate()
    assert aggregate.revenue == 0 and aggregate.products == () and aggregate.daily == ()


def test_aggregate_is_immutable():
    aggregate = aggregate_orders(_orders(), INDEX)
    with pytest.raises(AttributeError):
        aggregate.revenue = Decimal("1")


def test_top_n_is_bounded_sorted_and_stable():
    entries = [("a", 5), ("b", 9), ("c", 5), ("d", 1), ("e", 9), ("f", 5)]
    top = top_n(entries, key=lambda e: e[1], n=4)
    assert top == [("b", 9), ("e", 9), ("a", 5), ("c", 5)]
    assert top_n(entries, key=lambda e: e[1], n=10) == [("b", 9), ("e", 9), ("a", 5), ("c", 5), ("f", 5), ("d", 1)]
    assert top_n([], key=lambda e: e, n=5) == []


def test_recent_orders_newest_first():
    assert [o.order_id for o in recent_orders(_orders(), 2)] == ["o3", "o2"]


def test_confirmed_filter():
    orders = _orders() + [order("o4", utc(2026, 1, 6), total=1000, status=OrderStatus.ORDERED)]
    assert [o.order_id for o in confirmed_orders(orders, OrderStatus.RECEIVED)] == ["o1", "o2", "o3"]


def test_manager_totals_sorted_by_profit():
    orders = [
        order("o1", utc(2026, 1, 1), total=100, manager_email="a@x", items=[item("p1", price=100)]),
        order("o2", utc(2026, 1, 1), total=500, items=[item("p1", price=500)]),
        order("o3", utc(2026, 1, 2), total=200, manager_email="a@x", items=[item("p1", price=200)]),
    ]
    totals = aggregate_by_manager(orders)
    assert [(t.manager_email, t.order_count, t.profit) for t in totals] == [
        ("unassigned", 1, Decimal("500")),
        ("a@x", 2, Decimal("300")),
    ]
