from __future__ import annotations

from typing import Callable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

import backoffice.persistence.pg as pg
from backoffice.domain.accounting.expenses import Expense
from backoffice.domain.catalog.shards import CatalogShard
from backoffice.domain.catalog.stock import StockLevel
from backoffice.domain.customers import Customer
from backoffice.domain.orders.aggregates import LineItem, Order, OrderStatus
from backoffice.domain.reporting.periods import DateWindow
from backoffice.persistence.models import (
    CustomerModel,
    ExpenseModel,
    OrderItemModel,
    OrderModel,
    product_model,
)


def _line_item(row: OrderItemModel) -> LineItem:
    return LineItem(
        product_id=row.product_id,
        product_name=row.product_name,
        quantity=int(row.quantity),
        unit_price=row.price,
        discount_percent=row.discount or 0,
        cost_foreign=row.salon_price_usd,
        exchange_rate=row.exchange_rate,
    )


def _order(row: OrderModel) -> Order:
    return Order(
        order_id=row.id,
        customer_id=row.customer_id,
        customer_name=row.customer.name if row.customer is not None else None,
        date=row.date,
        status=OrderStatus(row.status),
        total_amount=row.total_amount,
        manager_email=row.managed_by_user_email,
        items=tuple(_line_item(item) for item in row.items),
    )


class SqlReportDataSource:
    """Reads for the reporting engine backed by SQLAlchemy.

    Every call opens its own session so reads can run on worker threads.
    """

    def __init__(self, session_factory: Callable[[], Session] | None = None):
        self._session_factory = session_factory

    def _session(self) -> Session:
        factory = self._session_factory or pg.SessionLocal
        return factory()

    def fetch_orders(
        self,
        window: DateWindow,
        statuses: Sequence[OrderStatus] | None = None,
        manager_email: str | None = None,
    ) -> list[Order]:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.items), joinedload(OrderModel.customer))
            .where(OrderModel.date >= window.start_at())
            .where(OrderModel.date < window.end_before())
            .order_by(OrderModel.date.asc(), OrderModel.id.asc())
        )
        if statuses is not None:
            stmt = stmt.where(OrderModel.status.in_([OrderStatus(status).value for status in statuses]))
        if manager_email is not None:
            stmt = stmt.where(OrderModel.managed_by_user_email == manager_email)

        with self._session() as session:
            rows = session.scalars(stmt).unique().all()
            return [_order(row) for row in rows]

    def fetch_customers(self, window: DateWindow) -> list[Customer]:
        stmt = (
            select(CustomerModel)
            .where(CustomerModel.created_at >= window.start_at())
            .where(CustomerModel.created_at < window.end_before())
            .order_by(CustomerModel.created_at.asc())
        )
        with self._session() as session:
            return [
                Customer(customer_id=row.id, name=row.name, created_at=row.created_at)
                for row in session.scalars(stmt).all()
            ]

    def fetch_expenses(self, window: DateWindow) -> list[Expense]:
        stmt = (
            select(ExpenseModel)
            .where(ExpenseModel.date >= window.start)
            .where(ExpenseModel.date <= window.end)
            .order_by(ExpenseModel.date.desc())
        )
        with self._session() as session:
            return [
                Expense(
                    expense_id=row.id,
                    name=row.name,
                    amount=row.amount,
                    date=row.date,
                    notes=row.notes,
                    created_at=row.created_at,
                    created_by_user_email=row.created_by_user_email,
                )
                for row in session.scalars(stmt).all()
            ]

    def read_ids(self, shard: CatalogShard) -> list[str]:
        model = product_model(shard)
        with self._session() as session:
            return list(session.scalars(select(model.id)).all())

    def read_low_stock(self, shard: CatalogShard, threshold: int) -> list[StockLevel]:
        model = product_model(shard)
        stmt = select(model).where(model.quantity < threshold).order_by(model.quantity.asc())
        with self._session() as session:
            return [
                StockLevel(product_id=row.id, name=row.name, quantity=int(row.quantity), group=shard.group)
                for row in session.scalars(stmt).all()
            ]
