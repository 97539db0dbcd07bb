from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator

from backoffice.domain.catalog.shards import CatalogShard


def _uuid() -> str:
    return str(uuid.uuid4())


class UtcDateTime(TypeDecorator):
    """Timezone-aware datetime normalized to UTC.

    SQLite keeps no offset, so aware values are converted to UTC and stored naive;
    results always come back tagged as UTC. Naive inputs are taken to be UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None or value.tzinfo is None:
            return value
        value = value.astimezone(timezone.utc)
        return value.replace(tzinfo=None) if dialect.name == "sqlite" else value

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    pass


class CustomerModel(Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)


class OrderModel(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    customer_id: Mapped[str] = mapped_column(String(36), ForeignKey("customers.id"), nullable=False)
    date: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="Ordered")
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    managed_by_user_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    customer: Mapped[CustomerModel] = relationship()
    items: Mapped[list["OrderItemModel"]] = relationship(
        back_populates="order",
        order_by="OrderItemModel.id",
        cascade="all, delete-orphan",
    )


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Nullable: the product may since have been deleted from its shard.
    product_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    salon_price_usd: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 4), nullable=True)
    exchange_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 4), nullable=True)

    order: Mapped[OrderModel] = relationship(back_populates="items")


class ExpenseModel(Base):
    __tablename__ = "expenses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)
    created_by_user_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class ProductColumns:
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    retail_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    salon_price: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False, default=0)
    exchange_rate: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False, default=0)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)


def _product_model(shard: CatalogShard) -> type[ProductColumns]:
    class_name = "Product" + "".join(part.title() for part in shard.name.split("_")) + "Model"
    return type(class_name, (ProductColumns, Base), {"__tablename__": shard.table_name})


PRODUCT_MODELS: dict[CatalogShard, type[ProductColumns]] = {shard: _product_model(shard) for shard in CatalogShard}


def product_model(shard: CatalogShard) -> type[ProductColumns]:
    return PRODUCT_MODELS[shard]


Index("ix_orders_date", OrderModel.date)
Index("ix_orders_status", OrderModel.status)
Index("ix_orders_manager", OrderModel.managed_by_user_email)
Index("ix_order_items_order_id", OrderItemModel.order_id)
Index("ix_customers_created_at", CustomerModel.created_at)
Index("ix_expenses_date", ExpenseModel.date)
