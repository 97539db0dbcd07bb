from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from backoffice.domain.accounting.expenses import Expense
from backoffice.domain.catalog.stock import StockLevel
from backoffice.domain.money import money_to_json
from backoffice.domain.orders.aggregates import Order
from backoffice.domain.reporting.aggregation import (
    UNKNOWN_CUSTOMER,
    CustomerTotal,
    GroupRevenue,
    ManagerTotal,
    ProductTotal,
)
from backoffice.domain.reporting.periods import DateWindow, ResolvedPeriod
from backoffice.domain.reporting.series import DailyPoint


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def _number(value: Decimal | int) -> float | int:
    if isinstance(value, Decimal):
        return money_to_json(value)
    return value


@dataclass(frozen=True)
class KPI:
    value: Decimal | int
    change_percent: float

    def to_dict(self) -> dict:
        return {"value": _number(self.value), "change_percent": round(self.change_percent, 2)}


@dataclass(frozen=True)
class RecentOrder:
    order_id: str
    customer_name: str
    total_amount: Decimal
    status: str
    date: datetime

    @classmethod
    def from_order(cls, order: Order) -> "RecentOrder":
        return cls(
            order_id=order.order_id,
            customer_name=order.customer_name or UNKNOWN_CUSTOMER,
            total_amount=order.total_amount,
            status=order.status.value,
            date=order.date,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.order_id,
            "customer_name": self.customer_name,
            "total_amount": money_to_json(self.total_amount),
            "status": self.status,
            "date": _iso(self.date),
        }


@dataclass(frozen=True)
class DashboardKPIs:
    revenue: KPI
    profit: KPI
    order_count: KPI
    new_customers: KPI

    def to_dict(self) -> dict:
        return {
            "revenue": self.revenue.to_dict(),
            "profit": self.profit.to_dict(),
            "order_count": self.order_count.to_dict(),
            "new_customers": self.new_customers.to_dict(),
        }


@dataclass(frozen=True)
class DashboardSummary:
    period: ResolvedPeriod
    kpis: DashboardKPIs
    chart: tuple[DailyPoint, ...]
    recent_orders: tuple[RecentOrder, ...]
    top_products: tuple[ProductTotal, ...]

    def to_dict(self) -> dict:
        return {
            "period": {
                "current": self.period.current.to_dict(),
                "previous": self.period.previous.to_dict(),
            },
            "kpis": self.kpis.to_dict(),
            "chart_data": [point.to_dict() for point in self.chart],
            "recent_orders": [order.to_dict() for order in self.recent_orders],
            "top_products": [
                {"product_name": product.product_name, "total_revenue": money_to_json(product.total_revenue)}
                for product in self.top_products
            ],
        }


@dataclass(frozen=True)
class Report:
    window: DateWindow
    total_revenue: Decimal
    gross_profit: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    total_orders: int
    sales_by_day: tuple[DailyPoint, ...]
    top_products: tuple[ProductTotal, ...]
    top_customers: tuple[CustomerTotal, ...]
    revenue_by_group: tuple[GroupRevenue, ...]
    expenses: tuple[Expense, ...]

    def to_dict(self) -> dict:
        return {
            "period": self.window.to_dict(),
            "total_revenue": money_to_json(self.total_revenue),
            "gross_profit": money_to_json(self.gross_profit),
            "total_expenses": money_to_json(self.total_expenses),
            "net_profit": money_to_json(self.net_profit),
            "total_orders": self.total_orders,
            "sales_by_day": [point.to_dict() for point in self.sales_by_day],
            "top_products": [product.to_dict() for product in self.top_products],
            "top_customers": [customer.to_dict() for customer in self.top_customers],
            "revenue_by_group": [entry.to_dict() for entry in self.revenue_by_group],
            "expenses": [expense.to_dict() for expense in self.expenses],
        }


@dataclass(frozen=True)
class ManagerDashboard:
    manager_email: str
    period: ResolvedPeriod
    total_sales: KPI
    total_orders: KPI
    recent_orders: tuple[RecentOrder, ...]
    top_products: tuple[ProductTotal, ...]

    def to_dict(self) -> dict:
        return {
            "manager_email": self.manager_email,
            "period": {
                "current": self.period.current.to_dict(),
                "previous": self.period.previous.to_dict(),
            },
            "kpis": {
                "total_sales": self.total_sales.to_dict(),
                "total_orders": self.total_orders.to_dict(),
            },
            "recent_orders": [order.to_dict() for order in self.recent_orders],
            "top_products": [
                {"product_name": product.product_name, "total_revenue": money_to_json(product.total_revenue)}
                for product in self.top_products
            ],
        }


@dataclass(frozen=True)
class ManagerLeaderboard:
    window: DateWindow
    managers: tuple[ManagerTotal, ...]
    total_profit: Decimal

    def to_dict(self) -> dict:
        return {
            "period": self.window.to_dict(),
            "total_profit": money_to_json(self.total_profit),
            "manager_report": [manager.to_dict() for manager in self.managers],
        }


@dataclass(frozen=True)
class LowStockReport:
    threshold: int
    products: tuple[StockLevel, ...]

    def to_dict(self) -> dict:
        return {
            "threshold": self.threshold,
            "count": len(self.products),
            "products": [
                {
                    "product_id": level.product_id,
                    "name": level.name,
                    "quantity": level.quantity,
                    "group": level.group,
                }
                for level in self.products
            ],
        }
