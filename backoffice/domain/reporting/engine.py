from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Any, Callable

from backoffice.domain.accounting.reports import generate_pnl
from backoffice.domain.catalog.shard_index import ShardIndex, build_shard_index
from backoffice.domain.catalog.stock import find_low_stock
from backoffice.domain.money import ZERO
from backoffice.domain.reporting.aggregation import (
    aggregate_by_manager,
    aggregate_orders,
    confirmed_orders,
    recent_orders,
    top_n,
)
from backoffice.domain.reporting.errors import ReportDataError
from backoffice.domain.reporting.periods import DateWindow, change_percent, resolve_period
from backoffice.domain.reporting.policy import ReportPolicy
from backoffice.domain.reporting.results import (
    KPI,
    DashboardKPIs,
    DashboardSummary,
    LowStockReport,
    ManagerDashboard,
    ManagerLeaderboard,
    RecentOrder,
    Report,
)
from backoffice.domain.reporting.series import densify_daily
from backoffice.domain.reporting.source import ReportDataSource

logger = logging.getLogger(__name__)

SHARD_INDEX = "shard_index"


class ReportingEngine:
    def __init__(self, source: ReportDataSource, policy: ReportPolicy | None = None):
        self.source = source
        self.policy = policy or ReportPolicy()

    def _build_shard_index(self) -> ShardIndex:
        return build_shard_index(
            self.source,
            max_workers=self.policy.max_workers,
            other_group=self.policy.other_group_label,
        )

    def _fan_out(self, reads: dict[str, Callable[[], Any]]) -> dict[str, Any]:
        # Independent reads run concurrently; any failure fails the request.
        workers = min(self.policy.max_workers, max(1, len(reads)))
        results: dict[str, Any] = {}
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {name: pool.submit(read) for name, read in reads.items()}
            for name, future in futures.items():
                try:
                    results[name] = future.result()
                except Exception as exc:
                    logger.error("report read failed: %s: %s", name, exc, exc_info=True)
                    raise ReportDataError(f"failed to read {name}") from exc
        return results

    def dashboard_summary(self, period_days: int, anchor: date | datetime | None = None) -> DashboardSummary:
        period = resolve_period(period_days, anchor)
        confirmed = [self.policy.confirmed_status]
        data = self._fan_out(
            {
                "current_orders": lambda: list(self.source.fetch_orders(period.current)),
                "previous_orders": lambda: list(self.source.fetch_orders(period.previous, statuses=confirmed)),
                "current_customers": lambda: list(self.source.fetch_customers(period.current)),
                "previous_customers": lambda: list(self.source.fetch_customers(period.previous)),
                SHARD_INDEX: self._build_shard_index,
            }
        )
        index: ShardIndex = data[SHARD_INDEX]

        current = aggregate_orders(confirmed_orders(data["current_orders"], self.policy.confirmed_status), index)
        previous = aggregate_orders(confirmed_orders(data["previous_orders"], self.policy.confirmed_status), index)
        activity = aggregate_orders(data["current_orders"], index)

        new_customers = len(data["current_customers"])
        previous_customers = len(data["previous_customers"])
        kpis = DashboardKPIs(
            revenue=KPI(current.revenue, change_percent(current.revenue, previous.revenue)),
            profit=KPI(current.profit, change_percent(current.profit, previous.profit)),
            order_count=KPI(current.order_count, change_percent(current.order_count, previous.order_count)),
            new_customers=KPI(new_customers, change_percent(new_customers, previous_customers)),
        )

        summary = DashboardSummary(
            period=period,
            kpis=kpis,
            chart=densify_daily(activity.daily_map(), period.current.start, period.current.end),
            recent_orders=tuple(
                RecentOrder.from_order(order)
                for order in recent_orders(data["current_orders"], self.policy.recent_orders_limit)
            ),
            top_products=tuple(
                top_n(current.products, key=lambda product: product.total_revenue, n=self.policy.dashboard_top_n)
            ),
        )
        logger.info(
            "dashboard summary built: period_days=%s orders=%s confirmed=%s",
            period_days,
            activity.order_count,
            current.order_count,
        )
        return summary

    def report(self, start: date, end: date) -> Report:
        window = DateWindow(start, end)
        data = self._fan_out(
            {
                "orders": lambda: list(self.source.fetch_orders(window)),
                "expenses": lambda: list(self.source.fetch_expenses(window)),
                SHARD_INDEX: self._build_shard_index,
            }
        )
        index: ShardIndex = data[SHARD_INDEX]

        confirmed = aggregate_orders(confirmed_orders(data["orders"], self.policy.confirmed_status), index)
        activity = aggregate_orders(data["orders"], index)
        pnl = generate_pnl(confirmed.revenue, confirmed.profit, data["expenses"])

        report = Report(
            window=window,
            total_revenue=pnl.revenue,
            gross_profit=pnl.gross_profit,
            total_expenses=pnl.expenses_total,
            net_profit=pnl.net_profit,
            total_orders=confirmed.order_count,
            sales_by_day=densify_daily(activity.daily_map(), window.start, window.end),
            top_products=tuple(
                top_n(confirmed.products, key=lambda product: product.total_revenue, n=self.policy.report_top_n)
            ),
            top_customers=tuple(
                top_n(confirmed.customers, key=lambda customer: customer.total_spent, n=self.policy.report_top_n)
            ),
            revenue_by_group=tuple(
                top_n(confirmed.groups, key=lambda entry: entry.revenue, n=len(confirmed.groups))
            ),
            expenses=pnl.expenses,
        )
        logger.info(
            "report built: start=%s end=%s orders=%s confirmed=%s expenses=%s",
            window.start.isoformat(),
            window.end.isoformat(),
            activity.order_count,
            confirmed.order_count,
            len(pnl.expenses),
        )
        return report

    def manager_dashboard(
        self,
        period_days: int,
        manager_email: str,
        anchor: date | datetime | None = None,
    ) -> ManagerDashboard:
        if not manager_email:
            raise ValueError("manager_email is required")
        period = resolve_period(period_days, anchor)
        data = self._fan_out(
            {
                "current_orders": lambda: list(self.source.fetch_orders(period.current, manager_email=manager_email)),
                "previous_orders": lambda: list(
                    self.source.fetch_orders(
                        period.previous,
                        statuses=[self.policy.confirmed_status],
                        manager_email=manager_email,
                    )
                ),
                SHARD_INDEX: self._build_shard_index,
            }
        )
        index: ShardIndex = data[SHARD_INDEX]

        current = aggregate_orders(confirmed_orders(data["current_orders"], self.policy.confirmed_status), index)
        previous = aggregate_orders(confirmed_orders(data["previous_orders"], self.policy.confirmed_status), index)

        return ManagerDashboard(
            manager_email=manager_email,
            period=period,
            total_sales=KPI(current.revenue, change_percent(current.revenue, previous.revenue)),
            total_orders=KPI(current.order_count, change_percent(current.order_count, previous.order_count)),
            recent_orders=tuple(
                RecentOrder.from_order(order)
                for order in recent_orders(data["current_orders"], self.policy.recent_orders_limit)
            ),
            top_products=tuple(
                top_n(current.products, key=lambda product: product.total_revenue, n=self.policy.dashboard_top_n)
            ),
        )

    def manager_leaderboard(self, start: date, end: date) -> ManagerLeaderboard:
        window = DateWindow(start, end)
        data = self._fan_out({"orders": lambda: list(self.source.fetch_orders(window))})
        managers = aggregate_by_manager(confirmed_orders(data["orders"], self.policy.confirmed_status))
        return ManagerLeaderboard(
            window=window,
            managers=tuple(managers),
            total_profit=sum((manager.profit for manager in managers), ZERO),
        )

    def low_stock(self, threshold: int) -> LowStockReport:
        products = find_low_stock(self.source, threshold, max_workers=self.policy.max_workers)
        return LowStockReport(threshold=threshold, products=tuple(products))
