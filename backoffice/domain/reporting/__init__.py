from backoffice.domain.reporting.engine import ReportingEngine
from backoffice.domain.reporting.errors import ReportDataError
from backoffice.domain.reporting.periods import DateWindow, ResolvedPeriod, change_percent, resolve_period
from backoffice.domain.reporting.policy import ReportPolicy
from backoffice.domain.reporting.profit import line_profit, line_revenue, order_profit
from backoffice.domain.reporting.series import DailyPoint, densify, densify_daily
from backoffice.domain.reporting.source import ReportDataSource

__all__ = [
    "DailyPoint",
    "DateWindow",
    "ReportDataError",
    "ReportDataSource",
    "ReportPolicy",
    "ReportingEngine",
    "ResolvedPeriod",
    "change_percent",
    "densify",
    "densify_daily",
    "line_profit",
    "line_revenue",
    "order_profit",
    "resolve_period",
]
