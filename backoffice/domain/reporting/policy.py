from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from backoffice.core.config import Settings, get_settings
from backoffice.domain.orders.aggregates import OrderStatus


class ReportPolicy(BaseModel):
    """Business rules the engine applies when turning orders into figures.

    KPI scalars and rankings only count orders in ``confirmed_status``; the
    daily activity chart counts every order regardless of status.
    """

    model_config = ConfigDict(frozen=True)

    confirmed_status: OrderStatus = OrderStatus.RECEIVED
    dashboard_top_n: int = Field(default=5, ge=1)
    report_top_n: int = Field(default=10, ge=1)
    recent_orders_limit: int = Field(default=5, ge=1)
    other_group_label: str = "Other"
    max_workers: int = Field(default=8, ge=1)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ReportPolicy":
        settings = settings or get_settings()
        return cls(
            confirmed_status=OrderStatus(settings.confirmed_status),
            dashboard_top_n=settings.dashboard_top_n,
            report_top_n=settings.report_top_n,
            recent_orders_limit=settings.recent_orders_limit,
            other_group_label=settings.other_group_label,
            max_workers=settings.report_max_workers,
        )
