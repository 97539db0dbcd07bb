from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADMIN_API_KEY = "bo-admin-dev-key"
DEFAULT_MANAGER_API_KEY = "bo-manager-dev-key"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="BO_", extra="ignore")

    app_name: str = "Cosmetics Back-Office Reports"
    env: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    database_url: str = "sqlite+pysqlite:///./backoffice.db"

    auth_enabled: bool = True
    admin_api_key: str = DEFAULT_ADMIN_API_KEY
    manager_api_key: str = DEFAULT_MANAGER_API_KEY
    admin_actor_id: str = "admin@backoffice.local"
    manager_actor_id: str = Field(
        default="manager@backoffice.local",
        description="Email of the manager bound to manager_api_key; orders are assigned by this email",
    )

    # Order status that counts as recognized revenue for KPI scalars.
    confirmed_status: str = "Received"
    dashboard_top_n: int = Field(default=5, ge=1)
    report_top_n: int = Field(default=10, ge=1)
    recent_orders_limit: int = Field(default=5, ge=1)
    other_group_label: str = "Other"
    default_period_days: int = Field(default=30, ge=1)
    low_stock_threshold: int = Field(default=10, ge=0)
    report_max_workers: int = Field(default=8, ge=1, le=64)

    def model_post_init(self, __context) -> None:
        if self.env.lower() == "dev":
            return

        insecure_items: list[str] = []
        if self.admin_api_key == DEFAULT_ADMIN_API_KEY:
            insecure_items.append("BO_ADMIN_API_KEY")
        if self.manager_api_key == DEFAULT_MANAGER_API_KEY:
            insecure_items.append("BO_MANAGER_API_KEY")

        if insecure_items:
            raise ValueError(
                "insecure default api keys are not allowed outside dev mode; set env vars: "
                + ", ".join(sorted(insecure_items))
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
