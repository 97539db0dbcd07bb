from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from backoffice.api.utils import get_reporting_engine
from backoffice.core.config import get_settings
from backoffice.core.security import Actor, get_actor, require_roles
from backoffice.domain.reporting import ReportingEngine

router = APIRouter(tags=["warehouse"])


@router.get("/warehouse/low-stock")
def get_low_stock(
    threshold: int | None = Query(default=None, ge=0, description="Alert below this on-hand quantity"),
    actor: Actor = Depends(get_actor),
    engine: ReportingEngine = Depends(get_reporting_engine),
):
    require_roles(actor, {"admin", "manager"})
    limit = threshold if threshold is not None else get_settings().low_stock_threshold
    return engine.low_stock(limit).to_dict()
