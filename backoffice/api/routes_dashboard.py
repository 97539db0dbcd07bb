from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.api.utils import get_reporting_engine
from backoffice.core.config import get_settings
from backoffice.core.security import Actor, get_actor, require_admin, require_roles
from backoffice.domain.reporting import ReportingEngine

router = APIRouter(tags=["dashboard"])


def _period(period: int | None) -> int:
    return period if period is not None else get_settings().default_period_days


@router.get("/dashboard/summary")
def get_dashboard_summary(
    period: int | None = Query(default=None, ge=1, le=3660, description="Window length in days"),
    actor: Actor = Depends(get_actor),
    engine: ReportingEngine = Depends(get_reporting_engine),
):
    require_admin(actor)
    return engine.dashboard_summary(_period(period)).to_dict()


@router.get("/dashboard/manager")
def get_manager_dashboard(
    period: int | None = Query(default=None, ge=1, le=3660, description="Window length in days"),
    manager_email: str | None = Query(default=None, description="Admins only: manager to inspect"),
    actor: Actor = Depends(get_actor),
    engine: ReportingEngine = Depends(get_reporting_engine),
):
    require_roles(actor, {"admin", "manager"})
    if actor.role == "manager":
        if manager_email and manager_email != actor.email:
            raise HTTPException(status_code=403, detail="managers can only view their own dashboard")
        email = actor.email
    else:
        if not manager_email:
            raise HTTPException(status_code=400, detail="manager_email is required for admins")
        email = manager_email

    return engine.manager_dashboard(_period(period), email).to_dict()
