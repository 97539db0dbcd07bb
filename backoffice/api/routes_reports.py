from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.api.utils import get_reporting_engine, parse_date_range
from backoffice.core.security import Actor, get_actor, require_admin
from backoffice.domain.reporting import ReportingEngine

router = APIRouter(tags=["reports"])


@router.get("/reports")
def get_report(
    start_date: str = Query(..., description="First day, YYYY-MM-DD"),
    end_date: str = Query(..., description="Last day (inclusive), YYYY-MM-DD"),
    actor: Actor = Depends(get_actor),
    engine: ReportingEngine = Depends(get_reporting_engine),
):
    require_admin(actor)
    try:
        start, end = parse_date_range(start_date, end_date)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return engine.report(start, end).to_dict()


@router.get("/reports/managers")
def get_manager_leaderboard(
    start_date: str = Query(..., description="First day, YYYY-MM-DD"),
    end_date: str = Query(..., description="Last day (inclusive), YYYY-MM-DD"),
    actor: Actor = Depends(get_actor),
    engine: ReportingEngine = Depends(get_reporting_engine),
):
    require_admin(actor)
    try:
        start, end = parse_date_range(start_date, end_date)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return engine.manager_leaderboard(start, end).to_dict()
