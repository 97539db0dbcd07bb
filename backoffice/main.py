from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backoffice.api.routes_dashboard import router as dashboard_router
from backoffice.api.routes_reports import router as reports_router
from backoffice.api.routes_warehouse import router as warehouse_router
from backoffice.core.config import get_settings
from backoffice.core.logging import configure_logging
from backoffice.domain.reporting import ReportDataError
from backoffice.persistence.pg import init_db

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title=settings.app_name)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    logger.info("database ready: env=%s", settings.env)


@app.exception_handler(ReportDataError)
async def report_data_handler(_: Request, exc: ReportDataError):
    return JSONResponse(
        status_code=500,
        content={
            "detail": "report data unavailable",
            "error": "report_data",
        },
    )


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


app.include_router(dashboard_router)
app.include_router(reports_router)
app.include_router(warehouse_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())
