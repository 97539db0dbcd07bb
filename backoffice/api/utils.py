from __future__ import annotations

from datetime import date

from backoffice.domain.reporting import ReportingEngine, ReportPolicy
from backoffice.persistence.source import SqlReportDataSource


def parse_date_range(start_text: str, end_text: str) -> tuple[date, date]:
    try:
        start = date.fromisoformat(start_text)
        end = date.fromisoformat(end_text)
    except ValueError as exc:
        raise ValueError("dates must be YYYY-MM-DD") from exc
    if end < start:
        raise ValueError("end_date must not be before start_date")
    return start, end


def get_reporting_engine() -> ReportingEngine:
    return ReportingEngine(SqlReportDataSource(), ReportPolicy.from_settings())
