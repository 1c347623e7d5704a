"""API routes for the Time Report service."""

from __future__ import annotations

import base64
from typing import Any, Optional

from fastapi import APIRouter, Body, Query

from timesheet_report.config import ReportSettings
from timesheet_report.engine import aggregate_hours
from timesheet_report.fetcher import fetch_entries
from timesheet_report.models import (
    ConfigError,
    FetchError,
    NoDataError,
    PayloadError,
    SkipReason,
    TimeEntry,
    round_hours,
)
from timesheet_report.parsers import parse_entries
from timesheet_report.reports import render_html_table, render_pie_chart_bytes
from timesheet_report.reports.formatting import share_percent

from api.schemas import (
    EmployeeSummary,
    HoursSummary,
    ReportResponse,
    SkippedCounts,
)

router = APIRouter(prefix="/api/v1")


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


def _build_report(
    entries: list[TimeEntry],
    include_reports: bool,
    low_hours: float,
) -> ReportResponse:
    if not entries:
        raise NoDataError("No entries received.")

    hours = aggregate_hours(entries)
    if hours.is_empty:
        raise NoDataError("No usable time entries (every entry was skipped).")

    total = hours.grand_total
    employees = [
        EmployeeSummary(
            rank=rank,
            name=emp.name,
            total_hours=float(emp.total_hours),
            share_pct=float(round_hours(share_percent(emp.total_hours, total))),
            low=float(emp.total_hours) < low_hours,
        )
        for rank, emp in enumerate(hours, start=1)
    ]

    summary = HoursSummary(
        total_employees=len(hours),
        grand_total_hours=float(total),
        entries_received=hours.entries_received,
        entries_used=hours.entries_used,
        skipped=SkippedCounts(**{
            reason.value: hours.skipped.get(reason, 0) for reason in SkipReason
        }),
    )

    response = ReportResponse(success=True, summary=summary, employees=employees)
    if include_reports:
        response.html = render_html_table(hours, low_threshold=low_hours)
        response.chart_base64 = base64.b64encode(render_pie_chart_bytes(hours)).decode("ascii")
    return response


def _error_response(e: Exception) -> ReportResponse:
    if isinstance(e, NoDataError):
        error_type = "no_data"
    elif isinstance(e, ConfigError):
        error_type = "config_error"
    elif isinstance(e, FetchError):
        error_type = "fetch_error"
    elif isinstance(e, PayloadError):
        error_type = "payload_error"
    else:
        error_type = "processing_error"
    return ReportResponse(success=False, error_type=error_type, errors=[str(e)])


@router.post("/aggregate", response_model=ReportResponse)
def aggregate(
    payload: Any = Body(..., description="JSON array of time entries"),
    include_reports: bool = Query(False, description="Include HTML and base64 PNG chart"),
    low_hours: Optional[float] = Query(None, description="Low-hours threshold"),
):
    """Aggregate hours from a posted array of time entries."""
    try:
        settings = ReportSettings.from_env()
        threshold = settings.low_hours_threshold if low_hours is None else low_hours
        entries = parse_entries(payload)
        return _build_report(entries, include_reports, threshold)
    except Exception as e:
        return _error_response(e)


@router.get("/report", response_model=ReportResponse)
def report(
    url: Optional[str] = Query(
        None,
        description="Time entries endpoint; its host must be the configured endpoint's "
                    "or listed in TIMESHEET_ALLOWED_HOSTS",
    ),
    include_reports: bool = Query(False, description="Include HTML and base64 PNG chart"),
    low_hours: Optional[float] = Query(None, description="Low-hours threshold"),
):
    """Fetch time entries from the endpoint and aggregate them."""
    try:
        settings = ReportSettings.from_env()
        threshold = settings.low_hours_threshold if low_hours is None else low_hours
        source = settings.check_fetch_url(url) if url else settings.api_url
        entries = fetch_entries(source, timeout=settings.timeout)
        return _build_report(entries, include_reports, threshold)
    except Exception as e:
        return _error_response(e)
