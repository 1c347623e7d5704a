"""Pydantic request/response models for the Time Report API."""

from __future__ import annotations

from pydantic import BaseModel


class EmployeeSummary(BaseModel):
    rank: int
    name: str
    total_hours: float
    share_pct: float
    low: bool


class SkippedCounts(BaseModel):
    missing_name: int = 0
    invalid_start: int = 0
    invalid_end: int = 0


class HoursSummary(BaseModel):
    total_employees: int
    grand_total_hours: float
    entries_received: int
    entries_used: int
    skipped: SkippedCounts


class ReportResponse(BaseModel):
    success: bool
    summary: HoursSummary | None = None
    employees: list[EmployeeSummary] | None = None
    html: str | None = None
    chart_base64: str | None = None
    error_type: str | None = None
    errors: list[str] | None = None
