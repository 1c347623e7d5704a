"""Aggregation engine."""
from timesheet_report.engine.aggregator import aggregate_hours, duration_hours

__all__ = ["aggregate_hours", "duration_hours"]
