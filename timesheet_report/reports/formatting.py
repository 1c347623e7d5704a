"""Number formatting shared by the report renderers."""

from __future__ import annotations

from decimal import Decimal

from timesheet_report.models import round_hours


def format_hours(value: Decimal | float) -> str:
    """Up to 2 decimals, no trailing zeros: 12 -> "12", 12.50 -> "12.5"."""
    text = f"{round_hours(Decimal(str(value))):.2f}"
    return text.rstrip("0").rstrip(".")


def share_percent(value: Decimal, total: Decimal) -> Decimal:
    """Percentage of total; a non-positive total is treated as 1."""
    if total <= 0:
        total = Decimal("1")
    return value / total * 100
