"""Layer 6 — Audit Engine.

Generates a JSON trace of one aggregation run, including how many entries
were dropped and why.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from timesheet_report.models import AggregatedHours, SkipReason, round_hours
from timesheet_report.reports.formatting import share_percent


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal values."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return super().default(obj)


def generate_audit_dict(hours: AggregatedHours, source: str) -> dict:
    """Build audit dictionary from an aggregation result (no file I/O)."""
    total = hours.grand_total
    return {
        "source": source,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "rounding": "ROUND_HALF_UP",
        "entries_received": hours.entries_received,
        "entries_used": hours.entries_used,
        "skipped": {
            reason.value: hours.skipped.get(reason, 0)
            for reason in SkipReason
        },
        "employees": [
            {
                "rank": rank,
                "name": emp.name,
                "total_hours": float(emp.total_hours),
                "share_pct": float(round_hours(share_percent(emp.total_hours, total))),
            }
            for rank, emp in enumerate(hours, start=1)
        ],
        "summary": {
            "total_employees": len(hours),
            "grand_total_hours": float(total),
        },
    }


def generate_audit(hours: AggregatedHours, source: str, output_path: str | Path) -> Path:
    """Generate audit JSON file from an aggregation result."""
    output_path = Path(output_path)
    audit = generate_audit_dict(hours, source)
    output_path.write_text(json.dumps(audit, indent=2, cls=DecimalEncoder), encoding='utf-8')
    return output_path
