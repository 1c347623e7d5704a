"""Layer 3 — Hours Aggregation Engine.

Sums worked time per employee and ranks employees by total hours.

Rules:
- Entries with a blank/missing employee name are dropped.
- Entries whose start or end timestamp is missing or unparseable are dropped.
- Reversed ranges (end before start) count by their magnitude.
- Employee names are grouped case-insensitively; the first-seen spelling is kept.
- Ranking is by descending unrounded total; ties keep first-seen order.
- Totals are rounded to 2 decimals with ROUND_HALF_UP.

Dropped entries never raise; they are counted per SkipReason instead.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import timedelta
from decimal import Decimal
from typing import Iterable, Optional

from timesheet_report.models import (
    AggregatedHours,
    EmployeeHours,
    SkipReason,
    TimeEntry,
    round_hours,
)
from timesheet_report.parsers.date_parser import parse_timestamp

logger = logging.getLogger(__name__)

_MICROSECONDS_PER_HOUR = Decimal(3600 * 1_000_000)


def duration_hours(duration: timedelta) -> Decimal:
    """Convert a duration into fractional hours, never negative."""
    micros = abs(duration) // timedelta(microseconds=1)
    hours = Decimal(micros) / _MICROSECONDS_PER_HOUR
    return max(hours, Decimal("0"))


def _employee_name(entry: TimeEntry) -> Optional[str]:
    name = entry.employee_name
    if not isinstance(name, str) or not name.strip():
        return None
    return name.strip()


def aggregate_hours(entries: Optional[Iterable[TimeEntry]]) -> AggregatedHours:
    """Aggregate total hours per employee, ranked by descending total."""
    # casefolded name -> [display name, accumulated duration]
    totals: dict[str, list] = {}
    skipped: Counter[SkipReason] = Counter()
    received = 0

    for entry in entries or ():
        received += 1

        name = _employee_name(entry)
        if name is None:
            skipped[SkipReason.MISSING_NAME] += 1
            logger.debug("Skipping entry %r: missing employee name", entry.id)
            continue

        start = parse_timestamp(entry.start_time_utc)
        if start is None:
            skipped[SkipReason.INVALID_START] += 1
            logger.debug(
                "Skipping entry %r for %s: bad start %r", entry.id, name, entry.start_time_utc
            )
            continue

        end = parse_timestamp(entry.end_time_utc)
        if end is None:
            skipped[SkipReason.INVALID_END] += 1
            logger.debug(
                "Skipping entry %r for %s: bad end %r", entry.id, name, entry.end_time_utc
            )
            continue

        key = name.casefold()
        if key not in totals:
            totals[key] = [name, timedelta(0)]
        totals[key][1] += abs(end - start)

    ranked = sorted(
        ((display, duration_hours(total)) for display, total in totals.values()),
        key=lambda pair: pair[1],
        reverse=True,
    )

    result = AggregatedHours(
        employees=[EmployeeHours(name=n, total_hours=round_hours(h)) for n, h in ranked],
        entries_received=received,
        entries_used=received - sum(skipped.values()),
        skipped=dict(skipped),
    )

    logger.info(
        "Aggregated %d entries into %d employees (%d skipped)",
        received, len(result), result.total_skipped,
    )
    return result
