"""Layer 1 — Time entry payload parser.

Upstream payload: a JSON array of objects such as

    {"Id": "...", "EmployeeName": "...", "StarTimeUtc": "...",
     "EndTimeUtc": "...", "EntryNotes": "..."}

Field names are matched case-insensitively. The upstream service spells the
start field "StarTimeUtc"; "StartTimeUtc" is accepted as well.
"""

from __future__ import annotations

import logging
from typing import Any

from timesheet_report.models import PayloadError, TimeEntry

logger = logging.getLogger(__name__)

# lower-cased payload key -> TimeEntry field
FIELD_ALIASES: dict[str, str] = {
    "id": "id",
    "employeename": "employee_name",
    "employee_name": "employee_name",
    "starttimeutc": "start_time_utc",
    "startimeutc": "start_time_utc",
    "start_time_utc": "start_time_utc",
    "endtimeutc": "end_time_utc",
    "end_time_utc": "end_time_utc",
    "entrynotes": "notes",
    "notes": "notes",
}


def parse_entry(record: dict[str, Any]) -> TimeEntry:
    """Build a TimeEntry from one payload object."""
    values: dict[str, Any] = {}
    for key, value in record.items():
        field_name = FIELD_ALIASES.get(str(key).strip().lower())
        if field_name is None:
            continue
        # first match wins when a payload repeats a field under two casings
        values.setdefault(field_name, value)
    return TimeEntry(**values)


def parse_entries(payload: Any) -> list[TimeEntry]:
    """Convert a decoded JSON payload into TimeEntry records.

    A null payload yields no entries. Anything other than an array of
    objects raises PayloadError.
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise PayloadError(
            f"Expected a JSON array of time entries, got {type(payload).__name__}"
        )

    entries: list[TimeEntry] = []
    for idx, record in enumerate(payload):
        if not isinstance(record, dict):
            raise PayloadError(
                f"Entry #{idx} is not a JSON object (got {type(record).__name__})"
            )
        entries.append(parse_entry(record))

    logger.debug("Parsed %d time entries from payload", len(entries))
    return entries
