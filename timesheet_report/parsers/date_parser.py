"""Layer 1 — Timestamp parser.

Turns the loosely formatted timestamps found in upstream time entries into
timezone-aware UTC datetimes. Values without an offset are taken as UTC.

A timestamp must carry a full calendar date: year, month and day. Inputs that
leave any of them out (e.g. "10:00", "-1", "March 5") are rejected instead of
being completed from today's date. POSIX-style zone names with an offset
("UTC+5", "GMT-3") are rejected too, since dateutil reads their sign inverted.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

# two defaults that differ in every date field; a field taken from the
# default shows up as a mismatch between the two parses
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)

_POSIX_OFFSET_RE = re.compile(r"\b(?:UTC|GMT)\s*[+-]\s*\d", re.IGNORECASE)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamp string into a UTC datetime.

    Returns None for None, blank, non-string, partial-date or unparseable
    input; never raises.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if _POSIX_OFFSET_RE.search(text):
        return None

    try:
        parsed = date_parser.parse(text, dayfirst=False, default=_DEFAULT_A)
        check = date_parser.parse(text, dayfirst=False, default=_DEFAULT_B)
        if parsed.date() != check.date():
            return None

        if parsed.tzinfo is None or parsed.utcoffset() is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # unparseable, or an offset of a day or more / out of datetime's range
        return None
