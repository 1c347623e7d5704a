"""Upstream time entry source: HTTP endpoint or local JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import httpx

from timesheet_report.config import DEFAULT_TIMEOUT
from timesheet_report.models import FetchError, PayloadError, TimeEntry
from timesheet_report.parsers.entry_parser import parse_entries

logger = logging.getLogger(__name__)


def fetch_entries(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.BaseTransport] = None,
) -> list[TimeEntry]:
    """GET the endpoint and decode its JSON array into TimeEntry records."""
    logger.info("Fetching time entries from %s", url)
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(
            f"Endpoint returned HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise FetchError(f"Request failed: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise FetchError(f"Endpoint did not return valid JSON: {e}") from e

    return parse_entries(payload)


def load_entries_file(path: str | Path) -> list[TimeEntry]:
    """Read time entries from a local JSON file in the upstream format."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PayloadError(f"{path.name} is not valid JSON: {e}") from e
    return parse_entries(payload)
