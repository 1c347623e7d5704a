"""Payload and timestamp parsing layer."""
from timesheet_report.parsers.date_parser import parse_timestamp
from timesheet_report.parsers.entry_parser import parse_entries, parse_entry

__all__ = ["parse_timestamp", "parse_entries", "parse_entry"]
