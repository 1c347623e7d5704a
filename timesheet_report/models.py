"""Layer 2 — Canonical Data Model for the time report system."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Iterator, Optional

HOURS_QUANTUM = Decimal("0.01")
ROUNDING_MODE = ROUND_HALF_UP


def round_hours(value: Decimal) -> Decimal:
    """Round an hour total to 2 decimal places (half away from zero)."""
    return value.quantize(HOURS_QUANTUM, ROUNDING_MODE)


class SkipReason(Enum):
    MISSING_NAME = "missing_name"
    INVALID_START = "invalid_start"
    INVALID_END = "invalid_end"


@dataclass(frozen=True)
class TimeEntry:
    """Single raw time entry as received from the upstream endpoint."""
    id: Optional[Any] = None
    employee_name: Optional[Any] = None
    start_time_utc: Optional[Any] = None
    end_time_utc: Optional[Any] = None
    notes: Optional[Any] = None


@dataclass(frozen=True)
class EmployeeHours:
    """Rounded total hours for one employee."""
    name: str
    total_hours: Decimal

    def __post_init__(self) -> None:
        if self.total_hours < 0:
            raise ValueError(f"total_hours must be non-negative, got {self.total_hours}")


@dataclass
class AggregatedHours:
    """Employees ranked by total hours, plus bookkeeping on dropped entries."""
    employees: list[EmployeeHours] = field(default_factory=list)
    entries_received: int = 0
    entries_used: int = 0
    skipped: dict[SkipReason, int] = field(default_factory=dict)

    def __iter__(self) -> Iterator[EmployeeHours]:
        return iter(self.employees)

    def __len__(self) -> int:
        return len(self.employees)

    def items(self) -> Iterator[tuple[str, Decimal]]:
        for emp in self.employees:
            yield emp.name, emp.total_hours

    def as_dict(self) -> dict[str, Decimal]:
        return dict(self.items())

    @property
    def is_empty(self) -> bool:
        return not self.employees

    @property
    def total_skipped(self) -> int:
        return sum(self.skipped.values())

    @property
    def grand_total(self) -> Decimal:
        return sum((e.total_hours for e in self.employees), Decimal("0"))


class ReportError(Exception):
    """Base class for errors raised outside the aggregation core."""


class FetchError(ReportError):
    """Raised when the upstream endpoint cannot be read."""


class PayloadError(ReportError):
    """Raised when the upstream payload has the wrong shape."""


class NoDataError(ReportError):
    """Raised when there is nothing to report on."""


class ChartError(ReportError):
    """Raised when the pie chart cannot be drawn."""


class ConfigError(ReportError, ValueError):
    """Raised when a configuration value is invalid."""
