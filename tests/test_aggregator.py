"""Tests for the hours aggregation engine."""

import logging

import pytest
from datetime import timedelta
from decimal import Decimal

from timesheet_report.engine.aggregator import aggregate_hours, duration_hours
from timesheet_report.models import SkipReason, TimeEntry


def _entry(name, start, end, entry_id=None) -> TimeEntry:
    return TimeEntry(id=entry_id, employee_name=name, start_time_utc=start, end_time_utc=end)


class TestDurationHours:
    def test_positive(self):
        assert duration_hours(timedelta(hours=1, minutes=30)) == Decimal("1.5")

    def test_negative_uses_magnitude(self):
        assert duration_hours(timedelta(minutes=-90)) == Decimal("1.5")

    def test_zero(self):
        assert duration_hours(timedelta(0)) == Decimal("0")


class TestScenarios:
    def test_case_insensitive_merge(self):
        result = aggregate_hours([
            _entry("Bob", "2024-01-01T09:00:00Z", "2024-01-01T17:00:00Z"),
            _entry("bob", "2024-01-02T09:00:00Z", "2024-01-02T13:00:00Z"),
        ])
        assert list(result.items()) == [("Bob", Decimal("12.00"))]

    def test_reversed_range_counts_magnitude(self):
        result = aggregate_hours([
            _entry("Alice", "2024-01-01T11:00:00Z", "2024-01-01T09:00:00Z"),
        ])
        assert result.as_dict() == {"Alice": Decimal("2.00")}

    def test_reversed_equals_swapped(self):
        forward = aggregate_hours([_entry("A", "2024-01-01T08:10:00Z", "2024-01-01T13:55:30Z")])
        backward = aggregate_hours([_entry("A", "2024-01-01T13:55:30Z", "2024-01-01T08:10:00Z")])
        assert forward.as_dict() == backward.as_dict()

    def test_null_start_excluded(self):
        result = aggregate_hours([
            _entry("Alice", None, "2024-01-01T17:00:00Z"),
            _entry("Bob", "2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z"),
        ])
        assert result.as_dict() == {"Bob": Decimal("1.00")}
        assert result.skipped == {SkipReason.INVALID_START: 1}


class TestExclusion:
    @pytest.mark.parametrize("name", [None, "", "   ", 42])
    def test_missing_name(self, name):
        result = aggregate_hours([_entry(name, "2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z")])
        assert result.is_empty
        assert result.skipped == {SkipReason.MISSING_NAME: 1}

    def test_unparseable_end(self):
        result = aggregate_hours([
            _entry("Alice", "2024-01-01T09:00:00Z", "soon"),
            _entry("Alice", "2024-01-01T09:00:00Z", "2024-01-01T12:00:00Z"),
        ])
        assert result.as_dict() == {"Alice": Decimal("3.00")}
        assert result.skipped == {SkipReason.INVALID_END: 1}

    def test_out_of_range_offset_does_not_abort(self):
        result = aggregate_hours([
            _entry("Bob", "2024-01-15T09:00:00+25:00", "2024-01-15T10:00:00Z"),
            _entry("Ann", "2024-01-15T09:00:00Z", "2024-01-15T10:00:00Z"),
        ])
        assert result.as_dict() == {"Ann": Decimal("1.00")}
        assert result.skipped == {SkipReason.INVALID_START: 1}

    def test_time_only_entry_dropped(self):
        result = aggregate_hours([_entry("Bob", "09:00", "17:00")])
        assert result.is_empty
        assert result.skipped == {SkipReason.INVALID_START: 1}

    def test_bad_start_counted_once(self):
        result = aggregate_hours([_entry("Alice", "nope", "also nope")])
        assert result.skipped == {SkipReason.INVALID_START: 1}

    def test_employee_absent_when_all_entries_bad(self):
        result = aggregate_hours([
            _entry("Alice", "", "2024-01-01T12:00:00Z"),
            _entry("Bob", "2024-01-01T09:00:00Z", "2024-01-01T12:00:00Z"),
        ])
        assert "Alice" not in result.as_dict()

    def test_counts(self):
        result = aggregate_hours([
            _entry(None, "2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z"),
            _entry("Alice", None, None),
            _entry("Alice", "2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z"),
        ])
        assert result.entries_received == 3
        assert result.entries_used == 1
        assert result.total_skipped == 2


class TestEmptyInput:
    def test_empty_list(self):
        result = aggregate_hours([])
        assert result.is_empty
        assert result.entries_received == 0

    def test_none(self):
        assert aggregate_hours(None).is_empty

    def test_generator_input(self):
        gen = (_entry("A", "2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z") for _ in range(3))
        assert aggregate_hours(gen).as_dict() == {"A": Decimal("3.00")}


class TestRanking:
    def test_descending(self):
        result = aggregate_hours([
            _entry("Low", "2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z"),
            _entry("High", "2024-01-01T09:00:00Z", "2024-01-01T19:00:00Z"),
            _entry("Mid", "2024-01-01T09:00:00Z", "2024-01-01T14:00:00Z"),
        ])
        assert [e.name for e in result] == ["High", "Mid", "Low"]

    def test_ties_keep_first_seen_order(self):
        entries = [
            _entry("Alice", "2024-01-01T09:00:00Z", "2024-01-01T11:00:00Z"),
            _entry("Bob", "2024-01-01T09:00:00Z", "2024-01-01T11:00:00Z"),
            _entry("Carol", "2024-01-01T09:00:00Z", "2024-01-01T12:00:00Z"),
            _entry("Dave", "2024-01-01T09:00:00Z", "2024-01-01T11:00:00Z"),
        ]
        first = [e.name for e in aggregate_hours(entries)]
        second = [e.name for e in aggregate_hours(entries)]
        assert first == ["Carol", "Alice", "Bob", "Dave"]
        assert first == second

    def test_ranked_on_unrounded_totals(self):
        # both display as 1.00, but Late worked 7 seconds longer
        result = aggregate_hours([
            _entry("Early", "2024-01-01T09:00:00Z", "2024-01-01T10:00:03Z"),
            _entry("Late", "2024-01-01T09:00:00Z", "2024-01-01T10:00:10Z"),
        ])
        assert [e.name for e in result] == ["Late", "Early"]
        assert all(e.total_hours == Decimal("1.00") for e in result)

    def test_first_seen_casing_kept(self):
        result = aggregate_hours([
            _entry(" ALICE ", "2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z"),
            _entry("alice", "2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z"),
        ])
        assert result.as_dict() == {"ALICE": Decimal("2.00")}


class TestRounding:
    def test_half_rounds_up(self):
        # 12h 20m 42s == 12.345h
        result = aggregate_hours([_entry("A", "2024-01-01T00:00:00Z", "2024-01-01T12:20:42Z")])
        assert result.as_dict()["A"] == Decimal("12.35")

    def test_eighth_of_an_hour(self):
        result = aggregate_hours([_entry("A", "2024-01-01T00:00:00Z", "2024-01-01T00:07:30Z")])
        assert result.as_dict()["A"] == Decimal("0.13")

    def test_rounded_after_summing(self):
        # three 20-minute entries are exactly 1h, not 3 x 0.33
        entries = [
            _entry("A", f"2024-01-0{d}T09:00:00Z", f"2024-01-0{d}T09:20:00Z") for d in (1, 2, 3)
        ]
        assert aggregate_hours(entries).as_dict()["A"] == Decimal("1.00")


class TestTimezones:
    def test_mixed_offsets(self):
        result = aggregate_hours([
            _entry("A", "2024-01-01T09:00:00+02:00", "2024-01-01T09:00:00Z"),
        ])
        assert result.as_dict()["A"] == Decimal("2.00")

    def test_naive_and_aware_mix(self):
        result = aggregate_hours([
            _entry("A", "2024-01-01 09:00:00", "2024-01-01T10:30:00Z"),
        ])
        assert result.as_dict()["A"] == Decimal("1.50")


class TestNonNegative:
    def test_all_totals_non_negative(self):
        entries = [
            _entry("A", "2024-01-01T10:00:00Z", "2024-01-01T09:00:00Z"),
            _entry("B", "2024-01-01T09:00:00Z", "2024-01-01T09:00:00Z"),
            _entry("C", "2024-01-03T00:00:00Z", "2024-01-01T00:00:00Z"),
        ]
        for emp in aggregate_hours(entries):
            assert emp.total_hours >= 0


class TestLogging:
    def test_skips_are_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="timesheet_report.engine.aggregator")
        aggregate_hours([_entry("Alice", "bad", "2024-01-01T10:00:00Z", entry_id="x1")])
        assert any("x1" in r.getMessage() for r in caplog.records)
