"""Tests for due-date parsing and the reference date."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from assignment_insights.dates import (
    parse_date_text,
    parse_due_date,
    reference_date,
    serial_to_date,
)
from assignment_insights.models import EMPTY, DateCell, NumberCell, TextCell


class TestSerialToDate:
    """1900 date-system serials."""

    def test_serial_two_is_epoch(self):
        assert serial_to_date(2) == date(1900, 1, 1)

    def test_modern_serial(self):
        # 45292 is 2024-01-01 in spreadsheet applications.
        assert serial_to_date(45292) == date(2024, 1, 1)

    def test_fraction_truncated(self):
        assert serial_to_date(45292.99) == date(2024, 1, 1)

    def test_serial_below_offset(self):
        assert serial_to_date(0) == date(1899, 12, 30)

    @pytest.mark.parametrize("value", [-1.0, float("nan"), float("inf"), 1e12])
    def test_out_of_range(self, value):
        assert serial_to_date(value) is None


class TestParseDateText:
    """Free-form text dates."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2024-01-15", date(2024, 1, 15)),
            ("2024/1/5", date(2024, 1, 5)),
            ("2024-01-15T10:30:00", date(2024, 1, 15)),
            ("2024-01-15 10:30", date(2024, 1, 15)),
            ("3/4/2024", date(2024, 3, 4)),
            ("12/31/2024", date(2024, 12, 31)),
            ("3-4-2024", date(2024, 4, 3)),
            ("31-12-2024", date(2024, 12, 31)),
            ("3.4.2024", date(2024, 4, 3)),
            ("  2024-06-01  ", date(2024, 6, 1)),
        ],
    )
    def test_numeric_layouts(self, text, expected):
        assert parse_date_text(text) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("15 Jan 2024", date(2024, 1, 15)),
            ("January 15, 2024", date(2024, 1, 15)),
            ("Mar 3 2025", date(2025, 3, 3)),
        ],
    )
    def test_named_months(self, text, expected):
        assert parse_date_text(text) == expected

    @pytest.mark.parametrize("text", ["13/13/2024", "31-02-2024", "2024-02-30", "30.02.2024"])
    def test_impossible_dates_unparseable(self, text):
        assert parse_date_text(text) is None

    @pytest.mark.parametrize("text", ["", "   ", "not-a-date", "ASAP", "next week"])
    def test_text_without_date(self, text):
        assert parse_date_text(text) is None

    def test_garbage_with_digits(self):
        assert parse_date_text("item 12 of 99 of 400") is None

    @pytest.mark.parametrize("text", ["Jan 5", "3pm", "12:00", "-1", "1.5", "4th", "2024", "March 2024"])
    def test_partial_or_time_only_text_unparseable(self, text):
        assert parse_date_text(text) is None


class TestParseDueDate:
    """Dispatch over the cell variant."""

    def test_empty(self):
        assert parse_due_date(EMPTY) is None

    def test_native_date_unchanged(self):
        assert parse_due_date(DateCell(value=date(2024, 2, 29))) == date(2024, 2, 29)

    def test_number_serial(self):
        assert parse_due_date(NumberCell(value=2)) == date(1900, 1, 1)

    def test_text(self):
        assert parse_due_date(TextCell(value="2024-01-01")) == date(2024, 1, 1)

    def test_unparseable_text(self):
        assert parse_due_date(TextCell(value="not-a-date")) is None

    def test_negative_number(self):
        assert parse_due_date(NumberCell(value=-5)) is None


class TestReferenceDate:
    """Today in a named timezone."""

    def test_kolkata_ahead_of_utc(self):
        clock = lambda: datetime(2024, 12, 31, 19, 0, tzinfo=timezone.utc)
        assert reference_date("Asia/Kolkata", clock) == date(2025, 1, 1)
        assert reference_date("UTC", clock) == date(2024, 12, 31)

    def test_naive_instant_taken_as_utc(self):
        clock = lambda: datetime(2024, 12, 31, 19, 0)
        assert reference_date("Asia/Kolkata", clock) == date(2025, 1, 1)

    def test_aware_instant_in_other_zone(self):
        tz = timezone(timedelta(hours=-8))
        clock = lambda: datetime(2024, 6, 30, 20, 0, tzinfo=tz)
        assert reference_date("UTC", clock) == date(2024, 7, 1)

    def test_fixed_clock_fixture(self, fixed_clock, today):
        assert reference_date("Asia/Kolkata", fixed_clock) == today

    def test_default_clock(self):
        assert isinstance(reference_date("UTC"), date)

    def test_unknown_zone(self):
        with pytest.raises(ValueError, match="Unknown timezone"):
            reference_date("Nowhere/Special")
