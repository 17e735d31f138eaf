"""Tests for result assembly and the summary line."""

from __future__ import annotations

from datetime import date

import pytest

from assignment_insights.errors import ErrorCode
from assignment_insights.models import ColumnRef, ColumnsUsed, RowTally
from assignment_insights.results import build_result, format_pct, percentage

COLUMNS = ColumnsUsed(
    action=ColumnRef(index=0, letter="A"),
    due_date=ColumnRef(index=1, letter="B"),
)


class TestPercentage:
    """One-decimal, half-up percentages."""

    @pytest.mark.parametrize(
        "part, whole, expected",
        [
            (1, 2, 50.0),
            (2, 2, 100.0),
            (0, 5, 0.0),
            (1, 3, 33.3),
            (2, 3, 66.7),
            (1, 16, 6.3),
            (1, 8, 12.5),
            (1, 40, 2.5),
        ],
    )
    def test_values(self, part, whole, expected):
        assert percentage(part, whole) == expected

    def test_zero_denominator(self):
        assert percentage(0, 0) == 0.0


class TestFormatPct:
    def test_integral(self):
        assert format_pct(50.0) == "50"
        assert format_pct(0.0) == "0"
        assert format_pct(100.0) == "100"

    def test_fractional(self):
        assert format_pct(33.3) == "33.3"


class TestBuildResult:
    """AnalysisResult and summary assembly."""

    def test_basic(self):
        tally = RowTally(total_rows=2, assigned_count=1, overdue_count=1)
        outcome = build_result(tally, COLUMNS, date(2025, 1, 1), "Asia/Kolkata")
        result = outcome.result
        assert result.assigned_pct == 50.0
        assert result.overdue_pct_of_assigned == 100.0
        assert result.today_iso == "2025-01-01"
        assert result.timezone == "Asia/Kolkata"
        assert result.columns_used == COLUMNS
        assert outcome.summary == (
            "Total: 2 | Assigned: 1 (50%) | Overdue: 1 (100%)"
        )

    def test_zero_rows(self):
        tally = RowTally()
        tally.add_note(ErrorCode.W_NO_DATA_ROWS, "No data rows found in the Excel file")
        outcome = build_result(tally, COLUMNS, date(2025, 1, 1), "UTC", sheet_name="Sheet1")
        assert outcome.result.assigned_pct == 0.0
        assert outcome.result.overdue_pct_of_assigned == 0.0
        assert outcome.result.notes == ["No data rows found in the Excel file"]
        assert outcome.result.warnings == [ErrorCode.W_NO_DATA_ROWS]
        assert outcome.result.sheet_name == "Sheet1"
        assert outcome.summary == "Total: 0 | Assigned: 0 (0%) | Overdue: 0 (0%)"

    def test_fractional_summary(self):
        tally = RowTally(total_rows=3, assigned_count=1, overdue_count=0)
        outcome = build_result(tally, COLUMNS, date(2025, 1, 1), "UTC")
        assert outcome.summary == "Total: 3 | Assigned: 1 (33.3%) | Overdue: 0 (0%)"

    def test_notes_copied(self):
        tally = RowTally(total_rows=1, assigned_count=1)
        tally.add_note(ErrorCode.W_DUE_DATE_COLUMN_EMPTY, "n")
        outcome = build_result(tally, COLUMNS, date(2025, 1, 1), "UTC")
        tally.notes.append("later")
        assert outcome.result.notes == ["n"]
