"""Tests for header scanning in assignment_insights.columns."""

from __future__ import annotations

from assignment_insights.columns import (
    ACTION_KEYWORDS,
    DUE_DATE_KEYWORDS,
    locate_columns,
    match_role,
)
from assignment_insights.grid import Grid, decode_range
from assignment_insights.models import NumberCell, TextCell


class TestMatchRole:
    """Keyword containment on lower-cased header text."""

    def test_substring_case_insensitive(self):
        assert match_role("Task Status", ACTION_KEYWORDS) == "status"
        assert match_role("DEADLINE", DUE_DATE_KEYWORDS) == "date"

    def test_keyword_order_decides(self):
        # "due" precedes "date" in the table.
        assert match_role("Due Date", DUE_DATE_KEYWORDS) == "due"

    def test_no_match(self):
        assert match_role("Owner", ACTION_KEYWORDS) is None

    def test_blank_text(self):
        assert match_role("   ", ACTION_KEYWORDS) is None


class TestLocateColumns:
    """Column resolution over the header candidate rows."""

    def test_simple_header(self, make_grid):
        cols = locate_columns(make_grid([["Action", "Due Date"]]))
        assert (cols.action.index, cols.action.letter) == (0, "A")
        assert (cols.due_date.index, cols.due_date.letter) == (1, "B")

    def test_keywords_in_other_columns(self, make_grid):
        cols = locate_columns(make_grid([["Name", "Target", "Task Status"]]))
        assert cols.action.letter == "C"
        assert cols.due_date.letter == "B"

    def test_defaults_when_nothing_matches(self, make_grid):
        cols = locate_columns(make_grid([["Foo", "Bar"]]))
        assert cols.action.index == 0
        assert cols.due_date.index == 1

    def test_one_header_can_fill_both_roles(self, make_grid):
        cols = locate_columns(make_grid([["Assigned date", "Other"]]))
        assert cols.action.index == 0
        assert cols.due_date.index == 0

    def test_first_match_wins_top_to_bottom(self, make_grid):
        grid = make_grid([["", "", ""], ["", "Status", ""], ["Action", "", "Due"]])
        cols = locate_columns(grid)
        assert cols.action.letter == "B"
        assert cols.due_date.letter == "C"

    def test_first_match_wins_left_to_right(self, make_grid):
        cols = locate_columns(make_grid([["Due", "Deadline"]]))
        assert cols.due_date.index == 0

    def test_rows_beyond_scan_depth_ignored(self, make_grid):
        rows = [["x", "y", "z"] for _ in range(6)] + [["", "", "Action"]]
        cols = locate_columns(make_grid(rows))
        assert cols.action.index == 0

    def test_scan_depth_is_inclusive(self, make_grid):
        rows = [["x", "y", "z"] for _ in range(5)] + [["", "", "Action"]]
        cols = locate_columns(make_grid(rows), header_scan_depth=5)
        assert cols.action.letter == "C"

    def test_custom_scan_depth(self, make_grid):
        rows = [["x", "y"], ["Status", "Due"]]
        cols = locate_columns(make_grid(rows), header_scan_depth=0)
        assert cols.action.index == 0
        assert cols.due_date.index == 1

    def test_numeric_header_does_not_match(self, make_grid):
        cols = locate_columns(make_grid([[2024, "Task"]]))
        assert cols.action.letter == "B"

    def test_offset_used_range_reports_absolute_letter(self):
        grid = Grid(
            {
                (0, 3): TextCell(value="Action"),
                (0, 4): TextCell(value="Due"),
                (1, 3): TextCell(value="Yes"),
                (1, 4): NumberCell(value=45000),
            },
            decode_range("D1:E2"),
        )
        cols = locate_columns(grid)
        assert cols.action.letter == "D"
        assert cols.due_date.letter == "E"

    def test_empty_grid_gets_defaults(self):
        cols = locate_columns(Grid())
        assert cols.action.letter == "A"
        assert cols.due_date.letter == "B"
