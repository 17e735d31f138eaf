"""Row aggregation: counts assigned and overdue records of a grid.

The header region is the first ``header_rows`` rows of the used range; every
later row with at least one populated cell is a data row.  Data-quality
problems that do not stop the analysis are recorded as notes on the
returned :class:`~assignment_insights.models.RowTally`.
"""

from __future__ import annotations

from datetime import date

from assignment_insights.classifier import is_assigned
from assignment_insights.dates import parse_due_date
from assignment_insights.errors import ErrorCode, MissingRequiredColumn
from assignment_insights.grid import Grid
from assignment_insights.models import ColumnsUsed, RowTally, is_blank

NOTE_DUE_DATE_MISSING = (
    "Due Date column is missing or empty - only computing assigned percentage"
)
NOTE_DUE_DATE_UNPARSEABLE = (
    "Some due dates could not be parsed - they are excluded from overdue calculation"
)
NOTE_NO_DATA_ROWS = "No data rows found in the Excel file"


def data_rows(grid: Grid, header_rows: int = 1) -> list[int]:
    """Indices of the non-empty rows that follow the header region."""
    cell_range = grid.cell_range
    first = cell_range.min_row + header_rows
    return [row for row in range(first, cell_range.max_row + 1) if not grid.row_is_empty(row)]


def _column_has_data(grid: Grid, rows: list[int], col: int) -> bool:
    return any(not is_blank(grid.cell(row, col)) for row in rows)


def aggregate_rows(
    grid: Grid,
    columns: ColumnsUsed,
    today: date,
    header_rows: int = 1,
) -> RowTally:
    """Count data rows, assigned rows, and overdue assigned rows.

    A row is overdue when it is assigned and its due date parses to a day
    strictly before *today*.

    Raises:
        MissingRequiredColumn: If data rows exist but none holds a value in
            the action column.
    """
    rows = data_rows(grid, header_rows)
    tally = RowTally(total_rows=len(rows))

    if not rows:
        tally.add_note(ErrorCode.W_NO_DATA_ROWS, NOTE_NO_DATA_ROWS)
        return tally

    action_col = columns.action.index
    due_col = columns.due_date.index

    if not _column_has_data(grid, rows, action_col):
        raise MissingRequiredColumn(
            code=ErrorCode.E_ACTION_COLUMN_EMPTY,
            message=(
                f"Action column {columns.action.letter} is missing or empty"
            ),
            stage="aggregate",
        )

    has_due_dates = _column_has_data(grid, rows, due_col)
    if not has_due_dates:
        tally.add_note(ErrorCode.W_DUE_DATE_COLUMN_EMPTY, NOTE_DUE_DATE_MISSING)

    for row in rows:
        if not is_assigned(grid.cell(row, action_col)):
            continue
        tally.assigned_count += 1

        if not has_due_dates:
            continue
        raw_due = grid.cell(row, due_col)
        due = parse_due_date(raw_due)
        if due is not None:
            if due < today:
                tally.overdue_count += 1
        elif not is_blank(raw_due):
            tally.add_note(ErrorCode.W_DUE_DATE_UNPARSEABLE, NOTE_DUE_DATE_UNPARSEABLE)

    return tally
