"""Header scanning that picks the action and due-date columns.

Each role has an ordered keyword table.  The header candidate rows are read
top to bottom, left to right; the first cell whose lower-cased text contains
any keyword of a role fixes that role's column.  Roles are matched
independently, so one header can satisfy both.  Unmatched roles fall back to
columns ``A`` (action) and ``B`` (due date).
"""

from __future__ import annotations

from assignment_insights.grid import Grid, column_letter
from assignment_insights.models import ColumnRef, ColumnsUsed, cell_text, is_blank

ACTION_KEYWORDS: tuple[str, ...] = ("action", "assigned", "status", "task")
DUE_DATE_KEYWORDS: tuple[str, ...] = ("due", "date", "deadline", "target")

DEFAULT_ACTION_COLUMN = 0
DEFAULT_DUE_DATE_COLUMN = 1

DEFAULT_HEADER_SCAN_DEPTH = 5


def match_role(header_text: str, keywords: tuple[str, ...]) -> str | None:
    """Return the first keyword in *keywords* contained in *header_text*."""
    lowered = header_text.strip().lower()
    if not lowered:
        return None
    for keyword in keywords:
        if keyword in lowered:
            return keyword
    return None


def _column_ref(index: int) -> ColumnRef:
    return ColumnRef(index=index, letter=column_letter(index))


def locate_columns(
    grid: Grid, header_scan_depth: int = DEFAULT_HEADER_SCAN_DEPTH
) -> ColumnsUsed:
    """Resolve the action and due-date columns of *grid*.

    Scans rows ``0`` through ``min(header_scan_depth, last used row)``.
    Never raises; a sheet with no recognizable headers gets the defaults.
    """
    last_row = min(header_scan_depth, grid.cell_range.max_row)
    action: int | None = None
    due_date: int | None = None

    for _row, col, value in grid.iter_cells(range(0, last_row + 1)):
        if action is not None and due_date is not None:
            break
        if is_blank(value):
            continue
        text = cell_text(value)
        if action is None and match_role(text, ACTION_KEYWORDS):
            action = col
        if due_date is None and match_role(text, DUE_DATE_KEYWORDS):
            due_date = col

    return ColumnsUsed(
        action=_column_ref(DEFAULT_ACTION_COLUMN if action is None else action),
        due_date=_column_ref(DEFAULT_DUE_DATE_COLUMN if due_date is None else due_date),
    )
