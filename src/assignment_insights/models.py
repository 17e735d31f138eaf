"""Pydantic data models for assignment-insights.

Defines the tagged cell-value variant read from a worksheet, the resolved
column references, the aggregator's intermediate tally, and the final
``AnalysisResult`` / ``AnalysisOutcome`` returned to callers.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from assignment_insights.errors import ErrorCode


# ---------------------------------------------------------------------------
# Cell values
# ---------------------------------------------------------------------------


class EmptyCell(BaseModel):
    """An absent cell, ``None``, or whitespace-only text."""

    kind: Literal["empty"] = "empty"


class TextCell(BaseModel):
    """A non-empty string cell (booleans are stored as ``"true"``/``"false"``)."""

    kind: Literal["text"] = "text"
    value: str


class NumberCell(BaseModel):
    """A numeric cell; may be a spreadsheet date serial."""

    kind: Literal["number"] = "number"
    value: float


class DateCell(BaseModel):
    """A native date or datetime cell, reduced to its calendar day."""

    kind: Literal["date"] = "date"
    value: date


CellValue = Annotated[
    Union[EmptyCell, TextCell, NumberCell, DateCell],
    Field(discriminator="kind"),
]

EMPTY = EmptyCell()


def format_number(value: float) -> str:
    """Render a number the way a spreadsheet displays it (``30.0`` -> ``"30"``)."""
    if value.is_integer():
        return str(int(value))
    return str(value)


def cell_text(cell: EmptyCell | TextCell | NumberCell | DateCell) -> str:
    """Return the text form of *cell*; empty cells give ``""``."""
    if isinstance(cell, TextCell):
        return cell.value
    if isinstance(cell, NumberCell):
        return format_number(cell.value)
    if isinstance(cell, DateCell):
        return cell.value.isoformat()
    return ""


def is_blank(cell: EmptyCell | TextCell | NumberCell | DateCell) -> bool:
    return isinstance(cell, EmptyCell)


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


class ColumnRef(BaseModel):
    """A resolved worksheet column: 0-based index plus its letter label."""

    index: int = Field(ge=0)
    letter: str


class ColumnsUsed(BaseModel):
    """The two role columns chosen for one analysis."""

    action: ColumnRef
    due_date: ColumnRef


# ---------------------------------------------------------------------------
# Aggregation and results
# ---------------------------------------------------------------------------


class RowTally(BaseModel):
    """Typed output of the row-aggregation stage."""

    total_rows: int = 0
    assigned_count: int = 0
    overdue_count: int = 0
    notes: list[str] = []
    warnings: list[ErrorCode] = []

    def add_note(self, code: ErrorCode, message: str) -> None:
        """Record a diagnostic once, keeping detection order."""
        if message in self.notes:
            return
        self.notes.append(message)
        self.warnings.append(code)


class AnalysisResult(BaseModel):
    """Assigned / overdue statistics for one worksheet."""

    total_rows: int = Field(ge=0)
    assigned_count: int = Field(ge=0)
    assigned_pct: float = Field(ge=0.0, le=100.0)
    overdue_count: int = Field(ge=0)
    overdue_pct_of_assigned: float = Field(ge=0.0, le=100.0)
    today_iso: str
    timezone: str
    columns_used: ColumnsUsed
    notes: list[str] = []
    warnings: list[ErrorCode] = []
    sheet_name: str | None = None


class AnalysisOutcome(BaseModel):
    """What the analyzer returns: the result record and its one-line summary."""

    result: AnalysisResult
    summary: str
