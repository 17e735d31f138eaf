"""Read-only worksheet grid and A1-style address utilities.

A :class:`Grid` is a sparse mapping of 0-based ``(row, col)`` coordinates to
tagged :data:`~assignment_insights.models.CellValue` instances plus the
declared used range.  Column-letter and range helpers wrap
``openpyxl.utils`` and translate its 1-based results to 0-based indices.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from datetime import date, datetime
from typing import Any

from openpyxl.utils import column_index_from_string, get_column_letter, range_boundaries
from pydantic import BaseModel, Field, model_validator

from assignment_insights.models import (
    EMPTY,
    CellValue,
    DateCell,
    EmptyCell,
    NumberCell,
    TextCell,
    is_blank,
)


# ---------------------------------------------------------------------------
# Address helpers
# ---------------------------------------------------------------------------


def column_letter(index: int) -> str:
    """Return the letter label for a 0-based column index (``0`` -> ``"A"``)."""
    if index < 0:
        raise ValueError(f"Column index must be >= 0, got {index}")
    return get_column_letter(index + 1)


def column_index(letter: str) -> int:
    """Return the 0-based index for a column label (``"AA"`` -> ``26``)."""
    return column_index_from_string(letter.strip().upper()) - 1


class CellRange(BaseModel):
    """Inclusive, 0-based used range of a worksheet."""

    min_row: int = Field(default=0, ge=0)
    max_row: int = Field(default=0, ge=0)
    min_col: int = Field(default=0, ge=0)
    max_col: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> CellRange:
        if self.max_row < self.min_row or self.max_col < self.min_col:
            raise ValueError("CellRange maximums must not be below minimums")
        return self

    @property
    def rows(self) -> range:
        return range(self.min_row, self.max_row + 1)

    @property
    def columns(self) -> range:
        return range(self.min_col, self.max_col + 1)

    @property
    def ref(self) -> str:
        """A1-style reference string, e.g. ``"A1:C10"``."""
        start = f"{column_letter(self.min_col)}{self.min_row + 1}"
        end = f"{column_letter(self.max_col)}{self.max_row + 1}"
        return start if start == end else f"{start}:{end}"


def decode_range(ref: str) -> CellRange:
    """Decode a declared reference such as ``"B2:D40"`` into a :class:`CellRange`.

    Raises:
        ValueError: If *ref* is not a bounded cell reference.
    """
    try:
        min_col, min_row, max_col, max_row = range_boundaries(ref.strip().upper())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid range reference '{ref}'") from exc
    if None in (min_col, min_row, max_col, max_row):
        raise ValueError(f"Range reference '{ref}' must name rows and columns")
    return CellRange(
        min_row=min_row - 1,
        max_row=max_row - 1,
        min_col=min_col - 1,
        max_col=max_col - 1,
    )


# ---------------------------------------------------------------------------
# Cell conversion
# ---------------------------------------------------------------------------


def to_cell_value(raw: Any) -> CellValue:
    """Map a raw value from a spreadsheet reader onto the tagged cell variant."""
    if raw is None:
        return EMPTY
    if isinstance(raw, (EmptyCell, TextCell, NumberCell, DateCell)):
        return raw
    if isinstance(raw, bool):
        return TextCell(value="true" if raw else "false")
    if isinstance(raw, (int, float)):
        return NumberCell(value=float(raw))
    if isinstance(raw, datetime):
        return DateCell(value=raw.date())
    if isinstance(raw, date):
        return DateCell(value=raw)
    text = raw if isinstance(raw, str) else str(raw)
    if not text.strip():
        return EMPTY
    return TextCell(value=text)


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------


class Grid:
    """Sparse, read-only view of one worksheet.

    Parameters
    ----------
    cells:
        Mapping of 0-based ``(row, col)`` to cell values.  Empty cells may be
        omitted; they read back as :class:`EmptyCell`.
    cell_range:
        Declared used range.  When *None* it is derived from the populated
        cells (``A1`` for an empty grid).
    """

    def __init__(
        self,
        cells: Mapping[tuple[int, int], CellValue] | None = None,
        cell_range: CellRange | None = None,
    ) -> None:
        self._cells: dict[tuple[int, int], CellValue] = {
            coord: value
            for coord, value in (cells or {}).items()
            if not is_blank(value)
        }
        if cell_range is None:
            cell_range = self._derive_range()
        self._range = cell_range

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        cell_range: CellRange | None = None,
    ) -> Grid:
        """Build a grid from nested row lists of raw values, anchored at ``A1``."""
        cells: dict[tuple[int, int], CellValue] = {}
        for r, row in enumerate(rows):
            for c, raw in enumerate(row):
                value = to_cell_value(raw)
                if not is_blank(value):
                    cells[(r, c)] = value
        if cell_range is None and rows:
            width = max((len(row) for row in rows), default=0)
            cell_range = CellRange(
                min_row=0,
                max_row=len(rows) - 1,
                min_col=0,
                max_col=max(width - 1, 0),
            )
        return cls(cells, cell_range)

    def _derive_range(self) -> CellRange:
        if not self._cells:
            return CellRange()
        rows = [r for r, _c in self._cells]
        cols = [c for _r, c in self._cells]
        return CellRange(
            min_row=min(rows), max_row=max(rows), min_col=min(cols), max_col=max(cols)
        )

    # -- accessors -----------------------------------------------------------

    @property
    def cell_range(self) -> CellRange:
        return self._range

    def cell(self, row: int, col: int) -> CellValue:
        return self._cells.get((row, col), EMPTY)

    def row_values(self, row: int) -> list[CellValue]:
        """All cells of *row* across the used column range."""
        return [self.cell(row, col) for col in self._range.columns]

    def row_is_empty(self, row: int) -> bool:
        return all(is_blank(value) for value in self.row_values(row))

    def iter_cells(self, rows: range) -> Iterator[tuple[int, int, CellValue]]:
        """Yield ``(row, col, value)`` for *rows*, left to right, top to bottom."""
        for row in rows:
            for col in self._range.columns:
                yield row, col, self.cell(row, col)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Grid(range={self._range.ref!r}, populated={len(self._cells)})"
