"""Workbook loading: raw bytes to a :class:`~assignment_insights.grid.Grid`.

``.xlsx`` / ``.xlsm`` files are read with openpyxl (cached formula values,
``data_only=True``).  Legacy ``.xls`` files are read with xlrd, an optional
dependency.  Only one sheet is loaded per call; the first sheet is the
default.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any

import openpyxl
from openpyxl.worksheet.worksheet import Worksheet

from assignment_insights.errors import ErrorCode, SourceUnavailable
from assignment_insights.grid import Grid, decode_range, to_cell_value
from assignment_insights.models import CellValue, EmptyCell
from assignment_insights.security import CONTAINER_OLE2, CONTAINER_OOXML, detect_container

logger = logging.getLogger("assignment_insights")

# Import guard: xlrd is an optional dependency
try:
    import xlrd  # type: ignore[import-untyped]
except ImportError:
    xlrd = None  # type: ignore[assignment]


@dataclass
class LoadedSheet:
    """One decoded worksheet."""

    sheet_name: str
    grid: Grid


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sheet_names(data: bytes) -> list[str]:
    """Return the sheet names of the workbook in *data*, in workbook order.

    Raises:
        SourceUnavailable: If *data* cannot be decoded as a workbook.
    """
    container = _require_container(data)
    if container == CONTAINER_OLE2:
        return list(_open_xls(data).sheet_names())

    wb = _open_xlsx(data)
    try:
        return list(wb.sheetnames)
    finally:
        wb.close()


def load_grid(data: bytes, sheet_name: str | None = None) -> LoadedSheet:
    """Decode one sheet of the workbook in *data* into a :class:`Grid`.

    Parameters
    ----------
    data:
        Complete workbook bytes.
    sheet_name:
        Sheet to load.  Defaults to the first sheet.

    Raises
    ------
    SourceUnavailable
        If *data* is not a readable workbook or the sheet does not exist.
    """
    container = _require_container(data)
    if container == CONTAINER_OLE2:
        return _load_xls(data, sheet_name)
    return _load_xlsx(data, sheet_name)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_container(data: bytes) -> str:
    container = detect_container(data)
    if container is None:
        raise SourceUnavailable(
            code=ErrorCode.E_SOURCE_UNSUPPORTED,
            message="Data is not an .xlsx or .xls workbook",
            stage="load",
        )
    return container


def _sheet_not_found(sheet_name: str | None, available: list[str]) -> SourceUnavailable:
    if sheet_name is None:
        message = "No worksheet found in the Excel file"
    else:
        message = f"Sheet '{sheet_name}' not found; available: {available}"
    return SourceUnavailable(
        code=ErrorCode.E_SHEET_NOT_FOUND,
        message=message,
        stage="load",
    )


def _open_xlsx(data: bytes) -> openpyxl.Workbook:
    try:
        return openpyxl.load_workbook(io.BytesIO(data), data_only=True)
    except Exception as exc:
        raise SourceUnavailable(
            code=ErrorCode.E_SOURCE_CORRUPT,
            message=f"Failed to open Excel workbook: {exc}",
            stage="load",
        ) from exc


def _load_xlsx(data: bytes, sheet_name: str | None) -> LoadedSheet:
    wb = _open_xlsx(data)
    try:
        names = list(wb.sheetnames)
        target = sheet_name if sheet_name is not None else (names[0] if names else None)
        if target is None or target not in names:
            raise _sheet_not_found(sheet_name, names)

        ws = wb[target]
        if not isinstance(ws, Worksheet):
            raise SourceUnavailable(
                code=ErrorCode.E_SHEET_NOT_FOUND,
                message=f"Sheet '{target}' is a chartsheet and holds no cells",
                stage="load",
            )

        logger.debug("assignment_insights | loading sheet=%s dims=%s", target, ws.dimensions)
        return LoadedSheet(sheet_name=target, grid=_grid_from_worksheet(ws))
    finally:
        wb.close()


def _grid_from_worksheet(ws: Worksheet) -> Grid:
    cell_range = decode_range(ws.calculate_dimension())
    cells: dict[tuple[int, int], CellValue] = {}
    for row in ws.iter_rows(
        min_row=cell_range.min_row + 1,
        max_row=cell_range.max_row + 1,
        min_col=cell_range.min_col + 1,
        max_col=cell_range.max_col + 1,
    ):
        for cell in row:
            value = to_cell_value(cell.value)
            if not isinstance(value, EmptyCell):
                cells[(cell.row - 1, cell.column - 1)] = value
    return Grid(cells, cell_range)


def _open_xls(data: bytes) -> Any:
    if xlrd is None:
        raise SourceUnavailable(
            code=ErrorCode.E_PARSER_UNAVAILABLE,
            message=(
                "xlrd is required to read .xls files. "
                "Install it with: pip install xlrd"
            ),
            stage="load",
        )
    try:
        return xlrd.open_workbook(file_contents=data)
    except Exception as exc:
        raise SourceUnavailable(
            code=ErrorCode.E_SOURCE_CORRUPT,
            message=f"Failed to open .xls workbook: {exc}",
            stage="load",
        ) from exc


def _xls_cell_value(cell: Any, datemode: int) -> Any:
    """Convert an xlrd cell to the raw Python value openpyxl would return."""
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        try:
            return xlrd.xldate_as_datetime(cell.value, datemode)
        except Exception as exc:
            logger.warning(
                "assignment_insights | date conversion failed: %s | keeping serial", exc
            )
            return cell.value
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return "#ERROR"
    return cell.value


def _load_xls(data: bytes, sheet_name: str | None) -> LoadedSheet:
    book = _open_xls(data)
    names = list(book.sheet_names())
    target = sheet_name if sheet_name is not None else (names[0] if names else None)
    if target is None or target not in names:
        raise _sheet_not_found(sheet_name, names)

    sheet = book.sheet_by_name(target)
    logger.debug(
        "assignment_insights | loading sheet=%s rows=%d cols=%d",
        target,
        sheet.nrows,
        sheet.ncols,
    )
    rows = [
        [_xls_cell_value(sheet.cell(r, c), book.datemode) for c in range(sheet.ncols)]
        for r in range(sheet.nrows)
    ]
    return LoadedSheet(sheet_name=target, grid=Grid.from_rows(rows))
