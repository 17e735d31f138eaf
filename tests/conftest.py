"""Shared test fixtures for assignment-insights tests."""

from __future__ import annotations

import io
from datetime import date, datetime, timezone
from typing import Any

import openpyxl
import pytest

from assignment_insights.config import AnalyzerConfig
from assignment_insights.grid import Grid

# Noon of 2025-01-01 in Asia/Kolkata.
FIXED_INSTANT = datetime(2025, 1, 1, 6, 30, tzinfo=timezone.utc)
FIXED_TODAY = date(2025, 1, 1)


@pytest.fixture
def default_config() -> AnalyzerConfig:
    """Return a default AnalyzerConfig."""
    return AnalyzerConfig()


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2025-01-01 (Asia/Kolkata)."""
    return lambda: FIXED_INSTANT


@pytest.fixture
def today() -> date:
    return FIXED_TODAY


@pytest.fixture
def make_grid():
    """Factory fixture: nested row lists -> Grid anchored at A1."""

    def _make(rows: list[list[Any]]) -> Grid:
        return Grid.from_rows(rows)

    return _make


def build_xlsx(
    rows: list[list[Any]],
    sheet_title: str = "Sheet1",
    extra_sheets: dict[str, list[list[Any]]] | None = None,
) -> bytes:
    """Write *rows* into a fresh workbook and return its bytes."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_title
    for row in rows:
        ws.append(row)
    for title, sheet_rows in (extra_sheets or {}).items():
        extra = wb.create_sheet(title)
        for row in sheet_rows:
            extra.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes():
    """Factory fixture returning .xlsx bytes for the given rows."""
    return build_xlsx


@pytest.fixture
def tmp_xlsx_file(tmp_path):
    """Factory fixture: write rows to a .xlsx file and return its path."""

    def _write(rows: list[list[Any]], filename: str = "tasks.xlsx") -> str:
        file_path = tmp_path / filename
        file_path.write_bytes(build_xlsx(rows))
        return str(file_path)

    return _write
