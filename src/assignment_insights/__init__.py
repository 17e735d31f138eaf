"""assignment-insights -- assigned / overdue statistics for spreadsheets.

Public API re-exports for convenient access.
"""

from assignment_insights.aggregator import aggregate_rows
from assignment_insights.analyzer import AssignmentAnalyzer, analyze_workbook
from assignment_insights.classifier import is_assigned
from assignment_insights.columns import locate_columns, match_role
from assignment_insights.config import AnalyzerConfig
from assignment_insights.dates import parse_due_date, reference_date
from assignment_insights.errors import (
    AnalysisError,
    AnalysisErrorDetail,
    ErrorCode,
    MissingRequiredColumn,
    ReadFailure,
    SourceUnavailable,
)
from assignment_insights.grid import CellRange, Grid, column_index, column_letter, decode_range
from assignment_insights.models import (
    AnalysisOutcome,
    AnalysisResult,
    CellValue,
    ColumnRef,
    ColumnsUsed,
    DateCell,
    EmptyCell,
    NumberCell,
    RowTally,
    TextCell,
)
from assignment_insights.results import build_result
from assignment_insights.security import SourceScanner
from assignment_insights.workbook import LoadedSheet, load_grid, sheet_names

__version__ = "1.0.0"

__all__ = [
    # Orchestrator
    "AssignmentAnalyzer",
    "analyze_workbook",
    # Engine
    "locate_columns",
    "match_role",
    "is_assigned",
    "parse_due_date",
    "reference_date",
    "aggregate_rows",
    "build_result",
    # Workbook loading
    "load_grid",
    "sheet_names",
    "LoadedSheet",
    "SourceScanner",
    # Grid
    "Grid",
    "CellRange",
    "column_letter",
    "column_index",
    "decode_range",
    # Models
    "CellValue",
    "EmptyCell",
    "TextCell",
    "NumberCell",
    "DateCell",
    "ColumnRef",
    "ColumnsUsed",
    "RowTally",
    "AnalysisResult",
    "AnalysisOutcome",
    # Errors
    "ErrorCode",
    "AnalysisErrorDetail",
    "AnalysisError",
    "ReadFailure",
    "SourceUnavailable",
    "MissingRequiredColumn",
    # Config
    "AnalyzerConfig",
]
