"""AssignmentAnalyzer -- orchestrator and public API for assignment-insights.

Routes a workbook through the full analysis:

1. Read the bytes (file path or binary stream).
2. Security scan via :class:`SourceScanner`.
3. Decode the first sheet via :func:`load_grid`.
4. Resolve the action and due-date columns via :func:`locate_columns`.
5. Count assigned and overdue rows via :func:`aggregate_rows`.
6. Assemble and return the :class:`AnalysisOutcome` via :func:`build_result`.

Fatal conditions raise :class:`ReadFailure`, :class:`SourceUnavailable` or
:class:`MissingRequiredColumn`; nothing is retried.  Non-fatal conditions are
returned as notes on the result.
"""

from __future__ import annotations

import logging
import os
import time
from datetime import date
from pathlib import Path
from typing import BinaryIO

from assignment_insights.aggregator import aggregate_rows
from assignment_insights.columns import locate_columns
from assignment_insights.config import AnalyzerConfig
from assignment_insights.dates import Clock, reference_date
from assignment_insights.errors import (
    AnalysisError,
    ErrorCode,
    ReadFailure,
    SourceUnavailable,
)
from assignment_insights.grid import Grid
from assignment_insights.models import AnalysisOutcome, cell_text
from assignment_insights.results import build_result
from assignment_insights.security import SourceScanner
from assignment_insights.workbook import load_grid

logger = logging.getLogger("assignment_insights")


class AssignmentAnalyzer:
    """Top-level orchestrator for workbook analysis.

    Holds only configuration and the clock, so one instance can serve any
    number of independent calls.

    Parameters
    ----------
    config:
        Analyzer configuration.  Uses defaults when *None*.
    clock:
        Callable returning the current instant; used to compute the
        reference date.  Defaults to the system UTC clock.
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config or AnalyzerConfig()
        self._clock = clock
        self._scanner = SourceScanner(self._config)

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def today(self) -> date:
        """The reference date for overdue checks, in the configured timezone."""
        return reference_date(self._config.timezone, self._clock)

    def analyze_file(
        self,
        file_path: str | os.PathLike[str],
        today: date | None = None,
    ) -> AnalysisOutcome:
        """Read and analyze the workbook at *file_path*.

        Raises
        ------
        ReadFailure
            If the file cannot be read.
        SourceUnavailable
            If the bytes are not a readable workbook.
        MissingRequiredColumn
            If the action column holds no data.
        """
        filename = os.path.basename(os.fspath(file_path))
        try:
            data = Path(file_path).read_bytes()
        except OSError as exc:
            failure = ReadFailure(
                code=ErrorCode.E_READ_FAILED,
                message=f"Failed to read the Excel file: {exc}",
                stage="read",
            )
            _log_failure(failure, filename)
            raise failure from exc
        return self.analyze_bytes(data, filename=filename, today=today)

    def analyze_stream(
        self,
        stream: BinaryIO,
        filename: str | None = None,
        today: date | None = None,
    ) -> AnalysisOutcome:
        """Read *stream* to the end and analyze its bytes."""
        try:
            data = stream.read()
        except (OSError, ValueError) as exc:
            failure = ReadFailure(
                code=ErrorCode.E_READ_FAILED,
                message=f"Failed to read the Excel file: {exc}",
                stage="read",
            )
            _log_failure(failure, filename)
            raise failure from exc

        if not isinstance(data, (bytes, bytearray)):
            failure = ReadFailure(
                code=ErrorCode.E_READ_FAILED,
                message="Stream did not return bytes; open the file in binary mode",
                stage="read",
            )
            _log_failure(failure, filename)
            raise failure
        return self.analyze_bytes(bytes(data), filename=filename, today=today)

    def analyze_bytes(
        self,
        data: bytes,
        filename: str | None = None,
        today: date | None = None,
    ) -> AnalysisOutcome:
        """Analyze the first sheet of the workbook in *data*.

        Parameters
        ----------
        data:
            Complete workbook bytes.
        filename:
            Optional original file name; enables the extension check and
            is used in log lines.
        today:
            Reference date override; see :meth:`analyze_grid`.
        """
        security_errors = self._scanner.scan(data, filename)
        if security_errors:
            failure = SourceUnavailable.from_detail(security_errors[0])
            _log_failure(failure, filename)
            raise failure

        try:
            loaded = load_grid(data)
        except SourceUnavailable as exc:
            _log_failure(exc, filename)
            raise

        return self.analyze_grid(
            loaded.grid,
            today=today,
            sheet_name=loaded.sheet_name,
            filename=filename,
        )

    def analyze_grid(
        self,
        grid: Grid,
        today: date | None = None,
        sheet_name: str | None = None,
        filename: str | None = None,
    ) -> AnalysisOutcome:
        """Analyze an already-decoded grid.

        Parameters
        ----------
        grid:
            The worksheet grid.
        today:
            Reference date for overdue checks.  When *None* it is computed
            from the clock in the configured timezone.
        sheet_name:
            Name recorded on the result.
        filename:
            Used in log lines only.
        """
        start = time.monotonic()
        config = self._config
        if today is None:
            today = self.today()

        columns = locate_columns(grid, config.header_scan_depth)
        if config.log_sample_data:
            header_row = grid.cell_range.min_row
            logger.debug(
                "assignment_insights | file=%s | action=%s (%r) | due_date=%s (%r)",
                filename,
                columns.action.letter,
                cell_text(grid.cell(header_row, columns.action.index)),
                columns.due_date.letter,
                cell_text(grid.cell(header_row, columns.due_date.index)),
            )

        try:
            tally = aggregate_rows(grid, columns, today, header_rows=config.header_rows)
        except AnalysisError as exc:
            _log_failure(exc, filename)
            raise

        outcome = build_result(
            tally,
            columns,
            today,
            config.timezone,
            sheet_name=sheet_name,
        )

        for code, note in zip(outcome.result.warnings, outcome.result.notes):
            logger.warning(
                "assignment_insights | file=%s | code=%s | detail=%s",
                filename,
                code.value,
                note,
            )
        logger.info(
            "assignment_insights | file=%s | sheet=%s | total=%d | assigned=%d | "
            "overdue=%d | today=%s | elapsed=%.3fs",
            filename,
            sheet_name,
            outcome.result.total_rows,
            outcome.result.assigned_count,
            outcome.result.overdue_count,
            outcome.result.today_iso,
            time.monotonic() - start,
        )
        return outcome


def _log_failure(exc: AnalysisError, filename: str | None) -> None:
    logger.error(
        "assignment_insights | file=%s | code=%s | detail=%s",
        filename,
        exc.code.value,
        exc.message,
    )


def analyze_workbook(
    data: bytes,
    today: date | None = None,
    config: AnalyzerConfig | None = None,
) -> AnalysisOutcome:
    """Analyze workbook bytes with a default :class:`AssignmentAnalyzer`."""
    return AssignmentAnalyzer(config).analyze_bytes(data, today=today)
