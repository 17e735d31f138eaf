"""Result assembly: percentages, the ``AnalysisResult`` record and its summary line."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from assignment_insights.models import (
    AnalysisOutcome,
    AnalysisResult,
    ColumnsUsed,
    RowTally,
)

SUMMARY_TEMPLATE = (
    "Total: {total} | Assigned: {assigned} ({assigned_pct}%) | "
    "Overdue: {overdue} ({overdue_pct}%)"
)

_ONE_DECIMAL = Decimal("0.1")


def percentage(part: int, whole: int) -> float:
    """``part / whole * 100`` rounded half away from zero to one decimal.

    Returns ``0.0`` when *whole* is zero.  The quotient is rounded exactly,
    so ``1/16`` gives ``6.3`` where ``round()`` would give ``6.2``.
    """
    if whole == 0:
        return 0.0
    exact = Decimal(part * 100) / Decimal(whole)
    return float(exact.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def format_pct(value: float) -> str:
    """Render a percentage without a redundant trailing ``.0``."""
    return f"{value:g}"


def render_summary(result: AnalysisResult) -> str:
    return SUMMARY_TEMPLATE.format(
        total=result.total_rows,
        assigned=result.assigned_count,
        assigned_pct=format_pct(result.assigned_pct),
        overdue=result.overdue_count,
        overdue_pct=format_pct(result.overdue_pct_of_assigned),
    )


def build_result(
    tally: RowTally,
    columns: ColumnsUsed,
    today: date,
    timezone_name: str,
    sheet_name: str | None = None,
) -> AnalysisOutcome:
    """Assemble the final :class:`AnalysisOutcome` from an aggregation tally."""
    result = AnalysisResult(
        total_rows=tally.total_rows,
        assigned_count=tally.assigned_count,
        assigned_pct=percentage(tally.assigned_count, tally.total_rows),
        overdue_count=tally.overdue_count,
        overdue_pct_of_assigned=percentage(tally.overdue_count, tally.assigned_count),
        today_iso=today.isoformat(),
        timezone=timezone_name,
        columns_used=columns,
        notes=list(tally.notes),
        warnings=list(tally.warnings),
        sheet_name=sheet_name,
    )
    return AnalysisOutcome(result=result, summary=render_summary(result))
