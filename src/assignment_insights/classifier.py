"""Action-value classification.

A row counts as assigned when its action cell is non-empty and not one of
the explicit negative indicators.  Unrecognized text such as a person's name
is treated as assigned.
"""

from __future__ import annotations

from assignment_insights.models import CellValue, cell_text, is_blank

POSITIVE_INDICATORS = frozenset({"yes", "true", "assigned", "done", "1"})
NEGATIVE_INDICATORS = frozenset({"no", "false", "unassigned", "0"})


def is_assigned(cell: CellValue) -> bool:
    """Return True if *cell* marks its row as assigned."""
    if is_blank(cell):
        return False

    text = cell_text(cell).strip().lower()
    if not text:
        return False
    if text in POSITIVE_INDICATORS:
        return True
    if text in NEGATIVE_INDICATORS:
        return False
    return True
