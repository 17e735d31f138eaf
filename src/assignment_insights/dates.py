"""Due-date parsing and reference-date computation.

:func:`parse_due_date` turns a cell into a calendar date or ``None`` (the
"unparseable" signal) and never raises.  Numbers are read as serials of the
1900 date system.  Text is matched against fixed numeric layouts first:
year-first forms are Y-M-D, slash forms are month first (``M/D/YYYY``), dash
and dot forms with a trailing year are day first (``D-M-YYYY``,
``D.M.YYYY``).  A layout match that names an impossible date is unparseable
rather than re-read in another order.  Remaining text goes to
``dateutil.parser`` with ``dayfirst=False`` and is accepted only when the text
itself names a year, month and day, so results never depend on defaults or
the wall clock.

:func:`reference_date` computes "today" in a named timezone from an
injectable clock.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as dateparser

from assignment_insights.models import CellValue, DateCell, NumberCell, TextCell

Clock = Callable[[], datetime]

EXCEL_EPOCH = datetime(1900, 1, 1)
# Serial 2 is the epoch itself once the 1900 leap-year bug offset is applied.
EXCEL_SERIAL_OFFSET = 2

# Every field differs between the two, so a gap dateutil fills shows up.
DATEUTIL_SENTINELS = (datetime(2000, 1, 1), datetime(2004, 2, 2))

_TIME_SUFFIX = r"(?:[T ]\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?\s*(?:[AaPp][Mm]|Z|[+-]\d{2}:?\d{2})?)?"

# (pattern, field order) -- first match wins.
DATE_LAYOUTS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(rf"^(\d{{4}})-(\d{{1,2}})-(\d{{1,2}}){_TIME_SUFFIX}$"), "ymd"),
    (re.compile(rf"^(\d{{4}})/(\d{{1,2}})/(\d{{1,2}}){_TIME_SUFFIX}$"), "ymd"),
    (re.compile(rf"^(\d{{1,2}})/(\d{{1,2}})/(\d{{4}}){_TIME_SUFFIX}$"), "mdy"),
    (re.compile(rf"^(\d{{1,2}})-(\d{{1,2}})-(\d{{4}}){_TIME_SUFFIX}$"), "dmy"),
    (re.compile(rf"^(\d{{1,2}})\.(\d{{1,2}})\.(\d{{4}}){_TIME_SUFFIX}$"), "dmy"),
)


def serial_to_date(value: float) -> date | None:
    """Convert a 1900-system serial to a date; ``None`` if out of range."""
    if not math.isfinite(value) or value < 0:
        return None
    try:
        return (EXCEL_EPOCH + timedelta(days=value - EXCEL_SERIAL_OFFSET)).date()
    except (OverflowError, ValueError):
        return None


def _from_layout(groups: tuple[str, ...], order: str) -> date | None:
    parts = dict(zip(order, (int(g) for g in groups)))
    try:
        return date(parts["y"], parts["m"], parts["d"])
    except ValueError:
        return None


def parse_date_text(text: str) -> date | None:
    """Parse a free-form date string; ``None`` when it is not a date.

    Text handed to dateutil must name a year, month and day itself.  It is
    parsed against two sentinel defaults; any field that differs between the
    two runs was filled in by dateutil, and the text is rejected.
    """
    text = text.strip()
    if not text or not any(ch.isdigit() for ch in text):
        return None

    for pattern, order in DATE_LAYOUTS:
        match = pattern.match(text)
        if match:
            return _from_layout(match.groups(), order)

    try:
        first, second = (
            dateparser.parse(text, dayfirst=False, default=default)
            for default in DATEUTIL_SENTINELS
        )
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first.date()


def parse_due_date(cell: CellValue) -> date | None:
    """Return the calendar date held by *cell*, or ``None`` if unparseable."""
    if isinstance(cell, DateCell):
        return cell.value
    if isinstance(cell, NumberCell):
        return serial_to_date(cell.value)
    if isinstance(cell, TextCell):
        return parse_date_text(cell.value)
    return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def reference_date(timezone_name: str, clock: Clock | None = None) -> date:
    """Return the current calendar day in *timezone_name*.

    The instant comes from *clock* (default :func:`utc_now`); naive instants
    are taken as UTC.

    Raises:
        ValueError: If *timezone_name* is not a known IANA zone.
    """
    try:
        zone = ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone '{timezone_name}'") from exc

    now = (clock or utc_now)()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone).date()
