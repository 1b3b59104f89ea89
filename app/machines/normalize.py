# app/machines/normalize.py
from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

# Spreadsheet serial day of 1970-01-01
EXCEL_UNIX_EPOCH = 25569
# Serials below this (~1995-10-28) are treated as stray numbers, not dates
EXCEL_SERIAL_MIN = 35000
SECONDS_PER_DAY = 86400

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# dateutil fills missing fields from its default; two different defaults
# expose which fields the text actually carried
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

# "Por confirmar", "A confirmar", "To be confirmed", "TBC" ...
TO_CONFIRM_TOKENS = ("confirm", "tbc")


def _to_utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def excel_serial_to_iso(serial: float) -> Optional[str]:
    """Convert a spreadsheet serial day number to YYYY-MM-DD, or None."""
    if serial < EXCEL_SERIAL_MIN:
        return None
    try:
        millis = round((serial - EXCEL_UNIX_EPOCH) * SECONDS_PER_DAY * 1000)
        return (_UNIX_EPOCH + timedelta(milliseconds=millis)).date().isoformat()
    except (OverflowError, ValueError):
        return None


def _parse_text_date(s: str) -> Optional[str]:
    """
    Parse free text as a calendar date. Year and month must be present in the
    text; a missing day means the 1st ("March 2025" -> 2025-03-01).
    """
    try:
        first, second = (date_parser.parse(s, default=d) for d in _PARSE_DEFAULTS)
    except (ValueError, OverflowError):
        return None
    if first.year != second.year or first.month != second.month:
        return None
    # first default has day 1, so a day-less text already lands on the 1st
    return _to_utc_date(first).isoformat()


def normalize_date(value: Any) -> Optional[str]:
    """
    Normalize a raw date cell to an ISO date string.

    Native dates/datetimes keep their calendar day (UTC for aware values),
    text is trimmed and parsed unless it says the date is still to be
    confirmed, and numbers are read as spreadsheet serials. Anything else,
    including falsy cells, becomes None.
    """
    if not value:
        return None

    if isinstance(value, datetime):
        return _to_utc_date(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        lowered = s.lower()
        if any(tok in lowered for tok in TO_CONFIRM_TOKENS):
            return None
        return _parse_text_date(s)

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return excel_serial_to_iso(value)

    return None


def normalize_part_number(value: Any) -> Optional[str]:
    # numeric cells come back as floats, e.g. 3222334455.0
    if value is None:
        return None
    s = str(value)
    if s.endswith(".0"):
        return s[:-2]
    return s


def passthrough(value: Any) -> Any:
    # time / duration cells have no SQLite binding; store their text form
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    return value
