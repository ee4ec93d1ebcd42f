"""
Shared utilities for data ingestion: numeric coercion, date normalisation
and chronological sort keys.
"""

import calendar
import logging
import math
import numbers
from datetime import date, datetime, timedelta
from typing import Any

import pandas as pd

from ..config import (
    EXCEL_SERIAL_THRESHOLD,
    EXCEL_UNIX_EPOCH_OFFSET,
    MIDDAY_SHIFT_HOURS,
    MONTH_ABBREVIATIONS,
    MS_PER_DAY,
)

logger = logging.getLogger(__name__)

_MONTH_INDEX = {abbr: idx for idx, abbr in enumerate(MONTH_ABBREVIATIONS)}

# Text layouts accepted for the Date column, tried in order
_DATE_FORMATS = (
    "%d-%b-%y",
    "%d-%b-%Y",
    "%d %b %Y",
    "%d %b %y",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d.%m.%Y",
    "%Y-%m-%d %H:%M:%S",
)


def safe_float(val: Any) -> float:
    """Coerce a cell value to a finite float, returning 0.0 when that fails.

    Numbers pass through unchanged. Strings are stripped and may carry a
    trailing percent sign. Blanks, text labels, formula strings, None,
    booleans, NaN and infinities all become 0.0.
    """
    if val is None or isinstance(val, bool):
        return 0.0
    if isinstance(val, str):
        val = val.strip()
        # Skip formula strings and blanks
        if not val or val.startswith("="):
            return 0.0
        if val.endswith("%"):
            val = val[:-1]
    try:
        num = float(val)
    except (ValueError, TypeError, OverflowError):
        return 0.0
    return num if math.isfinite(num) else 0.0


def format_canonical_date(d: date) -> str:
    """Format a calendar day as DD-Mon-YY (e.g. 01-Oct-25)."""
    return f"{d.day:02d}-{MONTH_ABBREVIATIONS[d.month - 1]}-{d.year % 100:02d}"


def serial_to_date(serial: float) -> date | None:
    """Convert a spreadsheet serial day number to a calendar day.

    The serial is turned into epoch milliseconds and pushed to midday UTC
    before the day is read, so fractional serials never land on the
    previous day. Serials at or below EXCEL_SERIAL_THRESHOLD are rejected.
    """
    if not math.isfinite(serial) or serial <= EXCEL_SERIAL_THRESHOLD:
        return None
    epoch_ms = round((serial - EXCEL_UNIX_EPOCH_OFFSET) * MS_PER_DAY)
    epoch_ms += MIDDAY_SHIFT_HOURS * 3600 * 1000
    try:
        moment = pd.Timestamp(epoch_ms, unit="ms", tz="UTC")
    except (ValueError, OverflowError, pd.errors.OutOfBoundsDatetime):
        logger.warning("Could not convert serial number %s to date", serial)
        return None
    return moment.date()


def normalise_date(val: Any) -> str | None:
    """Convert a Date cell to the canonical DD-Mon-YY string.

    Handles
    -------
    - datetime / pd.Timestamp: shifted forward 12 hours before the day is
      taken, so a midnight value rendered in a negative UTC offset does
      not roll back to the previous day.
    - date: formatted directly.
    - int / float: spreadsheet serial (see serial_to_date).
    - str: numeric text is treated as a serial; known layouts are parsed;
      any other text is passed through unchanged.

    Returns None for blanks and rejected serials.
    """
    if val is None or val is pd.NaT or isinstance(val, bool):
        return None

    if isinstance(val, datetime):
        shifted = val + timedelta(hours=MIDDAY_SHIFT_HOURS)
        return format_canonical_date(shifted)

    if isinstance(val, date):
        return format_canonical_date(val)

    if isinstance(val, numbers.Real):
        try:
            serial = float(val)
        except OverflowError:
            return None
        day = serial_to_date(serial)
        return format_canonical_date(day) if day is not None else None

    text = str(val).strip()
    if not text:
        return None

    try:
        serial = float(text)
    except ValueError:
        pass
    else:
        day = serial_to_date(serial)
        return format_canonical_date(day) if day is not None else None

    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return format_canonical_date(parsed)

    logger.debug("Unrecognised date text kept as-is: %s", text)
    return text


def date_sort_key(text: str) -> int:
    """Return UTC epoch milliseconds for a DD-Mon-YY string.

    Two-digit years are read as 20xx and an unknown month abbreviation
    falls back to January. Strings that do not split into three parts, or
    whose numbers do not parse, return 0 so they sort first.
    """
    if not isinstance(text, str):
        return 0
    parts = text.split("-")
    if len(parts) != 3:
        return 0
    try:
        day = int(parts[0])
        year = int(parts[2])
        if year < 100:
            year += 2000
        month = _MONTH_INDEX.get(parts[1], 0) + 1
        midnight = datetime(year, month, day)
    except (ValueError, OverflowError):
        return 0
    return calendar.timegm(midnight.timetuple()) * 1000
