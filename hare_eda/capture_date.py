"""
capture_date.py - Capture date parsing utilities.

Parses the month/day/year text used in the trapping records into a
datetime.date and extracts the capture year. Two-digit years follow the
POSIX pivot used by strptime (69-99 -> 1900s, 00-68 -> 2000s).
"""
from __future__ import annotations

from datetime import date as _date, datetime
import re
from typing import Any, Optional, Sequence

from hare_eda.errors import ParseError

DEFAULT_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y", "%m-%d-%Y", "%m-%d-%y")

_MDY_PATTERN = re.compile(r"^\s*\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\s*$")


def looks_like_mdy(text: str) -> bool:
    """Return True if text has the month/day/year shape (digits only)."""
    return bool(_MDY_PATTERN.match(text))


def parse_capture_date(value: Any, date_formats: Sequence[str] = DEFAULT_DATE_FORMATS, record_id: Optional[str] = None) -> _date:
    """
    Parse a capture date from its month/day/year text form.

    Args:
        value: Raw text such as '11/26/1998' or '11/26/98', or an existing date.
        date_formats: strptime formats to try in order.
        record_id: Record identifier, used in the error.

    Returns:
        datetime.date: The parsed calendar date.

    Raises:
        ParseError: If the value is missing or matches none of the formats.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, _date):
        return value
    if value is None:
        raise ParseError("Missing capture date", value, "capture_date", record_id)
    if not isinstance(value, str):
        raise ParseError(f"Unsupported capture date type: {type(value).__name__}", value, "capture_date", record_id)

    text = value.strip()
    if not looks_like_mdy(text):
        raise ParseError(f"Capture date '{value}' is not in month/day/year form", value, "capture_date", record_id)

    for fmt in date_formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ParseError(f"Unable to parse capture date '{value}'", value, "capture_date", record_id)


def capture_year(value: Any) -> int:
    """Return the capture year of a date or month/day/year string."""
    return parse_capture_date(value).year


def is_plausible_year(year: int, min_year: int, max_year: int) -> bool:
    """Return True if min_year <= year <= max_year."""
    return isinstance(year, int) and min_year <= year <= max_year
