"""
Helpers for the "MM-DD" day markers and show date conversions.
"""

import re
from datetime import date
from typing import Optional

from daily_dose.exceptions import InvalidDateMarkerError

_DAY_MARKER_RE = re.compile(r"^(\d{2})-(\d{2})$")
_SHOW_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def today_marker(today: Optional[date] = None) -> str:
    """Returns the day marker (MM-DD) for today or a given date."""
    today = today or date.today()
    return today.strftime("%m-%d")


def normalize_day_marker(value: str) -> str:
    """
    Validates a user supplied day marker.

    Accepts "MM-DD" as well as single-digit parts ("2-20") and returns the
    zero-padded form.

    Raises:
        InvalidDateMarkerError: If the value is not a plausible month/day.
    """
    text = (value or "").strip()
    parts = text.split("-")
    if len(parts) == 2 and all(p.isdigit() and 1 <= len(p) <= 2 for p in parts):
        text = f"{int(parts[0]):02d}-{int(parts[1]):02d}"

    match = _DAY_MARKER_RE.match(text)
    if not match:
        raise InvalidDateMarkerError(
            f"Invalid date '{value}'. Expected MM-DD, e.g. 05-08."
        )
    month, day = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise InvalidDateMarkerError(
            f"Invalid date '{value}'. Month must be 01-12 and day 01-31."
        )
    return text


def to_setlist_date(show_date: str) -> Optional[str]:
    """
    Converts an archive show date (YYYY-MM-DD) into the DD-MM-YYYY form used
    by setlist.fm. Returns None if the date is not in the expected shape.
    """
    match = _SHOW_DATE_RE.match(show_date or "")
    if not match:
        return None
    year, month, day = match.groups()
    return f"{day}-{month}-{year}"
