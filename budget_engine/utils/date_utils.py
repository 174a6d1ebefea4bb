"""Date manipulation utilities"""

import calendar
from datetime import date, datetime
from typing import Optional


def parse_date(value: object) -> Optional[date]:
    """
    Coerce a storage value into a date.

    Accepts date/datetime objects and ISO-8601 strings (timestamps included).
    Returns None for anything unparsable so callers can treat the record as
    contributing nothing.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def add_months(dt: date, months: int) -> date:
    """Add months to a date, clamping the day to the target month's last day"""
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(start: date, end: date) -> int:
    """Calendar months from start to end, ignoring the day of month"""
    return (end.year - start.year) * 12 + (end.month - start.month)
