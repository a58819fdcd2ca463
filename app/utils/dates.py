"""
Date helpers shared by the report month filter and the CSV export.
All month boundaries are computed in local server time.
"""

from datetime import datetime
from typing import Optional, Tuple


def as_local(value: datetime) -> datetime:
    """
    Return an aware datetime in the server's local zone.
    Naive values are taken to already be local time.
    """
    return value.astimezone()


def month_range(month: int, year: int) -> Tuple[datetime, datetime]:
    """
    [start-of-month, start-of-next-month) for a 1-indexed month.

    December rolls over into January of the following year.
    """
    start = datetime(year, month, 1).astimezone()
    if month == 12:
        end = datetime(year + 1, 1, 1).astimezone()
    else:
        end = datetime(year, month + 1, 1).astimezone()
    return start, end


def format_display(value: Optional[datetime]) -> str:
    """
    Render a timestamp for humans, e.g. "3/7/2025, 2:05:09 PM".
    """
    if value is None:
        return ""
    local = as_local(value)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
