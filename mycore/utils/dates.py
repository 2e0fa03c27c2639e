"""
Date Utilities - formatting, week windows and day names
"""
import math
from datetime import date, datetime, timedelta
from typing import List, Union

from mycore.core.constants import WEEK_WINDOW_RADIUS_DAYS

DateLike = Union[date, str]

_DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def format_date(d: date) -> str:
    """Format a date (or datetime) as YYYY-MM-DD"""
    if isinstance(d, datetime):
        d = d.date()
    return d.isoformat()


def parse_date(value: DateLike) -> date:
    """
    Parse a YYYY-MM-DD string into a date. Dates pass through unchanged.

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def day_of_week(value: DateLike) -> int:
    """Day of week numbered Sunday=0 ... Saturday=6"""
    return (parse_date(value).weekday() + 1) % 7


def is_weekend(value: DateLike) -> bool:
    return day_of_week(value) in (0, 6)


def get_day_name(value: DateLike) -> str:
    """Short English weekday name, e.g. 'Mon'"""
    return _DAY_NAMES[day_of_week(value)]


def get_week_days(anchor: date) -> List[date]:
    """
    Get the 7-day window surrounding an anchor date

    Args:
        anchor: Center of the window (usually today)

    Returns:
        Dates from anchor - 3 days to anchor + 3 days, ascending
    """
    start = anchor - timedelta(days=WEEK_WINDOW_RADIUS_DAYS)
    return [start + timedelta(days=i) for i in range(2 * WEEK_WINDOW_RADIUS_DAYS + 1)]


def date_range(start: date, end: date) -> List[date]:
    """Inclusive list of dates from start to end"""
    days = (end - start).days
    return [start + timedelta(days=i) for i in range(days + 1)]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up"""
    return int(math.floor(value + 0.5))


def calculate_completion(total: int, completed: int) -> int:
    """Integer completion percentage, 0 when there is nothing to complete"""
    if total == 0:
        return 0
    return round_half_up(completed / total * 100)
