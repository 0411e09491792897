"""Local calendar helpers.

All parsing works on the local wall-clock calendar: dates are plain
``datetime.date`` values and no timezone conversion is ever applied. The
weekday numbering used throughout the parser is 0=Sunday .. 6=Saturday, while
Python's ``date.weekday()`` is 0=Monday .. 6=Sunday; the helpers below convert
between the two.
"""

from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Optional


def local_today() -> date:
    """Return today's date on the local calendar.
    
    Returns:
        The current local date (midnight semantics, no time component)
    """
    return datetime.now().date()


def to_iso_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return value.isoformat()


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a date.
    
    Args:
        value: ISO calendar date string
        
    Returns:
        The parsed date
        
    Raises:
        ValueError: If the string is not a valid ISO date
    """
    return datetime.strptime(value, "%Y-%m-%d").date()


def sunday_weekday(value: date) -> int:
    """Return the weekday of ``value`` with 0=Sunday .. 6=Saturday."""
    return (value.weekday() + 1) % 7


def add_months(value: date, months: int, day: Optional[int] = None) -> date:
    """Move ``value`` by a number of months.
    
    Args:
        value: Starting date
        months: Number of months to add (may be negative)
        day: Day of the target month; defaults to the starting day clamped to
            the length of the target month
        
    Returns:
        The shifted date
    """
    month = value.month - 1 + months
    year = value.year + month // 12
    month = month % 12 + 1
    last_day = monthrange(year, month)[1]
    target_day = value.day if day is None else day
    return date(year, month, min(target_day, last_day))


def end_of_month(value: date) -> date:
    """Return the last calendar day of the month containing ``value``."""
    return value.replace(day=monthrange(value.year, value.month)[1])


def start_of_week(value: date, first_day_of_week: int = 1) -> date:
    """Return the first day of the calendar week containing ``value``.
    
    Args:
        value: Any date inside the week
        first_day_of_week: 0=Sunday .. 6=Saturday; Monday by default
        
    Returns:
        The date the week starts on
    """
    return value - timedelta(days=(sunday_weekday(value) - first_day_of_week) % 7)


def next_weekday(today: date, weekday: int) -> date:
    """Return the nearest date strictly after ``today`` falling on ``weekday``.
    
    If ``today`` already is that weekday the result is exactly one week later.
    
    Args:
        today: Reference date
        weekday: Target weekday, 0=Sunday .. 6=Saturday
        
    Returns:
        The next matching date
    """
    days_ahead = (weekday - sunday_weekday(today)) % 7
    if days_ahead == 0:
        days_ahead = 7
    return today + timedelta(days=days_ahead)


def weekday_in_week(today: date, weekday: int, weeks_ahead: int = 0,
                    first_day_of_week: int = 1) -> date:
    """Resolve ``weekday`` qualified by this week, next week or the week after.
    
    ``weeks_ahead=0`` counts forward from ``today`` (today itself included)
    and never returns a past date. ``weeks_ahead=1`` always lands in the
    following calendar week, i.e. between 1 and 13 days after ``today``;
    ``weeks_ahead=2`` is one week later still.
    
    Args:
        today: Reference date
        weekday: Target weekday, 0=Sunday .. 6=Saturday
        weeks_ahead: 0 for this week, 1 for next week, 2 for the week after
        first_day_of_week: 0=Sunday .. 6=Saturday
        
    Returns:
        The resolved date
    """
    if weeks_ahead == 0:
        return today + timedelta(days=(weekday - sunday_weekday(today)) % 7)

    week_start = start_of_week(today, first_day_of_week)
    offset = (weekday - first_day_of_week) % 7
    return week_start + timedelta(days=offset + 7 * weeks_ahead)


def upcoming_month_day(today: date, month: int, day: int) -> Optional[date]:
    """Resolve a month/day without a year to its next occurrence.
    
    The current year is used unless that date has already passed, in which
    case the date rolls over to next year. Today itself counts as upcoming.
    
    Args:
        today: Reference date
        month: Month 1-12
        day: Day of month
        
    Returns:
        The resolved date, or None if the month/day never exists in either year
    """
    for year in (today.year, today.year + 1):
        try:
            candidate = date(year, month, day)
        except ValueError:
            continue
        if candidate >= today:
            return candidate
    return None
