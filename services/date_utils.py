"""Calendar-date helpers.

Dates travel through the app as ``YYYY-MM-DD`` strings taken from the local
wall clock. `datetime.date.today()` is already local; never derive the day
from a UTC timestamp or late-evening entries land on tomorrow.
"""

from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from core.exceptions import ValidationError

DATE_FORMAT = "%Y-%m-%d"

DateLike = Union[str, date]


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_date(value: DateLike) -> date:
    """Parse a CalendarDate string; `date` objects pass through.

    Raises:
        ValidationError: If the string is not a valid ``YYYY-MM-DD`` date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD", field="date")
    if format_date(parsed) != value:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD", field="date")
    return parsed


def today() -> str:
    """Today's local calendar date."""
    return format_date(date.today())


def add_days(value: DateLike, days: int) -> str:
    return format_date(parse_date(value) + timedelta(days=days))


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole days from `start` to `end` (negative if `end` is earlier)."""
    return (parse_date(end) - parse_date(start)).days


def start_of_week(value: Optional[DateLike] = None) -> str:
    """Monday on or before the given date (defaults to today).

    Sunday belongs to the week that started six days earlier.
    """
    d = parse_date(value) if value is not None else date.today()
    weekday = (d.weekday() + 1) % 7  # Sunday=0 .. Saturday=6
    offset = 6 if weekday == 0 else weekday - 1
    return format_date(d - timedelta(days=offset))


def week_dates(value: Optional[DateLike] = None) -> List[str]:
    """The seven dates Monday..Sunday of the week containing `value`."""
    monday = start_of_week(value)
    return [add_days(monday, i) for i in range(7)]
