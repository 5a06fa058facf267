"""Calendar-date helpers shared by the period generator and the aggregator."""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from .errors import InvalidDateError

DateLike = Union[date, datetime, str]

ONE_DAY = timedelta(days=1)


def normalize(value: DateLike) -> date:
    """
    Strip time-of-day from a date-like value.

    - date: returned as-is
    - datetime: calendar date in its own offset (naive or aware)
    - str: ISO-8601 date or timestamp ('2024-03-15', '2024-03-15T10:00:00Z')
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(f"Invalid date {value!r}: {e}") from e
    raise InvalidDateError(f"Unsupported date value {value!r}")


def add_years(d: date, years: int) -> date:
    """Shift by whole years. Feb 29 into a non-leap year clamps to Feb 28."""
    return d + relativedelta(years=years)


def days_inclusive(start: date, end: date) -> int:
    """Count calendar days from start to end, both endpoints included."""
    return (end - start).days + 1


def later(a: date, b: date) -> date:
    return a if a > b else b


def earlier(a: date, b: date) -> date:
    return a if a < b else b
