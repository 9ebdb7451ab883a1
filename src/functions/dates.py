"""
Calendar date helpers.

Dates travel through this package as plain ISO strings ('2019-01-20'),
the same form used for year/month/day partitioned tables. CalendarDate
is the parsed value: three integers, ordered chronologically.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import List, Tuple

# ASCII digits only; 4-digit year, month and day may be one or two digits
DATE_PATTERN = re.compile(r"^([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})$")


class FormatError(ValueError):
    """Raised when a string cannot be parsed as a yyyy-mm-dd date."""


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A year/month/day triple without time or timezone."""
    year: int
    month: int
    day: int

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        return cls(value.year, value.month, value.day)

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def parse_date(date_str: str) -> CalendarDate:
    """
    Parse a 'yyyy-mm-dd' string.

    Args:
        date_str: Date string, e.g. '2019-01-20' or '2019-1-2'

    Returns:
        CalendarDate

    Raises:
        FormatError: If the string is not a valid calendar date
    """
    if not isinstance(date_str, str):
        raise FormatError(f"Expected a date string in the form yyyy-mm-dd, got {date_str!r}")

    match = DATE_PATTERN.match(date_str.strip())
    if match is None:
        raise FormatError(f"Date '{date_str}' is not in the form yyyy-mm-dd")

    year, month, day = (int(part) for part in match.groups())
    try:
        date(year, month, day)
    except ValueError as e:
        raise FormatError(f"Date '{date_str}' is not a valid calendar date: {e}") from e

    return CalendarDate(year, month, day)


def decompose(value: CalendarDate) -> Tuple[int, int, int]:
    """Split a CalendarDate into (year, month, day)."""
    return value.year, value.month, value.day


def expand_date(date_str: str) -> List[int]:
    """
    Convert a date string into [year, month, day].

    Args:
        date_str: Date in the form 'yyyy-mm-dd'

    Returns:
        List containing the year, month and day of the date
    """
    return list(decompose(parse_date(date_str)))


def normalize(date1: CalendarDate, date2: CalendarDate) -> Tuple[CalendarDate, CalendarDate]:
    """Return the two dates in ascending order."""
    if date2 < date1:
        return date2, date1
    return date1, date2


def plus_days(date_str: str, num_days: int) -> str:
    """
    Add days to a given date.

    Args:
        date_str: Date to be added to, in the form '2019-01-20'
        num_days: Number of days to add, can be negative

    Returns:
        The date num_days after (or before if negative) date_str
    """
    shifted = parse_date(date_str).to_date() + timedelta(days=num_days)
    return shifted.isoformat()


def date_range(start: str, end: str) -> List[str]:
    """
    Return the dates between two given dates, both ends included.

    Args:
        start: Start date (yyyy-mm-dd)
        end: End date (yyyy-mm-dd)

    Returns:
        List of ISO date strings from start to end

    Raises:
        ValueError: If end is before start
    """
    start_date = parse_date(start).to_date()
    days = (parse_date(end).to_date() - start_date).days

    if days < 0:
        raise ValueError(f"Start date ({start}) must be before end date ({end})!")

    return [(start_date + timedelta(days=d)).isoformat() for d in range(days + 1)]


def today() -> str:
    """Today's date in UTC as a string."""
    return datetime.now(timezone.utc).date().isoformat()


def yesterday() -> str:
    """Yesterday's date in UTC as a string."""
    return plus_days(today(), -1)
