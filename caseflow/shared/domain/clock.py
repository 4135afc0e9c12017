"""
Clock Policy
============

Single source of "today" and of whole-day arithmetic.

All day counts in the system are calendar-day differences: timestamps are
truncated to their date before subtracting, so the time of day (and any
timezone offset attached to it) never shifts a count by one.
"""

from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional, Union

DateLike = Union[date, datetime]


def as_date(value: DateLike) -> date:
    """Truncate a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def truncate_to_date(value: Any) -> Any:
    """
    Normalise a stored date field before validation.

    Blank strings become None, datetimes and ISO timestamps (with a "T" or a
    space between date and time) keep only their calendar date. Anything
    else is returned unchanged for the model to validate.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if len(text) > 10:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return text
    return value


class ClockPolicy:
    """
    Injectable clock.

    Production code builds one with the default source; tests pass a fixed
    date. Domain functions never call ``today()`` themselves: they receive
    "now" as an argument, and only the application edge asks the clock.
    """

    def __init__(self, source: Optional[Callable[[], DateLike]] = None):
        self._source = source or date.today

    @classmethod
    def fixed(cls, value: DateLike) -> "ClockPolicy":
        """A clock frozen at ``value``."""
        frozen = as_date(value)
        return cls(lambda: frozen)

    def today(self) -> date:
        return as_date(self._source())

    @staticmethod
    def days_between(a: DateLike, b: DateLike) -> int:
        """Whole calendar days from ``a`` to ``b`` (``b - a``), may be negative."""
        return (as_date(b) - as_date(a)).days

    @staticmethod
    def add_days(value: DateLike, days: int) -> date:
        return as_date(value) + timedelta(days=days)
