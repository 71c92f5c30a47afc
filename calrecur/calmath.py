"""Calendar arithmetic on plain dates.

All functions accept ``date`` or ``datetime`` values and discard any time of
day, so results are always plain ``date`` objects that compare by calendar
identity.

Month and year arithmetic clamps to the last valid day of the target month:
Jan 31 + 1 month is Feb 29 in a leap year (Feb 28 otherwise), and
Feb 29 + 1 year is Feb 28. This is python-dateutil's relativedelta behavior.
"""

import calendar
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from calrecur.util import LAST


def start_of_day(d: date) -> date:
    """Truncate a date or datetime to its calendar date."""
    if isinstance(d, datetime):
        return d.date()
    return d


def day_of_week(d: date) -> int:
    """Weekday of ``d`` with 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def day_of_month(d: date) -> int:
    return d.day


def days_in_month(d: date) -> int:
    return calendar.monthrange(d.year, d.month)[1]


def start_of_month(d: date) -> date:
    return date(d.year, d.month, 1)


def end_of_month(d: date) -> date:
    return date(d.year, d.month, days_in_month(d))


def add_days(d: date, n: int) -> date:
    return start_of_day(d) + timedelta(days=n)


def add_weeks(d: date, n: int) -> date:
    return start_of_day(d) + timedelta(weeks=n)


def add_months(d: date, n: int) -> date:
    """Add ``n`` months, clamping to the end of shorter months."""
    return start_of_day(d) + relativedelta(months=n)


def add_years(d: date, n: int) -> date:
    """Add ``n`` years, clamping Feb 29 to Feb 28 in non-leap years."""
    return start_of_day(d) + relativedelta(years=n)


def is_same_day(a: date, b: date) -> bool:
    return start_of_day(a) == start_of_day(b)


def is_after(a: date, b: date) -> bool:
    return start_of_day(a) > start_of_day(b)


def is_before(a: date, b: date) -> bool:
    return start_of_day(a) < start_of_day(b)


def nth_weekday_of_month(d: date, week: int, weekday: int) -> date:
    """Return the ``week``-th ``weekday`` in the month containing ``d``.

    Args:
        d: Any date in the target month
        week: 1-4 for first..fourth, or 5 (``LAST``) for the final occurrence
            regardless of whether the month holds four or five of them
        weekday: Target weekday (0=Sunday .. 6=Saturday)
    """
    if week == LAST:
        last_day = end_of_month(d)
        return add_days(last_day, -((day_of_week(last_day) - weekday) % 7))

    first_day = start_of_month(d)
    first_match = add_days(first_day, (weekday - day_of_week(first_day)) % 7)
    # week <= 4 always lands inside the month: first_match <= 7th, plus 21 days
    return add_weeks(first_match, week - 1)


def is_nth_weekday_of_month(d: date, week: int, weekday: int) -> bool:
    if day_of_week(d) != weekday:
        return False
    return is_same_day(d, nth_weekday_of_month(d, week, weekday))
