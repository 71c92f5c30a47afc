"""Human-readable rendering of patterns and occurrences."""

import calendar
from collections.abc import Iterable
from datetime import date

from calrecur import calmath
from calrecur.pattern import FixedDay, NthWeekday, RecurrencePattern, RecurrenceType
from calrecur.util import DAY_NAMES, WEEK_NAMES

_UNITS = {
    RecurrenceType.DAILY: "day",
    RecurrenceType.WEEKLY: "week",
    RecurrenceType.MONTHLY: "month",
    RecurrenceType.YEARLY: "year",
}

_ADVERBS = {
    RecurrenceType.DAILY: "daily",
    RecurrenceType.WEEKLY: "weekly",
    RecurrenceType.MONTHLY: "monthly",
    RecurrenceType.YEARLY: "yearly",
}


def format_date(d: date) -> str:
    """Format as ``2024-01-05``."""
    return d.strftime("%Y-%m-%d")


def format_display_date(d: date) -> str:
    """Format as ``Jan 05, 2024``."""
    return f"{calendar.month_abbr[d.month]} {d.day:02d}, {d.year}"


def day_names(short: bool = False) -> list[str]:
    """Weekday names, Sunday first."""
    if short:
        return [name[:3] for name in DAY_NAMES]
    return list(DAY_NAMES)


def describe(pattern: RecurrencePattern) -> str:
    """
    Summarize a pattern in one sentence.

    Examples:
        "Repeats daily"
        "Repeats every 2 weeks on Monday, Wednesday"
        "Repeats monthly on the last Friday until 2024-12-31"
    """
    kind = pattern.recurrence_type
    if pattern.interval == 1:
        text = f"Repeats {_ADVERBS[kind]}"
    else:
        text = f"Repeats every {pattern.interval} {_UNITS[kind]}s"

    if kind is RecurrenceType.WEEKLY:
        weekdays = sorted(pattern.week_days) or [
            calmath.day_of_week(pattern.start_date)
        ]
        text += " on " + ", ".join(DAY_NAMES[wd] for wd in weekdays)
    elif kind is RecurrenceType.MONTHLY:
        rule = pattern.monthly_rule
        if isinstance(rule, NthWeekday):
            text += f" on the {WEEK_NAMES[rule.week]} {DAY_NAMES[rule.weekday]}"
        elif isinstance(rule, FixedDay):
            text += f" on day {rule.day}"
        else:
            text += f" on day {pattern.start_date.day}"
    elif kind is RecurrenceType.YEARLY:
        start = pattern.start_date
        text += f" on {calendar.month_name[start.month]} {start.day}"

    if pattern.end_date is not None:
        text += f" until {format_date(pattern.end_date)}"
    return text


def month_grid(
    year: int, month: int, occurrences: Iterable[date]
) -> list[list[tuple[date, bool]]]:
    """Lay out a month as Sunday-first weeks of ``(day, is_occurrence)`` cells.

    Leading and trailing cells belong to the neighbouring months, so every
    week has seven entries.
    """
    marked = set(occurrences)
    weeks = calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(
        year, month
    )
    return [[(day, day in marked) for day in week] for week in weeks]
