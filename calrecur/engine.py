"""Recurrence engine: enumerate the concrete dates a pattern produces.

The engine walks a cursor through calendar time, checks each candidate day
against the pattern, and advances the cursor by an amount that depends on the
recurrence type. Generation always stops at the occurrence cap or the
effective end bound, whichever comes first.
"""

import logging
from datetime import date

from dateutil.relativedelta import relativedelta

from calrecur import calmath
from calrecur.pattern import (
    FixedDay,
    NthWeekday,
    RecurrencePattern,
    RecurrenceType,
)
from calrecur.util import DEFAULT_LOOKAHEAD, DEFAULT_MAX_OCCURRENCES

logger = logging.getLogger(__name__)


class RecurrenceEngine:
    """Generate bounded occurrence sequences from recurrence patterns.

    The engine holds configuration only. Each ``generate`` call owns its
    cursor and result, so one engine can be shared freely.
    """

    def __init__(
        self,
        max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
        lookahead: relativedelta = DEFAULT_LOOKAHEAD,
    ):
        """
        Initialize an engine.

        Args:
            max_occurrences: Cap on the number of dates a single call returns.
                Longer sequences are silently truncated (default 50)
            lookahead: Generation window used when a pattern has no end_date,
                measured from its start_date (default one year)
        """
        if max_occurrences < 1:
            raise ValueError(
                f"max_occurrences must be positive, got {max_occurrences}.\n"
                f"Example: RecurrenceEngine(max_occurrences=100)"
            )
        self.max_occurrences: int = max_occurrences
        self.lookahead: relativedelta = lookahead

    def end_bound(self, pattern: RecurrencePattern) -> date:
        """Return the last date generation may reach for ``pattern``."""
        if pattern.end_date is not None:
            return pattern.end_date
        return calmath.start_of_day(pattern.start_date + self.lookahead)

    def generate(self, pattern: RecurrencePattern) -> tuple[date, ...]:
        """Return the ordered occurrences of ``pattern``.

        Occurrences are strictly increasing, never before ``start_date`` and
        never after the effective end bound.
        """
        start = pattern.start_date
        end = self.end_bound(pattern)
        cursor = self._first_cursor(pattern)
        step = 0
        occurrences: list[date] = []

        while len(occurrences) < self.max_occurrences and cursor <= end:
            qualified = self._matches(pattern, cursor)
            if qualified and cursor >= start:
                occurrences.append(cursor)
            step += 1
            cursor = self._advance(pattern, cursor, qualified, step)

        logger.debug(
            "Generated %d %s occurrence(s) from %s to %s%s",
            len(occurrences),
            pattern.recurrence_type.value,
            start,
            end,
            " (truncated at cap)" if cursor <= end else "",
        )
        return tuple(occurrences)

    def _first_cursor(self, pattern: RecurrencePattern) -> date:
        # Fixed-day monthly starts on that day of the start month
        rule = pattern.monthly_rule
        if isinstance(rule, FixedDay):
            return _clamped_day(calmath.start_of_month(pattern.start_date), rule.day)
        return pattern.start_date

    def _matches(self, pattern: RecurrencePattern, cursor: date) -> bool:
        start = pattern.start_date
        kind = pattern.recurrence_type

        if kind is RecurrenceType.DAILY:
            return True
        elif kind is RecurrenceType.WEEKLY:
            if pattern.week_days:
                return calmath.day_of_week(cursor) in pattern.week_days
            return calmath.day_of_week(cursor) == calmath.day_of_week(start)
        elif kind is RecurrenceType.MONTHLY:
            assert pattern.monthly_rule is not None  # For type checker
            return pattern.monthly_rule.matches(cursor, start)
        elif kind is RecurrenceType.YEARLY:
            return cursor.month == start.month and cursor.day == start.day

        raise AssertionError(f"Unhandled recurrence type: {kind!r}")

    def _advance(
        self, pattern: RecurrencePattern, cursor: date, qualified: bool, step: int
    ) -> date:
        """Move the cursor to the next candidate date.

        Month and year steps are taken from the start month or start date
        rather than chained, so a clamped short month (Jan 31 -> Feb 29) does
        not pull later months off the anchored day.
        """
        kind = pattern.recurrence_type
        interval = pattern.interval

        if kind is RecurrenceType.DAILY:
            return calmath.add_days(cursor, interval)
        elif kind is RecurrenceType.WEEKLY:
            if pattern.week_days:
                return calmath.add_days(cursor, 1)
            return calmath.add_weeks(cursor, interval)
        elif kind is RecurrenceType.MONTHLY:
            if isinstance(pattern.monthly_rule, NthWeekday):
                if qualified:
                    return calmath.add_months(calmath.start_of_month(cursor), interval)
                return calmath.add_days(cursor, 1)
            if isinstance(pattern.monthly_rule, FixedDay):
                month_start = calmath.add_months(
                    calmath.start_of_month(pattern.start_date), step * interval
                )
                return _clamped_day(month_start, pattern.monthly_rule.day)
            return calmath.add_months(pattern.start_date, step * interval)
        elif kind is RecurrenceType.YEARLY:
            return calmath.add_years(pattern.start_date, step * interval)

        raise AssertionError(f"Unhandled recurrence type: {kind!r}")


def _clamped_day(month_start: date, day: int) -> date:
    """Return ``day`` in the month of ``month_start``, clamped to its length.

    A clamped candidate does not match its fixed day, so the month is skipped.
    """
    return month_start.replace(day=min(day, calmath.days_in_month(month_start)))


def generate(
    pattern: RecurrencePattern,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
    lookahead: relativedelta = DEFAULT_LOOKAHEAD,
) -> tuple[date, ...]:
    """
    Enumerate the dates produced by a recurrence pattern.

    Args:
        pattern: The recurrence pattern to evaluate
        max_occurrences: Maximum number of dates to return (default 50)
        lookahead: Window used when the pattern has no end_date (default 1 year)

    Returns:
        Strictly increasing tuple of dates

    Examples:
        >>> from datetime import date
        >>> from calrecur import RecurrencePattern, generate, TUESDAY
        >>>
        >>> # Second Tuesday of every month in the first half of 2024
        >>> second_tuesday = RecurrencePattern(
        ...     recurrence_type="monthly",
        ...     start_date=date(2024, 1, 1),
        ...     end_date=date(2024, 6, 30),
        ...     week_of_month=2,
        ...     day_of_week=TUESDAY,
        ... )
        >>> generate(second_tuesday)[0]
        datetime.date(2024, 1, 9)
        >>>
        >>> # Every third day, at most ten dates
        >>> every_third = RecurrencePattern(
        ...     recurrence_type="daily", interval=3, start_date=date(2024, 1, 1)
        ... )
        >>> len(generate(every_third, max_occurrences=10))
        10
    """
    engine = RecurrenceEngine(max_occurrences=max_occurrences, lookahead=lookahead)
    return engine.generate(pattern)
