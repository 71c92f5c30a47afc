"""Recurrence patterns: the immutable input to the recurrence engine.

A pattern is built once by the caller, validated on construction, and then
evaluated on demand. Monthly patterns resolve their matching rule at
construction time into one of three explicit variants:

- ``NthWeekday``: "the 2nd Tuesday", "the last Friday"
- ``FixedDay``: "the 15th of every month"
- ``StartDateAnchored``: "the same day of the month as the start date"
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from dateutil.parser import isoparse
from typing_extensions import override

from calrecur import calmath
from calrecur.errors import InvalidPatternError
from calrecur.util import DAY_NAMES, LAST


class RecurrenceType(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class MonthlyRule(ABC):
    """How a monthly pattern picks its day within each month."""

    @abstractmethod
    def matches(self, day: date, start: date) -> bool:
        """Return True if ``day`` is this rule's day in its month."""
        pass


@dataclass(frozen=True)
class NthWeekday(MonthlyRule):
    week: int
    weekday: int

    @override
    def matches(self, day: date, start: date) -> bool:
        return calmath.is_nth_weekday_of_month(day, self.week, self.weekday)


@dataclass(frozen=True)
class FixedDay(MonthlyRule):
    day: int

    @override
    def matches(self, day: date, start: date) -> bool:
        return calmath.day_of_month(day) == self.day


@dataclass(frozen=True)
class StartDateAnchored(MonthlyRule):
    @override
    def matches(self, day: date, start: date) -> bool:
        return calmath.day_of_month(day) == calmath.day_of_month(start)


# Collaborator config keys (camelCase) mapped to field names
_CONFIG_KEYS = {
    "recurrenceType": "recurrence_type",
    "interval": "interval",
    "startDate": "start_date",
    "endDate": "end_date",
    "weekDays": "week_days",
    "monthDay": "month_day",
    "weekOfMonth": "week_of_month",
    "dayOfWeek": "day_of_week",
}


def _coerce_date(value: Any, name: str) -> date:
    if isinstance(value, str):
        try:
            value = isoparse(value)
        except ValueError as e:
            raise InvalidPatternError(
                f"{name} must be an ISO-8601 date, got {value!r}.\n"
                f"Example: {name}='2024-01-15'"
            ) from e
    if not isinstance(value, date):
        raise InvalidPatternError(
            f"{name} must be a date, got {type(value).__name__!r}: {value!r}"
        )
    return calmath.start_of_day(value)


def _coerce_int(value: Any, name: str) -> int:
    # Form input often arrives as strings such as "2"
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise InvalidPatternError(
                f"{name} must be an integer, got {value!r}"
            ) from e
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPatternError(
            f"{name} must be an integer, got {type(value).__name__!r}: {value!r}"
        )
    return value


def _check_weekday(value: int, name: str) -> None:
    if not 0 <= value <= 6:
        raise InvalidPatternError(
            f"{name} must be in range [0, 6] (0=Sunday), got {value}.\n"
            f"Valid days: "
            + ", ".join(f"{i}={n}" for i, n in enumerate(DAY_NAMES))
        )


@dataclass(frozen=True, kw_only=True)
class RecurrencePattern:
    """A repeating calendar pattern.

    Attributes:
        recurrence_type: daily, weekly, monthly or yearly
        interval: Repeat every N units (>= 1)
        start_date: First candidate date and anchor for all matching rules
        end_date: Last candidate date, or None for the engine's lookahead
        week_days: Weekly only; weekdays to repeat on (0=Sunday). Empty means
            the start date's weekday
        month_day: Monthly only; fixed day of month (1-31)
        week_of_month: Monthly only; 1-4, or 5 for the last occurrence
        day_of_week: Monthly only; required together with week_of_month
    """

    recurrence_type: RecurrenceType
    start_date: date
    interval: int = 1
    end_date: date | None = None
    week_days: frozenset[int] = frozenset()
    month_day: int | None = None
    week_of_month: int | None = None
    day_of_week: int | None = None
    monthly_rule: MonthlyRule | None = field(init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            recurrence_type = RecurrenceType(self.recurrence_type)
        except ValueError as e:
            valid = ", ".join(t.value for t in RecurrenceType)
            raise InvalidPatternError(
                f"Unrecognized recurrence_type: {self.recurrence_type!r}\n"
                f"Valid types: {valid}"
            ) from e
        object.__setattr__(self, "recurrence_type", recurrence_type)

        start = _coerce_date(self.start_date, "start_date")
        object.__setattr__(self, "start_date", start)
        if self.end_date is not None:
            end = _coerce_date(self.end_date, "end_date")
            if end < start:
                raise InvalidPatternError(
                    f"end_date ({end}) must be on or after start_date ({start})"
                )
            object.__setattr__(self, "end_date", end)

        for name in ("interval", "month_day", "week_of_month", "day_of_week"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _coerce_int(value, name))

        if self.interval < 1:
            raise InvalidPatternError(
                f"interval must be >= 1, got {self.interval}.\n"
                f"Example: interval=2 for every other week"
            )

        try:
            entries = list(self.week_days)
        except TypeError as e:
            raise InvalidPatternError(
                f"week_days must be a collection of weekdays, got {self.week_days!r}"
            ) from e
        week_days = frozenset(_coerce_int(wd, "week_days entry") for wd in entries)
        for wd in week_days:
            _check_weekday(wd, "week_days entry")
        object.__setattr__(self, "week_days", week_days)

        if self.month_day is not None and not 1 <= self.month_day <= 31:
            raise InvalidPatternError(
                f"month_day must be in range [1, 31], got {self.month_day}"
            )
        if (self.week_of_month is None) != (self.day_of_week is None):
            raise InvalidPatternError(
                f"week_of_month and day_of_week must be given together.\n"
                f"Got week_of_month={self.week_of_month}, "
                f"day_of_week={self.day_of_week}\n"
                f"Example: week_of_month=2, day_of_week=2 for the 2nd Tuesday"
            )
        if self.week_of_month is not None and not 1 <= self.week_of_month <= LAST:
            raise InvalidPatternError(
                f"week_of_month must be in range [1, {LAST}] "
                f"({LAST}=last), got {self.week_of_month}"
            )
        if self.day_of_week is not None:
            _check_weekday(self.day_of_week, "day_of_week")

        object.__setattr__(self, "monthly_rule", self._resolve_monthly_rule())

    def _resolve_monthly_rule(self) -> MonthlyRule | None:
        if self.recurrence_type is not RecurrenceType.MONTHLY:
            return None
        if self.week_of_month is not None and self.day_of_week is not None:
            return NthWeekday(self.week_of_month, self.day_of_week)
        if self.month_day is not None:
            return FixedDay(self.month_day)
        return StartDateAnchored()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "RecurrencePattern":
        """Build a pattern from a collaborator's config mapping.

        Accepts camelCase keys (``recurrenceType``, ``startDate``, ...) or the
        snake_case field names. ``None`` values mean the field is absent and
        date values may be ISO-8601 strings.

        Example:
            >>> RecurrencePattern.from_config({
            ...     "recurrenceType": "monthly",
            ...     "startDate": "2024-01-01",
            ...     "weekOfMonth": 2,
            ...     "dayOfWeek": 2,
            ... })
        """
        kwargs: dict[str, Any] = {}
        for key, value in config.items():
            name = _CONFIG_KEYS.get(key, key)
            if name not in _CONFIG_KEYS.values():
                valid = ", ".join(_CONFIG_KEYS)
                raise InvalidPatternError(
                    f"Unknown pattern field: {key!r}\nValid fields: {valid}"
                )
            if value is None:
                continue
            kwargs[name] = value

        if "recurrence_type" not in kwargs or "start_date" not in kwargs:
            raise InvalidPatternError(
                "Pattern config requires recurrenceType and startDate.\n"
                "Example: {'recurrenceType': 'daily', 'startDate': '2024-01-01'}"
            )
        return cls(**kwargs)
