from .engine import RecurrenceEngine, generate
from .errors import InvalidPatternError
from .pattern import (
    FixedDay,
    MonthlyRule,
    NthWeekday,
    RecurrencePattern,
    RecurrenceType,
    StartDateAnchored,
)
from .summary import day_names, describe, format_date, format_display_date, month_grid
from .util import (
    FRIDAY,
    LAST,
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    TUESDAY,
    WEDNESDAY,
)

__all__ = [
    "RecurrencePattern",
    "RecurrenceType",
    "RecurrenceEngine",
    "MonthlyRule",
    "NthWeekday",
    "FixedDay",
    "StartDateAnchored",
    "InvalidPatternError",
    "generate",
    "describe",
    "format_date",
    "format_display_date",
    "day_names",
    "month_grid",
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "LAST",
]
