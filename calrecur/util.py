"""Utility constants and defaults for calrecur.

Weekday integers follow the Sunday-first convention (0=Sunday .. 6=Saturday).
These are used throughout the API for consistent weekday representation.
"""

from dateutil.relativedelta import relativedelta

# Weekday constants (0=Sunday)
SUNDAY = 0
MONDAY = 1
TUESDAY = 2
WEDNESDAY = 3
THURSDAY = 4
FRIDAY = 5
SATURDAY = 6

# Week-of-month value meaning "last occurrence in the month"
LAST = 5

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

WEEK_NAMES = {1: "first", 2: "second", 3: "third", 4: "fourth", LAST: "last"}

# Generation defaults
DEFAULT_MAX_OCCURRENCES = 50
DEFAULT_LOOKAHEAD = relativedelta(years=1)
