"""Tests for pattern summaries and date formatting."""

from datetime import date

from calrecur import (
    FRIDAY,
    LAST,
    RecurrencePattern,
    day_names,
    describe,
    format_date,
    format_display_date,
    generate,
    month_grid,
)


def test_format_date():
    assert format_date(date(2024, 1, 5)) == "2024-01-05"


def test_format_display_date():
    assert format_display_date(date(2024, 1, 5)) == "Jan 05, 2024"
    assert format_display_date(date(2025, 12, 31)) == "Dec 31, 2025"


def test_day_names_sunday_first():
    """Test full and abbreviated weekday names."""
    assert day_names()[0] == "Sunday"
    assert day_names()[6] == "Saturday"
    assert day_names(short=True) == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def test_describe_daily():
    pattern = RecurrencePattern(recurrence_type="daily", start_date=date(2024, 1, 1))
    assert describe(pattern) == "Repeats daily"


def test_describe_weekly_with_days_and_interval():
    """Test weekday names appear in weekday order."""
    pattern = RecurrencePattern(
        recurrence_type="weekly",
        start_date=date(2024, 1, 1),
        interval=2,
        week_days=frozenset({3, 1}),
    )
    assert describe(pattern) == "Repeats every 2 weeks on Monday, Wednesday"


def test_describe_weekly_defaults_to_start_weekday():
    # 2024-01-01 is a Monday
    pattern = RecurrencePattern(recurrence_type="weekly", start_date=date(2024, 1, 1))
    assert describe(pattern) == "Repeats weekly on Monday"


def test_describe_monthly_variants():
    """Test each monthly rule has its own wording."""
    last_friday = RecurrencePattern(
        recurrence_type="monthly",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
        week_of_month=LAST,
        day_of_week=FRIDAY,
    )
    fixed = RecurrencePattern(
        recurrence_type="monthly", start_date=date(2024, 1, 1), month_day=15
    )
    anchored = RecurrencePattern(
        recurrence_type="monthly", start_date=date(2024, 1, 20), interval=3
    )

    assert describe(last_friday) == (
        "Repeats monthly on the last Friday until 2024-12-31"
    )
    assert describe(fixed) == "Repeats monthly on day 15"
    assert describe(anchored) == "Repeats every 3 months on day 20"


def test_describe_yearly():
    pattern = RecurrencePattern(recurrence_type="yearly", start_date=date(2024, 7, 4))
    assert describe(pattern) == "Repeats yearly on July 4"


def test_month_grid_marks_occurrences():
    """Test a Sunday-first grid for February 2024 with one occurrence."""
    pattern = RecurrencePattern(
        recurrence_type="monthly",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 6, 30),
        week_of_month=2,
        day_of_week=2,
    )
    grid = month_grid(2024, 2, generate(pattern))

    # Feb 1 2024 is a Thursday, so the grid opens on Sunday Jan 28
    assert len(grid) == 5
    assert all(len(week) == 7 for week in grid)
    assert grid[0][0] == (date(2024, 1, 28), False)
    assert grid[2][2] == (date(2024, 2, 13), True)
    assert sum(marked for week in grid for _, marked in week) == 1
