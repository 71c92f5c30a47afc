"""Command-line interface for calrecur."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from calrecur.engine import generate
from calrecur.errors import InvalidPatternError
from calrecur.pattern import RecurrencePattern, RecurrenceType
from calrecur.summary import (
    day_names,
    describe,
    format_date,
    format_display_date,
    month_grid,
)
from calrecur.util import DEFAULT_MAX_OCCURRENCES

app = typer.Typer(
    name="calrecur",
    help="Enumerate the dates produced by a recurring calendar pattern",
    add_completion=False,
)

_DATE_FORMATS = ["%Y-%m-%d"]

StartArg = Annotated[
    datetime,
    typer.Argument(formats=_DATE_FORMATS, help="First date of the pattern"),
]
TypeOpt = Annotated[
    RecurrenceType, typer.Option("--type", "-t", help="Recurrence type")
]
IntervalOpt = Annotated[
    int, typer.Option("--interval", "-i", help="Repeat every N units")
]
EndOpt = Annotated[
    Optional[datetime],
    typer.Option("--end", "-e", formats=_DATE_FORMATS, help="Last date (inclusive)"),
]
WeekdayOpt = Annotated[
    Optional[list[int]],
    typer.Option("--weekday", "-w", help="Weekly: weekday to repeat on (0=Sunday)"),
]
MonthDayOpt = Annotated[
    Optional[int], typer.Option("--month-day", help="Monthly: fixed day of month")
]
WeekOfMonthOpt = Annotated[
    Optional[int],
    typer.Option("--week-of-month", help="Monthly: 1-4, or 5 for last"),
]
DayOfWeekOpt = Annotated[
    Optional[int],
    typer.Option("--day-of-week", help="Monthly: weekday for --week-of-month"),
]
MaxOpt = Annotated[
    int, typer.Option("--max", "-n", help="Maximum number of occurrences")
]


def _build_pattern(
    start: datetime,
    recurrence_type: RecurrenceType,
    interval: int,
    end: datetime | None,
    weekday: list[int] | None,
    month_day: int | None,
    week_of_month: int | None,
    day_of_week: int | None,
) -> RecurrencePattern:
    try:
        return RecurrencePattern(
            recurrence_type=recurrence_type,
            start_date=start,
            interval=interval,
            end_date=end,
            week_days=frozenset(weekday or ()),
            month_day=month_day,
            week_of_month=week_of_month,
            day_of_week=day_of_week,
        )
    except InvalidPatternError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command(name="dates")
def dates_cmd(
    start: StartArg,
    recurrence_type: TypeOpt = RecurrenceType.DAILY,
    interval: IntervalOpt = 1,
    end: EndOpt = None,
    weekday: WeekdayOpt = None,
    month_day: MonthDayOpt = None,
    week_of_month: WeekOfMonthOpt = None,
    day_of_week: DayOfWeekOpt = None,
    max_occurrences: MaxOpt = DEFAULT_MAX_OCCURRENCES,
    display: Annotated[
        bool, typer.Option("--display", help="Print dates as 'Jan 05, 2024'")
    ] = False,
) -> None:
    """Print each occurrence on its own line."""
    pattern = _build_pattern(
        start, recurrence_type, interval, end, weekday,
        month_day, week_of_month, day_of_week,
    )
    fmt = format_display_date if display else format_date
    for occurrence in generate(pattern, max_occurrences=max_occurrences):
        typer.echo(fmt(occurrence))


@app.command(name="describe")
def describe_cmd(
    start: StartArg,
    recurrence_type: TypeOpt = RecurrenceType.DAILY,
    interval: IntervalOpt = 1,
    end: EndOpt = None,
    weekday: WeekdayOpt = None,
    month_day: MonthDayOpt = None,
    week_of_month: WeekOfMonthOpt = None,
    day_of_week: DayOfWeekOpt = None,
    max_occurrences: MaxOpt = DEFAULT_MAX_OCCURRENCES,
) -> None:
    """Summarize the pattern and count its occurrences."""
    pattern = _build_pattern(
        start, recurrence_type, interval, end, weekday,
        month_day, week_of_month, day_of_week,
    )
    count = len(generate(pattern, max_occurrences=max_occurrences))
    typer.echo(describe(pattern))
    plural = "" if count == 1 else "s"
    typer.echo(f"This pattern will generate {count} occurrence{plural}.")


@app.command(name="preview")
def preview_cmd(
    start: StartArg,
    recurrence_type: TypeOpt = RecurrenceType.DAILY,
    interval: IntervalOpt = 1,
    end: EndOpt = None,
    weekday: WeekdayOpt = None,
    month_day: MonthDayOpt = None,
    week_of_month: WeekOfMonthOpt = None,
    day_of_week: DayOfWeekOpt = None,
    max_occurrences: MaxOpt = DEFAULT_MAX_OCCURRENCES,
    month: Annotated[
        Optional[datetime],
        typer.Option(
            "--month", "-m", formats=["%Y-%m"], help="Month to show (default: start)"
        ),
    ] = None,
) -> None:
    """Print a month calendar with occurrences marked by '*'."""
    pattern = _build_pattern(
        start, recurrence_type, interval, end, weekday,
        month_day, week_of_month, day_of_week,
    )
    shown = month or start
    occurrences = generate(pattern, max_occurrences=max_occurrences)

    typer.echo(shown.strftime("%B %Y"))
    typer.echo(" ".join(f"{name:>3}" for name in day_names(short=True)))
    for week in month_grid(shown.year, shown.month, occurrences):
        cells = []
        for day, marked in week:
            if day.month != shown.month:
                cells.append("   ")
            else:
                cells.append(f"{day.day:>2}{'*' if marked else ' '}")
        typer.echo(" ".join(cells).rstrip())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
