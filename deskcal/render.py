"""Console rendering for deskcal — Rich tables and plain blocks for the CLI.

The calendar and calculator cores return data; everything that decides how
it looks on a terminal lives here.
"""

from __future__ import annotations

import math

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from deskcal.models import MONTH_NAMES, CalculatorState, CalendarDay, DayInfo
from deskcal.yearcal import YearCalendar, weekday

_WEEKDAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _fmt_number(n: float) -> str:
    """Drop a trailing '.0' on whole numbers."""
    if math.isfinite(n) and n == int(n) and abs(n) < 1e15:
        return str(int(n))
    return repr(n)


def short_day(key: CalendarDay, weekday: int) -> str:
    """E.g. 'Sat 06 Jan'."""
    return f"{_WEEKDAY_ABBR[weekday]} {key.day:02d} {MONTH_NAMES[key.month][:3]}"


def leap_status(calendar: YearCalendar) -> str:
    """E.g. 'Year: 2024  Leap year: yes (auto)'."""
    leap = "yes" if calendar.is_leap_year() else "no"
    return f"Year: {calendar.year}  Leap year: {leap} ({calendar.leap_mode.value})"


def render_month(calendar: YearCalendar, month: int, console: Console) -> None:
    grid = calendar.render_month(month)
    console.print(leap_status(calendar), style="dim", highlight=False)
    console.print(grid, markup=False, highlight=False, end="")


def render_day(info: DayInfo, console: Console) -> None:
    console.print(info.long_date, highlight=False)
    console.print(f"Weekday: {info.weekday_name}")
    if info.is_weekend:
        console.print("Day type: [cyan]weekend[/cyan]")
    else:
        console.print("Day type: workday")
    if info.comment:
        console.print(f"Comment: {escape(info.comment)}", highlight=False)
    else:
        console.print("[dim]No comment for this date.[/dim]")


def render_weekends(calendar: YearCalendar, month: int, console: Console) -> None:
    console.print(f"[bold]Weekends in {MONTH_NAMES[month]} {calendar.year}:[/bold]")
    for key in calendar.weekends_of_month(month):
        console.print(short_day(key, weekday(*key)), highlight=False)


def render_comments(calendar: YearCalendar, console: Console) -> None:
    """Rich table of all comments, oldest date first."""
    entries = calendar.sorted_comments()
    if not entries:
        console.print("[yellow]No comments yet.[/yellow]")
        return

    table = Table(
        title=f"Comments {calendar.year}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Date", style="green", min_width=10)
    table.add_column("Comment", min_width=30)

    for entry in entries:
        table.add_row(entry.day.isoformat(), escape(entry.comment))

    console.print()
    console.print(table)
    console.print()


def render_calculator(state: CalculatorState, console: Console) -> None:
    console.print(f"Value: [bold]{_fmt_number(state.value)}[/bold]")
    console.print(f"Memory: {_fmt_number(state.memory)}")
