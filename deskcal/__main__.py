"""CLI for deskcal — year calendar with date comments, plus a pocket calculator.

Usage:
    python -m deskcal show 2 --year 2024              # Month grid
    python -m deskcal day 1 6                         # Details for a date
    python -m deskcal addc 3 8 Call the plumber       # Attach a comment
    python -m deskcal clearc 3 8                      # Remove a comment
    python -m deskcal weekends 1                      # Saturdays and Sundays
    python -m deskcal listc                           # All comments
    python -m deskcal export --output notes.csv       # Export comments
    python -m deskcal calc 12 + 30 M+ sqrt            # Calculator key sequence
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from deskcal import calculator
from deskcal.config import Settings, export_filename
from deskcal.export import export_comments, load_into
from deskcal.models import DateComment, DeskcalError, LeapMode
from deskcal.render import (
    render_calculator,
    render_comments,
    render_day,
    render_month,
    render_weekends,
)
from deskcal.yearcal import YearCalendar

app = typer.Typer(
    name="deskcal",
    help="Year calendar with date comments, and a pocket calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_YEAR_HELP = "Calendar year (default: DESKCAL_YEAR or the current year)"
_LEAP_HELP = "Leap-year override: auto, leap, common"
_STORE_HELP = "Comment store file (default: DESKCAL_HOME/comments_<year>.csv)"


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(1)


def _open_calendar(
    year: Optional[int],
    leap: Optional[str],
    store: Optional[Path],
) -> tuple[YearCalendar, Path, list[DateComment]]:
    """Build the calendar for a command and load its stored comments.

    Also returns the stored entries the calendar could not take, so that a
    command rewriting the store writes them back.
    """
    try:
        settings = Settings.from_env()
    except DeskcalError as e:
        _fail(e)

    leap_mode = settings.leap_mode
    if leap:
        try:
            leap_mode = LeapMode(leap.lower())
        except ValueError:
            console.print(f"[red]Invalid leap mode: {escape(leap)}[/red]. Choose: auto, leap, common")
            raise typer.Exit(1)

    year = year if year is not None else settings.year
    try:
        cal = YearCalendar(year, leap_mode=leap_mode)
        store_path = store or settings.store_path(year)
        skipped = load_into(cal, store_path)
    except DeskcalError as e:
        _fail(e)

    hidden = [e for e in skipped if e.day.year == cal.year]
    if hidden:
        console.print(
            f"[yellow]Kept {len(hidden)} stored comment(s) unchanged "
            f"(not in a {cal.leap_mode.value} {cal.year} calendar).[/yellow]"
        )
    return cal, store_path, skipped


@app.command("show")
def cmd_show(
    month: int = typer.Argument(help="Month (1-12)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help=_YEAR_HELP),
    leap: Optional[str] = typer.Option(None, "--leap", help=_LEAP_HELP),
    store: Optional[Path] = typer.Option(None, "--store", help=_STORE_HELP),
) -> None:
    """Show the calendar grid of a month."""
    cal, _, _ = _open_calendar(year, leap, store)
    try:
        render_month(cal, month, out)
    except DeskcalError as e:
        _fail(e)


@app.command("day")
def cmd_day(
    month: int = typer.Argument(help="Month (1-12)"),
    day: int = typer.Argument(help="Day of the month"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help=_YEAR_HELP),
    leap: Optional[str] = typer.Option(None, "--leap", help=_LEAP_HELP),
    store: Optional[Path] = typer.Option(None, "--store", help=_STORE_HELP),
) -> None:
    """Show weekday, day type and comment for a date."""
    cal, _, _ = _open_calendar(year, leap, store)
    try:
        render_day(cal.describe_day(month, day), out)
    except DeskcalError as e:
        _fail(e)


@app.command("addc")
def cmd_addc(
    month: int = typer.Argument(help="Month (1-12)"),
    day: int = typer.Argument(help="Day of the month"),
    text: list[str] = typer.Argument(help="Comment text"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help=_YEAR_HELP),
    leap: Optional[str] = typer.Option(None, "--leap", help=_LEAP_HELP),
    store: Optional[Path] = typer.Option(None, "--store", help=_STORE_HELP),
) -> None:
    """Attach a comment to a date (replaces an existing one)."""
    cal, store_path, skipped = _open_calendar(year, leap, store)
    try:
        key = cal.add_comment(cal.day(month, day), " ".join(text))
        export_comments(cal, store_path, kept=skipped)
    except DeskcalError as e:
        _fail(e)
    console.print(f"Comment added for {key.isoformat()}")


@app.command("clearc")
def cmd_clearc(
    month: int = typer.Argument(help="Month (1-12)"),
    day: int = typer.Argument(help="Day of the month"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help=_YEAR_HELP),
    leap: Optional[str] = typer.Option(None, "--leap", help=_LEAP_HELP),
    store: Optional[Path] = typer.Option(None, "--store", help=_STORE_HELP),
) -> None:
    """Remove the comment of a date, if there is one."""
    cal, store_path, skipped = _open_calendar(year, leap, store)
    try:
        key = cal.day(month, day)
        cal.remove_comment(key)
        export_comments(cal, store_path, kept=skipped)
    except DeskcalError as e:
        _fail(e)
    console.print(f"Comment removed for {key.isoformat()} (if there was one)")


@app.command("weekends")
def cmd_weekends(
    month: int = typer.Argument(help="Month (1-12)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help=_YEAR_HELP),
    leap: Optional[str] = typer.Option(None, "--leap", help=_LEAP_HELP),
) -> None:
    """List the Saturdays and Sundays of a month."""
    cal, _, _ = _open_calendar(year, leap, None)
    try:
        render_weekends(cal, month, out)
    except DeskcalError as e:
        _fail(e)


@app.command("listc")
def cmd_listc(
    year: Optional[int] = typer.Option(None, "--year", "-y", help=_YEAR_HELP),
    store: Optional[Path] = typer.Option(None, "--store", help=_STORE_HELP),
) -> None:
    """List all comments of the year."""
    cal, _, _ = _open_calendar(year, None, store)
    render_comments(cal, out)


@app.command("export")
def cmd_export(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Target file (default: ./comments_<year>.csv)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help=_YEAR_HELP),
    store: Optional[Path] = typer.Option(None, "--store", help=_STORE_HELP),
) -> None:
    """Export all comments of the year to a CSV file."""
    cal, _, skipped = _open_calendar(year, None, store)
    kept = [e for e in skipped if e.day.year == cal.year]
    path = export_comments(cal, output or Path(export_filename(cal.year)), kept=kept)
    console.print(f"Exported {len(cal) + len(kept)} comment(s) to {path}")


@app.command("calc", context_settings={"ignore_unknown_options": True})
def cmd_calc(
    keys: list[str] = typer.Argument(help="Key sequence, e.g. 2 + 3 x^2 M+ (operations: + - * / % 1/x x^2 sqrt M+ M- MR)"),
) -> None:
    """Run a calculator key sequence and show the value and memory."""
    try:
        state = calculator.evaluate(keys)
    except (DeskcalError, ZeroDivisionError) as e:
        _fail(e)
    render_calculator(state, out)


if __name__ == "__main__":
    app()
