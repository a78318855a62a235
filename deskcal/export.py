"""Comment export sink — writes and re-reads the delimited comments file.

File format (UTF-8):

    Date,Comment
    "2024-01-06","Dentist"
    "2024-03-08","Say ""hi"" to Mum"

Every field is quoted and embedded quotes are doubled. The same file is
re-read with the csv module, so exported comments survive between runs.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from deskcal.models import CalendarDay, DateComment, DeskcalError, InvalidArgumentError
from deskcal.yearcal import YearCalendar

HEADER = "Date,Comment"


def format_comment_line(entry: DateComment) -> str:
    """Render one comment as a quoted CSV line (no trailing newline)."""
    escaped = entry.comment.replace('"', '""')
    return f'"{entry.day.isoformat()}","{escaped}"'


def export_comments(
    calendar: YearCalendar,
    path: Path,
    kept: Iterable[DateComment] = (),
) -> Path:
    """Write all comments of a calendar to path, sorted by date ascending.

    Entries in kept (typically those load_into could not place in the
    calendar) are written back unchanged unless the calendar now holds a
    comment for the same day.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    entries = calendar.list_comments()
    taken = {e.day for e in entries}
    entries += [e for e in kept if e.day not in taken]
    entries.sort(key=lambda e: e.day)
    lines = [HEADER] + [format_comment_line(c) for c in entries]
    # newline="" keeps line breaks inside quoted comments untranslated
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write("\n".join(lines) + "\n")
    return path


def read_comments(path: Path) -> list[DateComment]:
    """Parse a file written by export_comments.

    Returns an empty list if the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        return []

    entries: list[DateComment] = []
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        for lineno, row in enumerate(reader, 1):
            if not row:
                continue
            if lineno == 1 and ",".join(row) == HEADER:
                continue
            if len(row) != 2:
                raise InvalidArgumentError(f"{path}:{lineno}: expected 2 fields, got {len(row)}")
            entries.append(DateComment(day=CalendarDay.parse(row[0]), comment=row[1]))
    return entries


def load_into(calendar: YearCalendar, path: Path) -> list[DateComment]:
    """Add the comments stored in path to calendar.

    Entries for other years, or for days the calendar does not have (Feb 29
    with a forced common year), are not added. They are returned so that a
    caller rewriting the file can pass them back to export_comments.
    """
    skipped: list[DateComment] = []
    for entry in read_comments(path):
        if entry.day.year != calendar.year:
            skipped.append(entry)
            continue
        try:
            calendar.add_comment(entry.day, entry.comment)
        except DeskcalError:
            skipped.append(entry)
    return skipped
