"""YearCalendar — one calendar year plus a sparse date → comment store.

All day-of-week arithmetic is done here with a proleptic-Gregorian
congruence; nothing depends on a runtime calendar enumeration.
"""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR
from typing import Optional

from deskcal.models import (
    MONTH_NAMES,
    CalendarDay,
    DateComment,
    DayInfo,
    InvalidArgumentError,
    LeapMode,
    OutOfRangeError,
)

_MONTH_DAYS = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

# Sakamoto's month offsets for the weekday congruence
_MONTH_OFFSETS = [0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4]

SATURDAY = 5
SUNDAY = 6

DAY_HEADER = "Mo Tu We Th Fr Sa Su"
LEGEND = "* weekend, ! has comment"


def is_gregorian_leap(year: int) -> bool:
    """Divisible by 4, and not by 100 unless also by 400."""
    return (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0)


def weekday(year: int, month: int, day: int) -> int:
    """Day of the week, 0=Monday .. 6=Sunday (proleptic Gregorian)."""
    _check_month(month)
    y = year - 1 if month < 3 else year
    sunday_based = (y + y // 4 - y // 100 + y // 400 + _MONTH_OFFSETS[month - 1] + day) % 7
    return (sunday_based + 6) % 7


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise OutOfRangeError(f"Month must be in 1..12, got {month}")


class YearCalendar:
    """In-memory model of a single year with per-day comments."""

    def __init__(self, year: int, leap_mode: LeapMode = LeapMode.AUTO) -> None:
        if not MINYEAR <= year <= MAXYEAR:
            raise OutOfRangeError(f"Year must be in {MINYEAR}..{MAXYEAR}, got {year}")
        self._year = year
        self.leap_mode = LeapMode(leap_mode)
        self._comments: dict[CalendarDay, str] = {}

    def __repr__(self) -> str:
        return f"YearCalendar(year={self._year}, leap_mode={self.leap_mode.value!r}, comments={len(self._comments)})"

    @property
    def year(self) -> int:
        return self._year

    def is_leap_year(self) -> bool:
        if self.leap_mode == LeapMode.LEAP:
            return True
        if self.leap_mode == LeapMode.COMMON:
            return False
        return is_gregorian_leap(self._year)

    def days_in_month(self, month: int) -> int:
        _check_month(month)
        if month == 2 and self.is_leap_year():
            return 29
        return _MONTH_DAYS[month]

    def day(self, month: int, day: int) -> CalendarDay:
        """Validated day key for this calendar's year."""
        days = self.days_in_month(month)
        if not 1 <= day <= days:
            raise OutOfRangeError(f"Day must be in 1..{days} for month {month}, got {day}")
        return CalendarDay(self._year, month, day)

    # ------------------------------------------------------------------
    # Comment store
    # ------------------------------------------------------------------

    def add_comment(self, date, text: str) -> CalendarDay:
        """Store a trimmed comment for a date, replacing any earlier one.

        Args:
            date: datetime.date, datetime.datetime or CalendarDay in this year.
            text: Comment text; surrounding whitespace is dropped.

        Returns:
            The normalized day the comment was stored under.

        Raises:
            InvalidArgumentError: date in another year, or text empty after trimming.
            OutOfRangeError: day does not exist in this calendar (e.g. Feb 29
                with a forced common year).
        """
        key = CalendarDay.normalize(date)
        if key.year != self._year:
            raise InvalidArgumentError(f"Date {key.isoformat()} is not in year {self._year}")
        key = self.day(key.month, key.day)
        comment = (text or "").strip()
        if not comment:
            raise InvalidArgumentError("Comment text must not be empty")
        self._comments[key] = comment
        return key

    def remove_comment(self, date) -> None:
        self._comments.pop(CalendarDay.normalize(date), None)

    def get_comment(self, date) -> Optional[str]:
        return self._comments.get(CalendarDay.normalize(date))

    def list_comments(self) -> list[DateComment]:
        """All comments, in no particular order."""
        return [DateComment(day=k, comment=v) for k, v in self._comments.items()]

    def sorted_comments(self) -> list[DateComment]:
        return sorted(self.list_comments(), key=lambda c: c.day)

    def __len__(self) -> int:
        return len(self._comments)

    # ------------------------------------------------------------------
    # Queries and rendering
    # ------------------------------------------------------------------

    def is_weekend(self, key: CalendarDay) -> bool:
        return weekday(*key) in (SATURDAY, SUNDAY)

    def weekends_of_month(self, month: int) -> list[CalendarDay]:
        days = self.days_in_month(month)
        return [
            CalendarDay(self._year, month, d)
            for d in range(1, days + 1)
            if weekday(self._year, month, d) in (SATURDAY, SUNDAY)
        ]

    def describe_day(self, month: int, day: int) -> DayInfo:
        key = self.day(month, day)
        wd = weekday(*key)
        return DayInfo(
            day=key,
            weekday=wd,
            is_weekend=wd in (SATURDAY, SUNDAY),
            comment=self._comments.get(key),
        )

    def _marker(self, key: CalendarDay) -> str:
        if key in self._comments:
            return "!"
        if self.is_weekend(key):
            return "*"
        return " "

    def render_month(self, month: int) -> str:
        """Monthly grid under a Monday-first header, followed by a legend.

        Each day is a 3-character cell: the day number right-aligned in two
        characters, then '!' (has comment), '*' (weekend) or a space.
        """
        days = self.days_in_month(month)
        start_col = weekday(self._year, month, 1)

        lines = [f"{MONTH_NAMES[month]} {self._year}", DAY_HEADER]
        row = "   " * start_col
        col = start_col
        for d in range(1, days + 1):
            key = CalendarDay(self._year, month, d)
            row += f"{d:>2}{self._marker(key)}"
            col += 1
            # Sunday closes the row
            if col == 7:
                lines.append(row.rstrip())
                row = ""
                col = 0
        if col:
            lines.append(row.rstrip())
        lines.append(LEGEND)
        return "\n".join(lines) + "\n"
