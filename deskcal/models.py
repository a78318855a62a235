"""Data models for deskcal.

LeapMode enum, CalendarDay, DateComment, DayInfo, CalculatorState and the
error types — all the typed structures that flow through core → export → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import NamedTuple, Optional, Union


class DeskcalError(Exception):
    """Base class for errors raised by the calendar and calculator cores."""


class OutOfRangeError(DeskcalError, ValueError):
    """Month, day, year or operand outside its valid range."""


class InvalidArgumentError(DeskcalError, ValueError):
    """Argument of the right type but unusable (wrong year, empty text, bad token)."""


class LeapMode(str, Enum):
    """Leap-year override for a calendar."""

    AUTO = "auto"
    LEAP = "leap"
    COMMON = "common"


WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

MONTH_NAMES = [
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class CalendarDay(NamedTuple):
    """A date reduced to (year, month, day).

    Not a datetime.date: a forced-leap calendar has a February 29 in years
    where the standard library would refuse to build one.
    """

    year: int
    month: int
    day: int

    @classmethod
    def normalize(cls, value: Union[CalendarDay, date, datetime, tuple]) -> CalendarDay:
        """Drop any time component and return the day key."""
        if isinstance(value, CalendarDay):
            return value
        # datetime is a subclass of date, so this covers both
        if isinstance(value, date):
            return cls(value.year, value.month, value.day)
        if isinstance(value, tuple) and len(value) == 3:
            return cls(*(int(v) for v in value))
        raise InvalidArgumentError(f"Not a date: {value!r}")

    @classmethod
    def parse(cls, text: str) -> CalendarDay:
        """Parse 'YYYY-MM-DD'."""
        parts = text.strip().split("-")
        if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
            raise InvalidArgumentError(f"Invalid date: {text!r} (expected YYYY-MM-DD)")
        return cls(int(parts[0]), int(parts[1]), int(parts[2]))

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class DateComment:
    """One entry of a calendar's comment store, as seen when listing or exporting."""

    day: CalendarDay
    comment: str


@dataclass
class DayInfo:
    """Details for a single day of a calendar."""

    day: CalendarDay
    weekday: int
    is_weekend: bool
    comment: Optional[str] = None

    @property
    def weekday_name(self) -> str:
        return WEEKDAY_NAMES[self.weekday]

    @property
    def long_date(self) -> str:
        """E.g. 'Saturday, 06 January 2024'."""
        return f"{self.weekday_name}, {self.day.day:02d} {MONTH_NAMES[self.day.month]} {self.day.year:04d}"


@dataclass(frozen=True)
class CalculatorState:
    """Current value and memory register of the calculator."""

    value: float = 0.0
    memory: float = 0.0
