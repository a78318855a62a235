"""Environment-driven settings for deskcal commands.

Self-contained — reads os.environ only. Command-line options passed to the
CLI take precedence over these values.

    DESKCAL_HOME   directory for per-year comment stores (default ~/.deskcal)
    DESKCAL_YEAR   default year (default: current year)
    DESKCAL_LEAP   default leap mode: auto, leap or common
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from deskcal.models import InvalidArgumentError, LeapMode


@dataclass
class Settings:
    home: Path
    year: int
    leap_mode: LeapMode = LeapMode.AUTO

    @classmethod
    def from_env(cls, env: Optional[dict[str, str]] = None) -> Settings:
        env = os.environ if env is None else env

        home = Path(env.get("DESKCAL_HOME") or Path.home() / ".deskcal").expanduser()

        raw_year = env.get("DESKCAL_YEAR", "").strip()
        try:
            year = int(raw_year) if raw_year else date.today().year
        except ValueError:
            raise InvalidArgumentError(f"DESKCAL_YEAR is not a year: {raw_year!r}") from None

        raw_leap = env.get("DESKCAL_LEAP", "").strip().lower() or LeapMode.AUTO.value
        try:
            leap_mode = LeapMode(raw_leap)
        except ValueError:
            raise InvalidArgumentError(
                f"DESKCAL_LEAP must be one of auto, leap, common; got {raw_leap!r}"
            ) from None

        return cls(home=home, year=year, leap_mode=leap_mode)

    def store_path(self, year: int) -> Path:
        """Comment store for a year: <home>/comments_<year>.csv."""
        return self.home / f"comments_{year}.csv"


def export_filename(year: int) -> str:
    """Default export file name, written to the current directory."""
    return f"comments_{year}.csv"
