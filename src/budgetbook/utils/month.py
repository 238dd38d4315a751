"""Month key utilities.

Months are handled as explicit (year, month) pairs. The canonical string form
is the zero-padded "YYYY-MM" key, which sorts lexicographically in calendar
order.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, order=True)
class Month:
    """A calendar month."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year must be between 1 and 9999, got {self.year}")

    def __str__(self) -> str:
        return self.key

    @property
    def key(self) -> str:
        """Zero-padded "YYYY-MM" key."""
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        """Human readable label, e.g. "January 2024"."""
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    def shift(self, delta: int) -> "Month":
        """Return the month `delta` months away (negative moves backwards)."""
        index = self.year * 12 + (self.month - 1) + delta
        return Month(year=index // 12, month=index % 12 + 1)

    def first_day(self) -> date:
        """First calendar day of the month."""
        return date(self.year, self.month, 1)

    def next_first_day(self) -> date:
        """First calendar day of the following month."""
        return self.shift(1).first_day()

    def contains(self, day: date) -> bool:
        """Check whether a date falls within this month."""
        return day.year == self.year and day.month == self.month

    @classmethod
    def parse(cls, value: str) -> "Month":
        """Parse a "YYYY-MM" key.

        Raises:
            ValueError: If the key is malformed or out of range
        """
        match = _MONTH_KEY_RE.match(value.strip()) if value else None
        if match is None:
            raise ValueError(f"Invalid month '{value}': expected YYYY-MM")
        return cls(year=int(match.group(1)), month=int(match.group(2)))

    @classmethod
    def of(cls, day: date) -> "Month":
        """Month containing the given date."""
        return cls(year=day.year, month=day.month)

    @classmethod
    def current(cls, today: Optional[date] = None) -> "Month":
        """Month containing today (or the given date)."""
        return cls.of(today or date.today())


def parse_month(value: str) -> Month:
    """Parse a month string.

    Accepts a "YYYY-MM" key or a relative name ("this month", "last month",
    "next month").

    Raises:
        ValueError: If the string cannot be parsed
    """
    normalized = value.strip().lower().replace("-", " ") if value else ""
    relative = {"this month": 0, "last month": -1, "next month": 1}
    if normalized in relative:
        return Month.current().shift(relative[normalized])
    return Month.parse(value)
