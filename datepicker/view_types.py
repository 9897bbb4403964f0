"""Granularity and weekday enumerations shared by the picker modules."""

from enum import IntEnum
from typing import Any


class Granularity(IntEnum):
    """Zoom level of the picker view, ordered from coarsest to finest."""

    YEAR_BLOCK = 1
    MONTH = 2
    DAY = 3

    @classmethod
    def parse(cls, value: Any) -> "Granularity":
        """Convert an enum member, number or name into a Granularity.

        Accepts the member names in any case plus the common aliases
        ``"years"``, ``"yearblock"``, ``"months"`` and ``"days"``.

        Raises:
            ValueError: If the value does not name a granularity
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            member = _GRANULARITY_ALIASES.get(key)
            if member is not None:
                return member
        raise ValueError(f"Unknown granularity: {value!r}")


_GRANULARITY_ALIASES = {
    "year_block": Granularity.YEAR_BLOCK,
    "yearblock": Granularity.YEAR_BLOCK,
    "years": Granularity.YEAR_BLOCK,
    "year": Granularity.YEAR_BLOCK,
    "month": Granularity.MONTH,
    "months": Granularity.MONTH,
    "day": Granularity.DAY,
    "days": Granularity.DAY,
}


class Weekday(IntEnum):
    """Day of the week, numbered like ``datetime.date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def short_name(self) -> str:
        return WEEKDAY_ABBR[self.value]

    @classmethod
    def parse(cls, value: Any) -> "Weekday":
        """Convert a number (0=Monday) or an English name/abbreviation.

        Raises:
            ValueError: If the value does not name a weekday
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            key = value.strip().lower()[:3]
            for member in cls:
                if member.name.lower().startswith(key) and len(key) == 3:
                    return member
        raise ValueError(f"Unknown weekday: {value!r}")


WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Fixed English labels; calendar.month_name follows the process locale.
MONTH_NAMES = (
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
)


def parse_month(value: Any) -> int:
    """Convert a month number (1-12) or English month name into its number.

    Raises:
        ValueError: If the value does not identify a month
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if 1 <= value <= 12:
            return value
        raise ValueError(f"Month out of range: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return parse_month(int(text))
        key = text.lower()[:3]
        for number, name in enumerate(MONTH_NAMES, start=1):
            if len(key) == 3 and name.lower().startswith(key):
                return number
    raise ValueError(f"Unknown month: {value!r}")
