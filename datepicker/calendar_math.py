"""Pure calendar calculations: year blocks, month arithmetic and day grids."""

import calendar
from datetime import date, timedelta
from typing import NamedTuple

from .view_types import Weekday

YEARS_IN_BLOCK = 20
DAYS_IN_WEEK = 7
FIXED_GRID_WEEKS = 6

# Navigable range: whole year blocks whose 6-week grids stay inside
# datetime.date's 1..9999 range.
MIN_YEAR = YEARS_IN_BLOCK
MAX_YEAR = 9999 - YEARS_IN_BLOCK


class GridDay(NamedTuple):
    """One slot of a month grid."""

    date: date
    is_outside_month: bool


def is_leap_year(year: int) -> bool:
    """Gregorian rule: divisible by 4, not by 100 unless by 400."""
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year``.

    Raises:
        ValueError: If ``month`` is not within 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1-12, got {month}")
    return calendar.monthrange(year, month)[1]


def year_block_start(year: int) -> int:
    """Return the largest multiple of 20 that is <= ``year``."""
    return year - (year % YEARS_IN_BLOCK)


def year_block_end(year: int) -> int:
    """Return the last year of the block containing ``year``."""
    return year_block_start(year) + YEARS_IN_BLOCK - 1


def year_block(year: int) -> range:
    """Return the 20 consecutive years of the block containing ``year``."""
    start = year_block_start(year)
    return range(start, start + YEARS_IN_BLOCK)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months from (year, month), carrying across years.

    >>> shift_month(2020, 12, 1)
    (2021, 1)
    >>> shift_month(2021, 1, -13)
    (2019, 12)
    """
    new_year, month_index = divmod(year * 12 + (month - 1) + delta, 12)
    return new_year, month_index + 1


def shift_year(year: int, delta: int) -> int:
    return year + delta


def shift_year_block(year: int, delta: int) -> int:
    """Return the first year of the block ``delta`` blocks away from ``year``'s."""
    return year_block_start(year) + delta * YEARS_IN_BLOCK


def first_day_of_month(year: int, month: int) -> date:
    return date(year, month, 1)


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, days_in_month(year, month))


def month_grid(
    year: int,
    month: int,
    week_start: Weekday = Weekday.MONDAY,
    fixed_weeks: bool = True,
) -> list[GridDay]:
    """Return the week-aligned day grid for a month.

    The grid begins on the ``week_start`` day on or before the 1st. With
    ``fixed_weeks`` it always spans 6 weeks (42 days) so the grid height never
    changes; otherwise it ends on the last day of the week on or after the
    month's last day. Days of adjacent months are flagged as outside.

    Args:
        year: Year of the displayed month
        month: Displayed month (1-12)
        week_start: Weekday shown in the first column
        fixed_weeks: Whether to always produce 6 complete weeks

    Returns:
        Ordered list of grid days, a whole number of weeks long
    """
    first = first_day_of_month(year, month)
    offset = (first.weekday() - int(week_start)) % DAYS_IN_WEEK
    grid_start = first - timedelta(days=offset)

    month_length = days_in_month(year, month)
    if fixed_weeks:
        weeks = FIXED_GRID_WEEKS
    else:
        weeks = -(-(offset + month_length) // DAYS_IN_WEEK)

    grid: list[GridDay] = []
    for index in range(weeks * DAYS_IN_WEEK):
        day = grid_start + timedelta(days=index)
        grid.append(GridDay(day, day.month != month))
    return grid


def weekday_order(week_start: Weekday = Weekday.MONDAY) -> list[Weekday]:
    """Return the seven weekdays in grid column order."""
    return [Weekday((int(week_start) + i) % DAYS_IN_WEEK) for i in range(DAYS_IN_WEEK)]


def is_year_supported(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR
