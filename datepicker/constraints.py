"""
Date constraints: an immutable rule set and the pure predicates over it.

A candidate date is allowed when none of the eight exclusion rules matches:
the inclusive minimum and maximum bounds, disabled weekdays, months, years,
days of month, yearly (month, day) dates and exact unique dates. The rules are
independent of each other, so a date failing any single one is disabled.

Month, year and year-block cells are allowed as soon as one of their days is.
"""

import logging
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .calendar_math import days_in_month, year_block
from .exceptions import ConfigError
from .view_types import Granularity, Weekday, parse_month

logger = logging.getLogger(__name__)

# Leap year used to validate (month, day) pairs so that Feb 29 is accepted.
_REFERENCE_LEAP_YEAR = 2000


class DateConstraints(BaseModel):
    """Immutable set of rules that forbid dates from being selected.

    Attributes:
        min_date: Earliest selectable date (inclusive)
        max_date: Latest selectable date (inclusive)
        disabled_weekdays: Weekdays that can never be selected
        disabled_months: Month numbers (1-12) disabled in every year
        disabled_years: Years disabled entirely
        disabled_monthly_dates: Days of month (1-31) disabled in every month
        disabled_yearly_dates: (month, day) pairs disabled in every year
        disabled_unique_dates: Exact dates that are disabled

    Example:
        >>> weekends = DateConstraints(
        ...     disabled_weekdays={Weekday.SATURDAY, Weekday.SUNDAY},
        ...     min_date=date(2020, 12, 1),
        ... )
        >>> weekends.is_allowed(date(2020, 12, 7))
        True
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    min_date: Optional[date] = Field(default=None, alias="minDate")
    max_date: Optional[date] = Field(default=None, alias="maxDate")
    disabled_weekdays: frozenset[Weekday] = Field(
        default_factory=frozenset, alias="disabledWeekdays"
    )
    disabled_months: frozenset[int] = Field(default_factory=frozenset, alias="disabledMonths")
    disabled_years: frozenset[int] = Field(default_factory=frozenset, alias="disabledYears")
    disabled_monthly_dates: frozenset[int] = Field(
        default_factory=frozenset, alias="disabledMonthlyDates"
    )
    disabled_yearly_dates: frozenset[tuple[int, int]] = Field(
        default_factory=frozenset, alias="disabledYearlyDates"
    )
    disabled_unique_dates: frozenset[date] = Field(
        default_factory=frozenset, alias="disabledUniqueDates"
    )

    @field_validator("disabled_weekdays", mode="before")
    @classmethod
    def parse_weekdays(cls, v: Any) -> frozenset[Weekday]:
        """Accept weekday numbers (0=Monday) or English names.

        Raises:
            ConfigError: If an entry does not identify a weekday
        """
        weekdays = set()
        for item in _as_collection(v, "disabled_weekdays"):
            try:
                weekdays.add(Weekday.parse(item))
            except ValueError as e:
                raise ConfigError(
                    f"Invalid weekday: {item!r}",
                    field_name="disabled_weekdays",
                    field_value=item,
                    validation_errors=[str(e)],
                ) from e
        return frozenset(weekdays)

    @field_validator("disabled_months", mode="before")
    @classmethod
    def parse_months(cls, v: Any) -> frozenset[int]:
        months = set()
        for item in _as_collection(v, "disabled_months"):
            try:
                months.add(parse_month(item))
            except ValueError as e:
                raise ConfigError(
                    f"Invalid month: {item!r}",
                    field_name="disabled_months",
                    field_value=item,
                    validation_errors=[str(e)],
                ) from e
        return frozenset(months)

    @field_validator("disabled_years", mode="before")
    @classmethod
    def parse_years(cls, v: Any) -> frozenset[int]:
        years = set()
        for item in _as_collection(v, "disabled_years"):
            years.add(_as_int(item, "disabled_years"))
        return frozenset(years)

    @field_validator("disabled_monthly_dates", mode="before")
    @classmethod
    def parse_monthly_dates(cls, v: Any) -> frozenset[int]:
        """Validate days of month.

        Raises:
            ConfigError: If a day is outside 1-31
        """
        days = set()
        for item in _as_collection(v, "disabled_monthly_dates"):
            day = _as_int(item, "disabled_monthly_dates")
            if not 1 <= day <= 31:
                raise ConfigError(
                    f"Day of month out of range: {day}",
                    field_name="disabled_monthly_dates",
                    field_value=item,
                )
            days.add(day)
        return frozenset(days)

    @field_validator("disabled_yearly_dates", mode="before")
    @classmethod
    def parse_yearly_dates(cls, v: Any) -> frozenset[tuple[int, int]]:
        """Normalize yearly dates into (month, day) pairs.

        Entries may be ``(month, day)`` pairs, ``"MM-DD"`` strings or ``date``
        objects whose year is ignored.

        Raises:
            ConfigError: If an entry is not a valid calendar day
        """
        pairs = set()
        for item in _as_collection(v, "disabled_yearly_dates"):
            pairs.add(_as_month_day(item))
        return frozenset(pairs)

    @model_validator(mode="after")
    def validate_bounds(self) -> "DateConstraints":
        """Reject inverted bounds.

        Raises:
            ConfigError: If min_date is later than max_date
        """
        if self.min_date is not None and self.max_date is not None:
            if self.min_date > self.max_date:
                raise ConfigError(
                    "min_date must be earlier or exactly at max_date",
                    field_name="min_date",
                    field_value=self.min_date,
                    details={"max_date": str(self.max_date)},
                )
        return self

    def is_allowed(self, candidate: date) -> bool:
        return is_allowed(candidate, self)

    @property
    def is_unconstrained(self) -> bool:
        """True when no rule is configured at all."""
        return not (
            self.min_date
            or self.max_date
            or self.disabled_weekdays
            or self.disabled_months
            or self.disabled_years
            or self.disabled_monthly_dates
            or self.disabled_yearly_dates
            or self.disabled_unique_dates
        )


def _as_collection(value: Any, field_name: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, date)) or not hasattr(value, "__iter__"):
        raise ConfigError(
            f"{field_name} must be a collection",
            field_name=field_name,
            field_value=value,
        )
    return list(value)


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Expected an integer in {field_name}", field_name, value)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"Expected an integer in {field_name}",
            field_name=field_name,
            field_value=value,
            validation_errors=[str(e)],
        ) from e


def _as_month_day(item: Any) -> tuple[int, int]:
    if isinstance(item, date):
        month, day = item.month, item.day
    elif isinstance(item, str):
        parts = item.strip().split("-")
        if len(parts) != 2:
            raise ConfigError(
                f"Yearly date must look like MM-DD: {item!r}",
                field_name="disabled_yearly_dates",
                field_value=item,
            )
        month = _as_int(parts[0], "disabled_yearly_dates")
        day = _as_int(parts[1], "disabled_yearly_dates")
    else:
        pair = list(item) if hasattr(item, "__iter__") else []
        if len(pair) != 2:
            raise ConfigError(
                f"Yearly date must be a (month, day) pair: {item!r}",
                field_name="disabled_yearly_dates",
                field_value=item,
            )
        month = _as_int(pair[0], "disabled_yearly_dates")
        day = _as_int(pair[1], "disabled_yearly_dates")

    if not 1 <= month <= 12 or not 1 <= day <= days_in_month(_REFERENCE_LEAP_YEAR, month):
        raise ConfigError(
            f"Invalid yearly date: month={month}, day={day}",
            field_name="disabled_yearly_dates",
            field_value=item,
        )
    return month, day


def matching_rules(candidate: date, constraints: DateConstraints) -> list[str]:
    """Return the name of every rule that excludes ``candidate``.

    Each rule is evaluated on its own; an empty list means the date is allowed.
    """
    rules = []
    if constraints.min_date is not None and candidate < constraints.min_date:
        rules.append("min_date")
    if constraints.max_date is not None and candidate > constraints.max_date:
        rules.append("max_date")
    if candidate.weekday() in constraints.disabled_weekdays:
        rules.append("disabled_weekdays")
    if candidate.month in constraints.disabled_months:
        rules.append("disabled_months")
    if candidate.year in constraints.disabled_years:
        rules.append("disabled_years")
    if candidate.day in constraints.disabled_monthly_dates:
        rules.append("disabled_monthly_dates")
    if (candidate.month, candidate.day) in constraints.disabled_yearly_dates:
        rules.append("disabled_yearly_dates")
    if candidate in constraints.disabled_unique_dates:
        rules.append("disabled_unique_dates")
    return rules


def is_allowed(candidate: date, constraints: DateConstraints) -> bool:
    """Return True if no constraint rule forbids ``candidate``."""
    return not (
        (constraints.min_date is not None and candidate < constraints.min_date)
        or (constraints.max_date is not None and candidate > constraints.max_date)
        or candidate.weekday() in constraints.disabled_weekdays
        or candidate.month in constraints.disabled_months
        or candidate.year in constraints.disabled_years
        or candidate.day in constraints.disabled_monthly_dates
        or (candidate.month, candidate.day) in constraints.disabled_yearly_dates
        or candidate in constraints.disabled_unique_dates
    )


def is_month_allowed(year: int, month: int, constraints: DateConstraints) -> bool:
    """Return True if at least one day of the month can be selected."""
    if year in constraints.disabled_years or month in constraints.disabled_months:
        return False
    month_length = days_in_month(year, month)
    first = date(year, month, 1)
    last = date(year, month, month_length)
    if constraints.min_date is not None and last < constraints.min_date:
        return False
    if constraints.max_date is not None and first > constraints.max_date:
        return False
    if constraints.is_unconstrained:
        return True
    return any(
        is_allowed(date(year, month, day), constraints) for day in range(1, month_length + 1)
    )


def is_year_allowed(year: int, constraints: DateConstraints) -> bool:
    """Return True if at least one month of the year can be selected."""
    if year in constraints.disabled_years:
        return False
    if constraints.min_date is not None and year < constraints.min_date.year:
        return False
    if constraints.max_date is not None and year > constraints.max_date.year:
        return False
    return any(is_month_allowed(year, month, constraints) for month in range(1, 13))


def is_year_block_allowed(year: int, constraints: DateConstraints) -> bool:
    """Return True if any year of the 20-year block containing ``year`` is allowed."""
    return any(is_year_allowed(y, constraints) for y in year_block(year))


def is_period_allowed(
    period_start: date, granularity: Granularity, constraints: DateConstraints
) -> bool:
    """Check the period beginning at ``period_start`` at the given granularity.

    A YEAR_BLOCK granularity checks the single year of ``period_start``, which
    is what a year cell selects.
    """
    if granularity == Granularity.DAY:
        allowed = is_allowed(period_start, constraints)
        if not allowed:
            logger.debug(
                f"{period_start} forbidden by {', '.join(matching_rules(period_start, constraints))}"
            )
        return allowed
    if granularity == Granularity.MONTH:
        return is_month_allowed(period_start.year, period_start.month, constraints)
    return is_year_allowed(period_start.year, constraints)
