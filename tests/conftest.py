"""Shared test fixtures for the date picker tests."""

import logging
from collections.abc import Generator
from datetime import date

import pytest

from datepicker.constraints import DateConstraints
from datepicker.settings.models import PickerConfig
from datepicker.view_types import Weekday


@pytest.fixture
def weekday_constraints() -> DateConstraints:
    """Weekdays only, between Dec 1 2020 and Dec 14 2022."""
    return DateConstraints(
        min_date=date(2020, 12, 1),
        max_date=date(2022, 12, 14),
        disabled_weekdays={Weekday.SATURDAY, Weekday.SUNDAY},
    )


@pytest.fixture
def holiday_constraints() -> DateConstraints:
    """Christmas holidays and a few more rules, without bounds."""
    return DateConstraints(
        disabled_months={7, 8},
        disabled_years={2021},
        disabled_monthly_dates={13},
        disabled_yearly_dates={(12, 24), (12, 25), (12, 26)},
        disabled_unique_dates={date(2020, 12, 8)},
    )


@pytest.fixture
def day_config(weekday_constraints: DateConstraints) -> PickerConfig:
    """Day selection starting on March 2021."""
    return PickerConfig(
        date_constraints=weekday_constraints,
        starting_date=date(2021, 3, 10),
    )


@pytest.fixture
def reset_picker_logger() -> Generator[logging.Logger, None, None]:
    """Restore the package logger after a test configured it."""
    logger = logging.getLogger("datepicker")
    level = logger.level
    handlers = list(logger.handlers)
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
