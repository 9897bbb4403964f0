"""Render-ready projection of the picker state that any renderer can consume."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..calendar_math import (
    DAYS_IN_WEEK,
    month_grid,
    weekday_order,
    year_block,
    year_block_end,
)
from ..constraints import (
    DateConstraints,
    is_allowed,
    is_month_allowed,
    is_year_allowed,
    is_year_block_allowed,
)
from ..settings.models import PickerConfig
from ..view_types import MONTH_NAMES, Granularity
from .navigation import DayView, MonthView, View, ViewState, YearBlockView, is_view_supported, shift

logger = logging.getLogger(__name__)

YEAR_COLUMNS = 4
MONTH_COLUMNS = 3


@dataclass(frozen=True)
class Cell:
    """A single year, month or day the renderer draws and the user can click.

    ``value`` is the first day of the represented period: January 1 for a
    year, the 1st for a month, the day itself for a day.
    """

    label: str
    granularity: Granularity
    value: date
    is_disabled: bool = False
    is_selected: bool = False
    is_outside_current_period: bool = False

    @property
    def year(self) -> int:
        return self.value.year

    @property
    def month(self) -> Optional[int]:
        return None if self.granularity == Granularity.YEAR_BLOCK else self.value.month

    @property
    def day(self) -> Optional[int]:
        return self.value.day if self.granularity == Granularity.DAY else None


@dataclass(frozen=True)
class PickerSnapshot:
    """Everything a renderer needs to draw the picker once."""

    granularity: Granularity
    cells: tuple[Cell, ...]
    selected: Optional[date]
    title: str
    columns: int
    column_headers: tuple[str, ...] = ()
    has_previous: bool = True
    has_next: bool = True
    is_open: bool = False

    @property
    def rows(self) -> list[tuple[Cell, ...]]:
        """Cells grouped into rows of ``columns`` cells."""
        return [
            self.cells[i : i + self.columns] for i in range(0, len(self.cells), self.columns)
        ]


def create_title_text(view: View, month_title_format: str = "%b %Y") -> str:
    """Create the text shown as the picker title for a view.

    >>> create_title_text(DayView(1990, 1))
    'Jan 1990'
    >>> create_title_text(MonthView(1990, 1))
    '1990'
    >>> create_title_text(YearBlockView(1980))
    '1980 - 1999'
    """
    if isinstance(view, DayView):
        return date(view.year, view.month, 1).strftime(month_title_format)
    if isinstance(view, MonthView):
        return str(view.year)
    return f"{view.block_start} - {year_block_end(view.block_start)}"


def is_period_navigable(view: View, constraints: DateConstraints) -> bool:
    """Return True if ``view`` is in range and shows at least one allowed date."""
    if not is_view_supported(view):
        return False
    if isinstance(view, DayView):
        return is_month_allowed(view.year, view.month, constraints)
    if isinstance(view, MonthView):
        return is_year_allowed(view.year, constraints)
    return is_year_block_allowed(view.block_start, constraints)


def year_cells(view: YearBlockView, selected: Optional[date], constraints: DateConstraints) -> list[Cell]:
    return [
        Cell(
            label=str(year),
            granularity=Granularity.YEAR_BLOCK,
            value=date(year, 1, 1),
            is_disabled=not is_year_allowed(year, constraints),
            is_selected=selected is not None and selected.year == year,
        )
        for year in year_block(view.block_start)
    ]


def month_cells(view: MonthView, selected: Optional[date], constraints: DateConstraints) -> list[Cell]:
    return [
        Cell(
            label=MONTH_NAMES[month - 1],
            granularity=Granularity.MONTH,
            value=date(view.year, month, 1),
            is_disabled=not is_month_allowed(view.year, month, constraints),
            is_selected=(
                selected is not None and selected.year == view.year and selected.month == month
            ),
        )
        for month in range(1, 13)
    ]


def day_cells(
    view: DayView,
    selected: Optional[date],
    config: PickerConfig,
) -> list[Cell]:
    grid = month_grid(view.year, view.month, config.week_start, config.fixed_weeks)
    return [
        Cell(
            label=str(grid_day.date.day),
            granularity=Granularity.DAY,
            value=grid_day.date,
            is_disabled=not is_allowed(grid_day.date, config.date_constraints),
            is_selected=selected == grid_day.date,
            is_outside_current_period=grid_day.is_outside_month,
        )
        for grid_day in grid
    ]


def build_snapshot(state: ViewState, config: PickerConfig, is_open: bool = False) -> PickerSnapshot:
    """Project a view state into the cells and header data a renderer needs.

    Pure and deterministic: identical state and config give equal snapshots.

    Args:
        state: Current view state
        config: Picker configuration (constraints, week start, title format)
        is_open: Whether the picker dialog is open

    Returns:
        Snapshot of the current view
    """
    view = state.view
    constraints = config.date_constraints
    column_headers: tuple[str, ...] = ()

    if isinstance(view, YearBlockView):
        cells = year_cells(view, state.selected, constraints)
        columns = YEAR_COLUMNS
    elif isinstance(view, MonthView):
        cells = month_cells(view, state.selected, constraints)
        columns = MONTH_COLUMNS
    else:
        cells = day_cells(view, state.selected, config)
        columns = DAYS_IN_WEEK
        column_headers = tuple(day.short_name for day in weekday_order(config.week_start))

    return PickerSnapshot(
        granularity=state.granularity,
        cells=tuple(cells),
        selected=state.selected,
        title=create_title_text(view, config.month_title_format),
        columns=columns,
        column_headers=column_headers,
        has_previous=is_period_navigable(shift(view, -1), constraints),
        has_next=is_period_navigable(shift(view, 1), constraints),
        is_open=is_open,
    )
