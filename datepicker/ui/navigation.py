"""Navigation state management for year-block / month / day browsing."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, ClassVar, List, Optional, Union

from ..calendar_math import (
    MAX_YEAR,
    MIN_YEAR,
    YEARS_IN_BLOCK,
    is_year_supported,
    shift_month,
    shift_year,
    shift_year_block,
    year_block_start,
)
from ..view_types import Granularity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearBlockView:
    """Twenty consecutive years starting at a multiple of 20."""

    block_start: int
    granularity: ClassVar[Granularity] = Granularity.YEAR_BLOCK

    def __post_init__(self) -> None:
        if self.block_start % YEARS_IN_BLOCK:
            raise ValueError(f"block_start must be a multiple of {YEARS_IN_BLOCK}")


@dataclass(frozen=True)
class MonthView:
    """The twelve months of ``year``; ``month`` is the month last looked at."""

    year: int
    month: int = 1
    granularity: ClassVar[Granularity] = Granularity.MONTH


@dataclass(frozen=True)
class DayView:
    """The day grid of ``month`` in ``year``."""

    year: int
    month: int
    granularity: ClassVar[Granularity] = Granularity.DAY


View = Union[YearBlockView, MonthView, DayView]


def view_for(granularity: Granularity, anchor: date) -> View:
    """Return the view of the given granularity that contains ``anchor``."""
    if granularity == Granularity.YEAR_BLOCK:
        return YearBlockView(year_block_start(anchor.year))
    if granularity == Granularity.MONTH:
        return MonthView(anchor.year, anchor.month)
    return DayView(anchor.year, anchor.month)


def zoom_out(view: View) -> View:
    """Title-click transition: Day -> Month -> YearBlock, YearBlock stays."""
    if isinstance(view, DayView):
        return MonthView(view.year, view.month)
    if isinstance(view, MonthView):
        return YearBlockView(year_block_start(view.year))
    return view


def drill_down(view: View, period_start: date) -> View:
    """Cell-click transition for a non-terminal click.

    A year opens its months (January is the default anchor month, the year
    block keeps no month), a month opens its day grid. A day has nothing
    finer, so the view is returned unchanged.
    """
    if isinstance(view, YearBlockView):
        return MonthView(period_start.year, 1)
    if isinstance(view, MonthView):
        return DayView(view.year, period_start.month)
    return view


def shift(view: View, delta: int) -> View:
    """Move ``delta`` periods: months in Day view, years in Month view, blocks in YearBlock view."""
    if isinstance(view, DayView):
        year, month = shift_month(view.year, view.month, delta)
        return DayView(year, month)
    if isinstance(view, MonthView):
        return MonthView(shift_year(view.year, delta), view.month)
    return YearBlockView(shift_year_block(view.block_start, delta))


def is_view_supported(view: View) -> bool:
    """Return True if every year displayed by ``view`` is navigable."""
    if isinstance(view, YearBlockView):
        return MIN_YEAR <= view.block_start and view.block_start + YEARS_IN_BLOCK - 1 <= MAX_YEAR
    return is_year_supported(view.year)


@dataclass(frozen=True)
class ViewState:
    """The displayed view plus the selected date, as one immutable value."""

    view: View
    selected: Optional[date] = None

    @property
    def granularity(self) -> Granularity:
        return self.view.granularity

    @property
    def anchor_year(self) -> int:
        if isinstance(self.view, YearBlockView):
            return self.view.block_start
        return self.view.year

    @property
    def anchor_month(self) -> Optional[int]:
        """Displayed month, or None for the year block which carries none."""
        if isinstance(self.view, YearBlockView):
            return None
        return self.view.month


class NavigationState:
    """Manages the displayed view, the selected date and the dialog visibility."""

    def __init__(
        self,
        view: View,
        selected: Optional[date] = None,
        is_open: bool = False,
    ):
        """Initialize navigation state.

        Args:
            view: View displayed first
            selected: Preselected date, if any
            is_open: Whether the picker dialog starts open
        """
        self._state = ViewState(view, selected)
        self._is_open = is_open
        self._change_callbacks: List[Callable[[date], None]] = []

        logger.debug(f"Navigation state initialized with view: {view}")

    @property
    def state(self) -> ViewState:
        """Get the current immutable view state."""
        return self._state

    @property
    def view(self) -> View:
        return self._state.view

    @property
    def granularity(self) -> Granularity:
        return self._state.granularity

    @property
    def selected_date(self) -> Optional[date]:
        return self._state.selected

    @property
    def is_open(self) -> bool:
        return self._is_open

    def zoom_out(self) -> bool:
        """Switch to the next coarser view.

        Returns:
            True if the view changed
        """
        new_view = zoom_out(self._state.view)
        return self._set_view(new_view, "Zoomed out")

    def drill_down(self, period_start: date) -> bool:
        """Open the finer view of the clicked year or month.

        Returns:
            True if the view changed
        """
        new_view = drill_down(self._state.view, period_start)
        return self._set_view(new_view, "Drilled down")

    def navigate_forward(self, periods: int = 1) -> bool:
        """Navigate forward by the given number of periods of the current view.

        Args:
            periods: Number of months, years or year blocks to move forward

        Returns:
            True if the view changed, False at the end of the supported range
        """
        return self._set_view(shift(self._state.view, periods), f"Navigated forward {periods}")

    def navigate_backward(self, periods: int = 1) -> bool:
        """Navigate backward by the given number of periods of the current view.

        Args:
            periods: Number of months, years or year blocks to move backward

        Returns:
            True if the view changed, False at the start of the supported range
        """
        return self._set_view(shift(self._state.view, -periods), f"Navigated backward {periods}")

    def select(self, new_date: date) -> None:
        """Store a new selected date, close the dialog and notify listeners.

        The view is left as it is.
        """
        old_date = self._state.selected
        self._state = replace(self._state, selected=new_date)
        self._is_open = False

        logger.debug(f"Selected date: {old_date} -> {new_date}")
        self._notify_change()

    def open(self) -> None:
        self._is_open = True
        logger.debug("Picker dialog opened")

    def close(self) -> None:
        self._is_open = False
        logger.debug("Picker dialog closed")

    def _set_view(self, new_view: View, action: str) -> bool:
        old_view = self._state.view
        if new_view == old_view:
            return False
        if not is_view_supported(new_view):
            logger.debug(f"{action} ignored, {new_view} is outside years {MIN_YEAR}-{MAX_YEAR}")
            return False
        self._state = replace(self._state, view=new_view)
        logger.debug(f"{action}: {old_view} -> {new_view}")
        return True

    def add_change_callback(self, callback: Callable[[date], None]) -> None:
        """Add a callback to be called when the selected date changes.

        Args:
            callback: Function to call with the new date when it changes
        """
        self._change_callbacks.append(callback)
        logger.debug("Added date change callback")

    def remove_change_callback(self, callback: Callable[[date], None]) -> None:
        """Remove a date change callback.

        Args:
            callback: Callback function to remove
        """
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)
            logger.debug("Removed date change callback")

    def _notify_change(self) -> None:
        """Notify all registered callbacks of date change."""
        selected = self._state.selected
        if selected is None:
            return
        for callback in self._change_callbacks:
            try:
                callback(selected)
            except Exception:
                logger.exception("Error in date change callback")

    def __str__(self) -> str:
        return f"NavigationState(view={self._state.view}, selected={self._state.selected})"

    def __repr__(self) -> str:
        return (
            f"NavigationState(state={self._state!r}, "
            f"is_open={self._is_open}, callbacks={len(self._change_callbacks)})"
        )
