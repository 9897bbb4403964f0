"""Picker controller: turns user gestures into state transitions and snapshots."""

import logging
from datetime import date
from typing import Any, Callable, Optional, Union

from ..calendar_math import month_grid, year_block
from ..constraints import is_period_allowed
from ..settings.models import PickerConfig, normalize_to_period
from ..view_types import Granularity
from .navigation import DayView, MonthView, NavigationState, ViewState, YearBlockView, view_for
from .snapshot import Cell, PickerSnapshot, build_snapshot

logger = logging.getLogger(__name__)

CellRef = Union[Cell, date]


class PickerController:
    """Controls one date picker: gestures in, render-ready snapshots out.

    The controller exclusively owns its navigation state. It is synchronous
    and not thread-safe; a host dispatching gestures from several threads must
    serialize the calls.
    """

    def __init__(self, config: PickerConfig, today: Optional[date] = None):
        """Initialize picker controller.

        Args:
            config: Validated picker configuration
            today: Date used when the config names no starting date
        """
        self.config = config

        anchor = config.anchor_date(today)
        self.navigation = NavigationState(
            view_for(config.initial_view, anchor),
            selected=config.initial_selected_date,
            is_open=config.initially_opened,
        )

        logger.info(
            f"Picker controller initialized: selection_type={config.selection_type.name}, "
            f"view={self.navigation.view}"
        )

    @classmethod
    def initialize(
        cls,
        config: Union[PickerConfig, dict[str, Any], None] = None,
        today: Optional[date] = None,
        **options: Any,
    ) -> "PickerController":
        """Create a controller from a config object, an option mapping or keywords.

        Args:
            config: A PickerConfig, or a mapping of options
            today: Date used when the config names no starting date
            **options: Additional options, overriding the mapping's values

        Returns:
            Ready-to-use controller

        Raises:
            ConfigError: If the configuration is invalid
        """
        if isinstance(config, PickerConfig):
            if options:
                config = PickerConfig.from_mapping(config.model_dump(), **options)
        else:
            config = PickerConfig.from_mapping(config, **options)
        return cls(config, today=today)

    @property
    def view_state(self) -> ViewState:
        return self.navigation.state

    @property
    def selected_date(self) -> Optional[date]:
        return self.navigation.selected_date

    @property
    def selection_type(self) -> Granularity:
        return self.config.selection_type

    def handle_cell_click(self, cell: CellRef) -> bool:
        """Handle a click on a year, month or day cell.

        A click at the selection granularity selects the cell's period if the
        constraints allow it. A click at a coarser granularity drills down
        into the clicked year or month and is never blocked by constraints.
        Clicks on cells that are not part of the current view are ignored.

        Args:
            cell: The clicked cell, or the date it represents

        Returns:
            True if the click changed the selection or the view
        """
        view = self.navigation.view
        if isinstance(cell, Cell):
            if cell.granularity != view.granularity:
                logger.debug(
                    f"Ignoring {cell.granularity.name} cell click in {view.granularity.name} view"
                )
                return False
            target = cell.value
        else:
            target = cell

        if not self._is_in_view(target):
            logger.debug(f"Ignoring click on {target}, not displayed in {view}")
            return False

        if view.granularity == self.config.selection_type or isinstance(view, DayView):
            return self._select(normalize_to_period(target, view.granularity), view.granularity)

        return self.navigation.drill_down(target)

    def handle_title_click(self) -> bool:
        """Handle a click on the title - switch to the next coarser view.

        Returns:
            True if the view changed (False in the year block view)
        """
        return self.navigation.zoom_out()

    def handle_previous_click(self) -> bool:
        """Show the previous month, year or year block."""
        return self.navigation.navigate_backward()

    def handle_next_click(self) -> bool:
        """Show the next month, year or year block."""
        return self.navigation.navigate_forward()

    def open_dialog(self) -> None:
        self.navigation.open()

    def close_dialog(self) -> None:
        self.navigation.close()

    def current_snapshot(self) -> PickerSnapshot:
        """Build the render-ready snapshot of the current state."""
        return build_snapshot(self.navigation.state, self.config, self.navigation.is_open)

    def add_change_callback(self, callback: Callable[[date], None]) -> None:
        """Register a callback invoked with each newly selected date."""
        self.navigation.add_change_callback(callback)

    def remove_change_callback(self, callback: Callable[[date], None]) -> None:
        self.navigation.remove_change_callback(callback)

    def _select(self, period_start: date, granularity: Granularity) -> bool:
        if not is_period_allowed(period_start, granularity, self.config.date_constraints):
            logger.debug(f"Ignoring selection of forbidden {granularity.name} {period_start}")
            return False
        self.navigation.select(period_start)
        logger.debug(f"User selected {period_start}")
        return True

    def _is_in_view(self, target: date) -> bool:
        view = self.navigation.view
        if isinstance(view, YearBlockView):
            return target.year in year_block(view.block_start)
        if isinstance(view, MonthView):
            return target.year == view.year
        grid = month_grid(view.year, view.month, self.config.week_start, self.config.fixed_weeks)
        return grid[0].date <= target <= grid[-1].date

    def __repr__(self) -> str:
        return (
            f"PickerController(selection_type={self.config.selection_type.name}, "
            f"navigation={self.navigation!r})"
        )
