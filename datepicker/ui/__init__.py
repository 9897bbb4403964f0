"""Picker state machine, snapshot projection and gesture controller."""

from .controller import PickerController
from .navigation import DayView, MonthView, NavigationState, ViewState, YearBlockView
from .snapshot import Cell, PickerSnapshot, build_snapshot

__all__ = [
    "Cell",
    "DayView",
    "MonthView",
    "NavigationState",
    "PickerController",
    "PickerSnapshot",
    "ViewState",
    "YearBlockView",
    "build_snapshot",
]
