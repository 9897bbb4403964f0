"""
Unit tests for NavigationState and the view transitions.

This module tests the year-block / month / day views, the pure transition
functions between them, and the NavigationState that owns the current view,
the selected date and the dialog visibility.
"""

from datetime import date
from unittest.mock import Mock

import pytest

from datepicker.ui.navigation import (
    DayView,
    MonthView,
    NavigationState,
    ViewState,
    YearBlockView,
    drill_down,
    is_view_supported,
    shift,
    view_for,
    zoom_out,
)
from datepicker.view_types import Granularity


class TestViewTransitions:
    """Test the pure view transition functions."""

    @pytest.mark.parametrize(
        "granularity,expected",
        [
            (Granularity.YEAR_BLOCK, YearBlockView(2020)),
            (Granularity.MONTH, MonthView(2021, 3)),
            (Granularity.DAY, DayView(2021, 3)),
        ],
    )
    def test_view_for(self, granularity, expected):
        """Test the starting view contains the anchor date."""
        assert view_for(granularity, date(2021, 3, 10)) == expected

    @pytest.mark.parametrize(
        "view,expected",
        [
            (DayView(1990, 1), MonthView(1990, 1)),
            (MonthView(1990, 1), YearBlockView(1980)),
            (YearBlockView(1980), YearBlockView(1980)),
        ],
    )
    def test_zoom_out(self, view, expected):
        """Test the title click goes Day -> Month -> YearBlock and stops."""
        assert zoom_out(view) == expected

    @pytest.mark.parametrize(
        "view,clicked,expected",
        [
            (YearBlockView(1980), date(1985, 1, 1), MonthView(1985, 1)),
            (MonthView(1985, 1), date(1985, 6, 1), DayView(1985, 6)),
            (DayView(1985, 6), date(1985, 6, 12), DayView(1985, 6)),
        ],
    )
    def test_drill_down(self, view, clicked, expected):
        """Test a year opens its months and a month opens its days."""
        assert drill_down(view, clicked) == expected

    @pytest.mark.parametrize(
        "view,delta,expected",
        [
            (DayView(2020, 12), 1, DayView(2021, 1)),
            (DayView(2021, 1), -1, DayView(2020, 12)),
            (MonthView(2021, 3), 1, MonthView(2022, 3)),
            (MonthView(2021, 3), -1, MonthView(2020, 3)),
            (YearBlockView(1980), 1, YearBlockView(2000)),
            (YearBlockView(1980), -1, YearBlockView(1960)),
        ],
    )
    def test_shift(self, view, delta, expected):
        """Test previous/next move by one month, year or year block."""
        assert shift(view, delta) == expected

    def test_year_block_view_rejects_unaligned_start(self):
        """Test a year block always starts at a multiple of 20."""
        with pytest.raises(ValueError):
            YearBlockView(1990)

    @pytest.mark.parametrize(
        "view,expected",
        [
            (YearBlockView(0), False),
            (YearBlockView(20), True),
            (YearBlockView(9960), True),
            (YearBlockView(9980), False),
            (MonthView(19, 1), False),
            (MonthView(20, 1), True),
            (DayView(9979, 12), True),
            (DayView(9980, 1), False),
        ],
    )
    def test_is_view_supported(self, view, expected):
        """Test views are limited to the navigable years."""
        assert is_view_supported(view) is expected

    def test_view_state_anchor(self):
        """Test the year block carries a year but no month."""
        assert ViewState(YearBlockView(1980)).anchor_year == 1980
        assert ViewState(YearBlockView(1980)).anchor_month is None
        assert ViewState(DayView(1990, 4)).anchor_month == 4
        assert ViewState(MonthView(1990, 4)).granularity == Granularity.MONTH


class TestNavigationState:
    """Test NavigationState functionality."""

    def test_init_with_view(self):
        """Test NavigationState initialization."""
        nav = NavigationState(DayView(2021, 3), selected=date(2021, 3, 10))

        assert nav.view == DayView(2021, 3)
        assert nav.granularity == Granularity.DAY
        assert nav.selected_date == date(2021, 3, 10)
        assert nav.is_open is False

    def test_navigate_forward(self):
        """Test navigating forward by one month."""
        nav = NavigationState(DayView(2020, 12))

        assert nav.navigate_forward() is True
        assert nav.view == DayView(2021, 1)

    def test_navigate_backward_several_periods(self):
        """Test navigating backward by several years."""
        nav = NavigationState(MonthView(2021, 3))

        assert nav.navigate_backward(3) is True
        assert nav.view == MonthView(2018, 3)

    def test_navigate_backward_at_supported_range_start(self):
        """Test navigation stops at the first supported year."""
        nav = NavigationState(DayView(20, 1))

        assert nav.navigate_backward() is False
        assert nav.view == DayView(20, 1)

    def test_navigate_forward_at_supported_range_end(self):
        """Test navigation stops at the last supported year block."""
        nav = NavigationState(YearBlockView(9960))

        assert nav.navigate_forward() is False
        assert nav.view == YearBlockView(9960)

    def test_zoom_out_at_year_block_is_noop(self):
        """Test the coarsest view has nothing to zoom out to."""
        nav = NavigationState(YearBlockView(2020))

        assert nav.zoom_out() is False
        assert nav.view == YearBlockView(2020)

    def test_zoom_out_then_drill_down_returns_to_month(self):
        """Test the title click and a month click round-trip."""
        nav = NavigationState(DayView(2021, 3))

        nav.zoom_out()
        assert nav.view == MonthView(2021, 3)
        nav.drill_down(date(2021, 3, 1))
        assert nav.view == DayView(2021, 3)

    def test_select_closes_and_keeps_view(self):
        """Test selecting stores the date, closes the dialog and keeps the view."""
        nav = NavigationState(DayView(2021, 3), is_open=True)

        nav.select(date(2021, 3, 15))

        assert nav.selected_date == date(2021, 3, 15)
        assert nav.is_open is False
        assert nav.view == DayView(2021, 3)

    def test_open_and_close(self):
        """Test dialog visibility toggles."""
        nav = NavigationState(DayView(2021, 3))

        nav.open()
        assert nav.is_open is True
        nav.close()
        assert nav.is_open is False

    def test_state_is_replaced_not_mutated(self):
        """Test earlier state values are unaffected by later transitions."""
        nav = NavigationState(DayView(2021, 3))
        before = nav.state

        nav.navigate_forward()

        assert before == ViewState(DayView(2021, 3))
        assert nav.state == ViewState(DayView(2021, 4))


class TestNavigationStateCallbacks:
    """Test NavigationState change callbacks."""

    def test_add_change_callback(self):
        """Test adding change callback."""
        nav = NavigationState(DayView(2021, 3))
        callback = Mock()

        nav.add_change_callback(callback)
        nav.select(date(2021, 3, 15))

        callback.assert_called_once_with(date(2021, 3, 15))

    def test_remove_change_callback(self):
        """Test removing change callback."""
        nav = NavigationState(DayView(2021, 3))
        callback = Mock()

        nav.add_change_callback(callback)
        nav.remove_change_callback(callback)
        nav.select(date(2021, 3, 15))

        callback.assert_not_called()

    def test_remove_unknown_callback_is_ignored(self):
        """Test removing a callback that was never added."""
        nav = NavigationState(DayView(2021, 3))

        nav.remove_change_callback(Mock())

    def test_navigation_does_not_notify(self):
        """Test only selections trigger callbacks."""
        nav = NavigationState(DayView(2021, 3))
        callback = Mock()
        nav.add_change_callback(callback)

        nav.navigate_forward()
        nav.zoom_out()

        callback.assert_not_called()

    def test_callback_error_handling(self, caplog):
        """Test a failing callback is logged and later callbacks still run."""
        nav = NavigationState(DayView(2021, 3))
        error_callback = Mock(side_effect=Exception("Callback error"))
        good_callback = Mock()

        nav.add_change_callback(error_callback)
        nav.add_change_callback(good_callback)
        nav.select(date(2021, 3, 15))

        error_callback.assert_called_once()
        good_callback.assert_called_once_with(date(2021, 3, 15))
        assert "Error in date change callback" in caplog.text
