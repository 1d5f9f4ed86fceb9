#!/usr/bin/env python3
"""Movement rules for the three-month calendar view."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Callable

from calendar_dates import add_months, as_date, last_day_of
from calendar_events import EventIndex
from calendar_state import CalendarWindow, Selection

Clock = Callable[[], dt.date]

ONE_DAY = dt.timedelta(days=1)
ONE_WEEK = dt.timedelta(days=7)


class NavigationController:
    """Applies one movement per call to a window and its selection.

    A move either commits a new selected date or leaves both objects
    untouched. Rejected moves are silent. After every call the selection lies
    inside the window's visible range.
    """

    def __init__(
        self,
        window: CalendarWindow,
        selection: Selection,
        today: Clock = dt.date.today,
    ) -> None:
        self.window = window
        self.selection = selection
        self._today = today

    def current_selection(self) -> dt.date:
        return self.selection.selected_date

    def visible_date_range(self) -> tuple[dt.date, dt.date]:
        return self.window.visible_range()

    def is_selection_in_center_month(self) -> bool:
        selected = self.selection.selected_date
        center = self.window.center_month
        return (selected.year, selected.month) == (center.year, center.month)

    def _commit_if_visible(self, candidate: dt.date) -> bool:
        if not self.selection.is_date_within_bounds(self.window, candidate):
            return False
        self.selection.selected_date = candidate
        return True

    def move_left(self) -> None:
        selected = self.selection.selected_date
        if self._commit_if_visible(selected - ONE_DAY):
            return
        if selected.day == 1:
            self._commit_if_visible(last_day_of(add_months(selected, -1)))

    def move_right(self) -> None:
        selected = self.selection.selected_date
        if self._commit_if_visible(selected + ONE_DAY):
            return
        if selected == last_day_of(selected):
            self._commit_if_visible(add_months(selected, 1))

    def move_up(self) -> None:
        self._commit_if_visible(self.selection.selected_date - ONE_WEEK)

    def move_down(self) -> None:
        self._commit_if_visible(self.selection.selected_date + ONE_WEEK)

    def shift_month_backward(self) -> None:
        desired_day = self.selection.selected_date.day
        self.window.shift_backward()
        self.selection.adjust_for_window_change(self.window, desired_day)

    def shift_month_forward(self) -> None:
        desired_day = self.selection.selected_date.day
        self.window.shift_forward()
        self.selection.adjust_for_window_change(self.window, desired_day)

    def reset_to_current(self) -> None:
        today = as_date(self._today())
        self.window.recenter(today)
        self.selection.selected_date = today

    def set_selection(self, date: dt.date) -> bool:
        return self._commit_if_visible(as_date(date))

    def jump_to_date(self, date: dt.date) -> None:
        """Center the window on `date`'s month and select it."""
        date = as_date(date)
        self.window.recenter(date)
        self.selection.selected_date = date


@dataclass
class CalendarContext:
    """Everything the renderer reads and the key handlers mutate."""

    window: CalendarWindow
    selection: Selection
    events: EventIndex = field(default_factory=EventIndex)
    today: Clock = dt.date.today
    nav: NavigationController = field(init=False)

    def __post_init__(self) -> None:
        self.nav = NavigationController(self.window, self.selection, self.today)

    @classmethod
    def starting_today(
        cls, events: EventIndex | None = None, today: Clock = dt.date.today
    ) -> CalendarContext:
        current = as_date(today())
        return cls(
            window=CalendarWindow(current),
            selection=Selection(current),
            events=events if events is not None else EventIndex(),
            today=today,
        )
