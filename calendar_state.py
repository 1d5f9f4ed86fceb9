#!/usr/bin/env python3
"""Three-month window and selected-date state."""

from __future__ import annotations

import datetime as dt

from calendar_dates import add_months, as_date, days_in_month, first_day_of, last_day_of


class CalendarWindow:
    """Previous, center and next month, keyed by the center month.

    `center_month` is always the first day of its month.
    """

    def __init__(self, center_month: dt.date) -> None:
        self.center_month = first_day_of(as_date(center_month))

    def __repr__(self) -> str:
        return f"CalendarWindow({self.center_month.isoformat()})"

    def previous_month(self) -> dt.date:
        return add_months(self.center_month, -1)

    def next_month(self) -> dt.date:
        return add_months(self.center_month, 1)

    def shift_backward(self) -> None:
        self.center_month = self.previous_month()

    def shift_forward(self) -> None:
        self.center_month = self.next_month()

    def recenter(self, date: dt.date) -> None:
        self.center_month = first_day_of(as_date(date))

    def visible_range(self) -> tuple[dt.date, dt.date]:
        return self.previous_month(), last_day_of(self.next_month())

    def contains(self, date: dt.date) -> bool:
        start, end = self.visible_range()
        return start <= as_date(date) <= end


class Selection:
    def __init__(self, selected_date: dt.date) -> None:
        self.selected_date = as_date(selected_date)

    def __repr__(self) -> str:
        return f"Selection({self.selected_date.isoformat()})"

    def is_within_visible_range(self, window: CalendarWindow) -> bool:
        return window.contains(self.selected_date)

    def is_date_within_bounds(self, window: CalendarWindow, date: dt.date) -> bool:
        return window.contains(date)

    def adjust_for_window_change(self, window: CalendarWindow, desired_day: int) -> None:
        """Pull an out-of-window selection into the center month.

        Keeps `desired_day` when the center month has it, else its last day.
        """
        if self.is_within_visible_range(window):
            return
        center = window.center_month
        day = min(desired_day, days_in_month(center))
        self.selected_date = center.replace(day=day)
