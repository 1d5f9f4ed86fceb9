from __future__ import annotations

import datetime as dt
import random
import unittest

from calendar_events import Event, EventIndex
from calendar_nav import CalendarContext, NavigationController
from calendar_state import CalendarWindow, Selection


def controller(center: dt.date, selected: dt.date, today: dt.date | None = None) -> NavigationController:
    clock = (lambda: today) if today is not None else dt.date.today
    return NavigationController(CalendarWindow(center), Selection(selected), clock)


def snapshot(nav: NavigationController) -> tuple[dt.date, dt.date]:
    return nav.window.center_month, nav.current_selection()


class TestDayAndWeekMoves(unittest.TestCase):
    def test_right_across_month_boundary_then_shift_forward(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 8, 31))
        nav.move_right()
        self.assertEqual(nav.current_selection(), dt.date(2025, 9, 1))
        nav.shift_month_forward()
        self.assertEqual(nav.window.center_month, dt.date(2025, 9, 1))
        self.assertEqual(nav.current_selection(), dt.date(2025, 9, 1))

    def test_left_right_are_inverse_inside_range(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 7, 1))
        start, end = nav.visible_date_range()
        day = start + dt.timedelta(days=1)
        while day < end:
            nav.set_selection(day)
            nav.move_left()
            nav.move_right()
            self.assertEqual(nav.current_selection(), day)
            nav.move_right()
            nav.move_left()
            self.assertEqual(nav.current_selection(), day)
            day += dt.timedelta(days=1)

    def test_moves_at_range_edges_are_silent_noops(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 7, 1))
        before = snapshot(nav)
        nav.move_left()
        nav.move_up()
        self.assertEqual(snapshot(nav), before)

        nav.set_selection(dt.date(2025, 9, 30))
        before = snapshot(nav)
        nav.move_right()
        nav.move_down()
        self.assertEqual(snapshot(nav), before)

    def test_week_moves_refuse_to_leave_range(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 7, 5))
        nav.move_up()
        self.assertEqual(nav.current_selection(), dt.date(2025, 7, 5))
        nav.move_down()
        self.assertEqual(nav.current_selection(), dt.date(2025, 7, 12))

        nav.set_selection(dt.date(2025, 9, 26))
        nav.move_down()
        self.assertEqual(nav.current_selection(), dt.date(2025, 9, 26))
        nav.move_up()
        self.assertEqual(nav.current_selection(), dt.date(2025, 9, 19))

    def test_week_moves_cross_months_inside_range(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 8, 28))
        nav.move_down()
        self.assertEqual(nav.current_selection(), dt.date(2025, 9, 4))


class TestMonthShifts(unittest.TestCase):
    def test_round_trip_restores_center(self) -> None:
        for center in (dt.date(2024, 12, 1), dt.date(2025, 1, 1), dt.date(2025, 6, 1)):
            nav = controller(center, center)
            nav.shift_month_forward()
            nav.shift_month_backward()
            self.assertEqual(nav.window.center_month, center)
            nav.shift_month_backward()
            nav.shift_month_forward()
            self.assertEqual(nav.window.center_month, center)

    def test_backward_shift_preserves_day(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 9, 15))
        nav.shift_month_backward()
        self.assertEqual(nav.window.center_month, dt.date(2025, 7, 1))
        self.assertEqual(nav.current_selection(), dt.date(2025, 7, 15))

    def test_forward_shift_clamps_to_shorter_month(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 7, 31))
        nav.shift_month_forward()
        self.assertEqual(nav.window.center_month, dt.date(2025, 9, 1))
        self.assertEqual(nav.current_selection(), dt.date(2025, 9, 30))

    def test_forward_shift_into_february(self) -> None:
        nav = controller(dt.date(2024, 1, 1), dt.date(2023, 12, 31))
        nav.shift_month_forward()
        self.assertEqual(nav.current_selection(), dt.date(2024, 2, 29))

    def test_shift_keeps_visible_selection(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 8, 15))
        nav.shift_month_backward()
        self.assertEqual(nav.current_selection(), dt.date(2025, 8, 15))
        self.assertFalse(nav.is_selection_in_center_month())


class TestSelectionControl(unittest.TestCase):
    def test_reset_to_current_uses_host_clock(self) -> None:
        nav = controller(dt.date(2020, 1, 1), dt.date(2020, 1, 10), today=dt.date(2025, 8, 17))
        nav.reset_to_current()
        self.assertEqual(nav.window.center_month, dt.date(2025, 8, 1))
        self.assertEqual(nav.current_selection(), dt.date(2025, 8, 17))
        self.assertTrue(nav.is_selection_in_center_month())

    def test_set_selection_reports_result(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 8, 15))
        self.assertTrue(nav.set_selection(dt.date(2025, 9, 30)))
        self.assertEqual(nav.current_selection(), dt.date(2025, 9, 30))
        self.assertFalse(nav.set_selection(dt.date(2025, 10, 1)))
        self.assertEqual(nav.current_selection(), dt.date(2025, 9, 30))

    def test_jump_to_date_recenters_first(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 8, 15))
        nav.jump_to_date(dt.date(2027, 3, 9))
        self.assertEqual(nav.window.center_month, dt.date(2027, 3, 1))
        self.assertEqual(nav.current_selection(), dt.date(2027, 3, 9))

    def test_selection_always_visible_after_random_walk(self) -> None:
        nav = controller(dt.date(2025, 8, 1), dt.date(2025, 8, 15), today=dt.date(2025, 8, 15))
        moves = [
            nav.move_left,
            nav.move_right,
            nav.move_up,
            nav.move_down,
            nav.shift_month_backward,
            nav.shift_month_forward,
            nav.reset_to_current,
        ]
        rng = random.Random(1234)
        for _ in range(5000):
            rng.choice(moves)()
            self.assertTrue(nav.selection.is_within_visible_range(nav.window))
            self.assertEqual(nav.window.center_month.day, 1)


class TestCalendarContext(unittest.TestCase):
    def test_starting_today_shares_state_with_controller(self) -> None:
        events = EventIndex([Event(dt.date(2025, 8, 17), dt.time(9, 0), "Breakfast")])
        ctx = CalendarContext.starting_today(events, today=lambda: dt.date(2025, 8, 17))
        self.assertIs(ctx.nav.window, ctx.window)
        self.assertIs(ctx.nav.selection, ctx.selection)
        self.assertEqual(ctx.window.center_month, dt.date(2025, 8, 1))
        ctx.nav.move_right()
        self.assertEqual(ctx.selection.selected_date, dt.date(2025, 8, 18))
        self.assertTrue(ctx.events.has_events_for_date(dt.date(2025, 8, 17)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
