from __future__ import annotations

import datetime as dt
import unittest

from calendar_dates import (
    MONDAY,
    SUNDAY,
    add_months,
    as_date,
    calendar_weeks,
    days_in_month,
    first_weekday_of,
    is_leap_year,
    is_today,
    is_valid_time_string,
    last_day_of,
    month_title,
    parse_date,
    parse_time,
    weekday_headers,
)


class TestDateMath(unittest.TestCase):
    def test_leap_years(self) -> None:
        self.assertTrue(is_leap_year(2000))
        self.assertFalse(is_leap_year(1900))
        self.assertTrue(is_leap_year(2024))
        self.assertFalse(is_leap_year(2023))

    def test_days_in_month_matches_gregorian_calendar(self) -> None:
        lengths = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
        for year in (1900, 2000, 2023, 2024):
            for month, expected in enumerate(lengths, start=1):
                if month == 2 and is_leap_year(year):
                    expected = 29
                with self.subTest(year=year, month=month):
                    self.assertEqual(days_in_month(dt.date(year, month, 1)), expected)

    def test_last_day_rolls_over_year_end(self) -> None:
        self.assertEqual(last_day_of(dt.date(2024, 12, 5)), dt.date(2024, 12, 31))
        self.assertEqual(last_day_of(dt.date(2024, 2, 10)), dt.date(2024, 2, 29))

    def test_add_months_lands_on_first_of_month(self) -> None:
        self.assertEqual(add_months(dt.date(2024, 12, 1), 1), dt.date(2025, 1, 1))
        self.assertEqual(add_months(dt.date(2025, 1, 1), -1), dt.date(2024, 12, 1))
        self.assertEqual(add_months(dt.date(2025, 1, 31), 1), dt.date(2025, 2, 1))
        self.assertEqual(add_months(dt.date(2025, 3, 1), -14), dt.date(2024, 1, 1))

    def test_first_weekday_is_sunday_based(self) -> None:
        self.assertEqual(first_weekday_of(dt.date(2025, 6, 18)), 0)
        self.assertEqual(first_weekday_of(dt.date(2025, 8, 1)), 5)

    def test_calendar_weeks(self) -> None:
        weeks = calendar_weeks(dt.date(2025, 8, 1), SUNDAY)
        self.assertEqual(weeks[0], [0, 0, 0, 0, 0, 1, 2])
        self.assertEqual(len(weeks), 6)
        self.assertEqual(weeks[-1], [31, 0, 0, 0, 0, 0, 0])

        monday_weeks = calendar_weeks(dt.date(2025, 8, 1), MONDAY)
        self.assertEqual(monday_weeks[0], [0, 0, 0, 0, 1, 2, 3])

        self.assertEqual(len(calendar_weeks(dt.date(2026, 2, 1), SUNDAY)), 4)

    def test_weekday_headers(self) -> None:
        self.assertEqual(weekday_headers(SUNDAY)[0], "Su")
        self.assertEqual(weekday_headers(MONDAY), ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"])

    def test_text_helpers(self) -> None:
        self.assertEqual(parse_date("2025-08-31"), dt.date(2025, 8, 31))
        self.assertIsNone(parse_date("2025-02-30"))
        self.assertEqual(parse_time("09:05"), dt.time(9, 5))
        self.assertIsNone(parse_time("24:00"))
        self.assertTrue(is_valid_time_string("23:59"))
        self.assertFalse(is_valid_time_string("12:60"))
        self.assertFalse(is_valid_time_string("1230"))
        self.assertTrue(is_valid_time_string("9:30"))
        self.assertFalse(is_valid_time_string("9:3"))
        self.assertEqual(month_title(dt.date(2025, 8, 1)), "August 2025")

    def test_as_date_and_is_today(self) -> None:
        self.assertEqual(as_date(dt.datetime(2025, 8, 31, 15, 30)), dt.date(2025, 8, 31))
        self.assertTrue(is_today(dt.date(2025, 8, 31), today=dt.date(2025, 8, 31)))
        self.assertFalse(is_today(dt.date(2025, 8, 30), today=dt.date(2025, 8, 31)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
