#!/usr/bin/env python3
"""Calendar arithmetic and date/time text helpers for the ASCII calendar."""

from __future__ import annotations

import datetime as dt

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

SUNDAY = 0
MONDAY = 1
WEEKDAY_HEADERS = ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]


def as_date(value: dt.date) -> dt.date:
    """Drop any time-of-day part so dates compare by calendar day."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def first_day_of(month: dt.date) -> dt.date:
    return month.replace(day=1)


def add_months(month: dt.date, months: int) -> dt.date:
    """Return the first day of the month `months` away from `month`."""
    index = month.year * 12 + (month.month - 1) + months
    return dt.date(index // 12, index % 12 + 1, 1)


def last_day_of(month: dt.date) -> dt.date:
    return add_months(month, 1) - dt.timedelta(days=1)


def days_in_month(month: dt.date) -> int:
    return last_day_of(month).day


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def first_weekday_of(month: dt.date) -> int:
    """Weekday of the first of the month, Sunday = 0 through Saturday = 6."""
    # date.weekday() is Monday = 0
    return (first_day_of(month).weekday() + 1) % 7


def month_name(month: dt.date) -> str:
    return month.strftime("%B")


def month_title(month: dt.date) -> str:
    return f"{month_name(month)} {month.year}"


def week_of_year(date: dt.date) -> int:
    return date.isocalendar()[1]


def is_same_date(a: dt.date, b: dt.date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def is_today(date: dt.date, today: dt.date | None = None) -> bool:
    if today is None:
        today = dt.date.today()
    return is_same_date(date, today)


def parse_date(text: str) -> dt.date | None:
    try:
        return dt.datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def is_valid_time_string(text: str) -> bool:
    parts = text.split(":")
    if len(parts) != 2:
        return False
    hour_text, minute_text = parts
    if not (hour_text.isdigit() and minute_text.isdigit()):
        return False
    if len(hour_text) > 2 or len(minute_text) != 2:
        return False
    return 0 <= int(hour_text) <= 23 and 0 <= int(minute_text) <= 59


def parse_time(text: str) -> dt.time | None:
    text = text.strip()
    if not is_valid_time_string(text):
        return None
    hour_text, minute_text = text.split(":")
    return dt.time(int(hour_text), int(minute_text))


def format_date(date: dt.date) -> str:
    return date.strftime(DATE_FORMAT)


def format_time(value: dt.time) -> str:
    return value.strftime(TIME_FORMAT)


def weekday_headers(week_start: int = SUNDAY) -> list[str]:
    return WEEKDAY_HEADERS[week_start:] + WEEKDAY_HEADERS[:week_start]


def calendar_weeks(month: dt.date, week_start: int = SUNDAY) -> list[list[int]]:
    """Rows of seven day numbers covering `month`, with 0 for blank cells."""
    lead = (first_weekday_of(month) - week_start) % 7
    cells = [0] * lead + list(range(1, days_in_month(month) + 1))
    cells += [0] * (-len(cells) % 7)
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]
