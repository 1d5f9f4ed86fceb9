#!/usr/bin/env python3
"""Dated events and the in-memory index the calendar queries."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable

from calendar_dates import as_date, first_day_of, format_date, format_time, last_day_of, parse_time

logger = logging.getLogger(__name__)

MAX_DESCRIPTION = 100


class EventNotFound(LookupError):
    """No stored event matches the given (date, time, description)."""


class EventValidationError(ValueError):
    pass


@dataclass(frozen=True)
class Event:
    date: dt.date
    time: dt.time
    description: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", as_date(self.date))

    @property
    def date_text(self) -> str:
        return format_date(self.date)

    @property
    def time_text(self) -> str:
        return format_time(self.time)

    def label(self) -> str:
        return f"{self.time_text} {self.description}"


def validate_event(event: Event) -> None:
    if not isinstance(event.date, dt.date):
        raise EventValidationError(f"invalid event date: {event.date!r}")
    if not isinstance(event.time, dt.time) or event.time.second or event.time.microsecond:
        raise EventValidationError(f"invalid time: {event.time!r}: expected HH:MM")
    if not event.description.strip():
        raise EventValidationError("event description cannot be empty")


def make_event(date: dt.date, time_text: str, description: str) -> Event:
    """Build a validated event from user-entered text."""
    value = parse_time(time_text)
    if value is None:
        raise EventValidationError(f"invalid time format {time_text!r}: expected HH:MM")
    event = Event(as_date(date), value, description.strip())
    validate_event(event)
    return event


def _date_time_key(event: Event) -> tuple[dt.date, dt.time]:
    return (event.date, event.time)


class EventIndex:
    """Unordered event collection with date-scoped, time-ordered views.

    Events have no identifier of their own; `remove` and `replace` find their
    target by value and act on the first stored match.
    """

    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events: list[Event] = list(events)

    def __len__(self) -> int:
        return len(self._events)

    def add(self, event: Event) -> None:
        self._events.append(event)

    def all_events(self) -> list[Event]:
        return list(self._events)

    def events_for_date(self, date: dt.date) -> list[Event]:
        # sorted() is stable: same-time events keep insertion order
        date = as_date(date)
        matches = [ev for ev in self._events if ev.date == date]
        return sorted(matches, key=lambda ev: ev.time)

    def has_events_for_date(self, date: dt.date) -> bool:
        date = as_date(date)
        return any(ev.date == date for ev in self._events)

    def events_in_range(self, start: dt.date, end: dt.date) -> list[Event]:
        start, end = as_date(start), as_date(end)
        matches = [ev for ev in self._events if start <= ev.date <= end]
        return sorted(matches, key=_date_time_key)

    def events_for_month(self, month: dt.date) -> list[Event]:
        return self.events_in_range(first_day_of(month), last_day_of(month))

    def search(self, query: str) -> list[Event]:
        needle = query.strip().lower()
        if not needle:
            return []
        matches = [ev for ev in self._events if needle in ev.description.lower()]
        return sorted(matches, key=_date_time_key)

    def _position(self, match: Event) -> int:
        for idx, ev in enumerate(self._events):
            if ev == match:
                return idx
        raise EventNotFound(
            f"event not found: {match.date_text} {match.time_text} {match.description!r}"
        )

    def remove(self, match: Event) -> None:
        del self._events[self._position(match)]
        logger.debug("removed event %s %s", match.date_text, match.time_text)

    def replace(self, old: Event, new: Event) -> None:
        validate_event(new)
        self._events[self._position(old)] = new
        logger.debug("replaced event %s %s", old.date_text, old.time_text)
