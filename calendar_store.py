#!/usr/bin/env python3
"""Reading and writing the calendar's event files."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from calendar_dates import parse_date, parse_time
from calendar_events import Event

logger = logging.getLogger(__name__)

LEGACY_SEPARATOR = "|"


class EventStoreError(RuntimeError):
    pass


def event_from_dict(item: Any) -> Event:
    if not isinstance(item, dict):
        raise ValueError(f"expected an object, got {type(item).__name__}")
    date = parse_date(str(item.get("date", "")))
    if date is None:
        raise ValueError(f"invalid date {item.get('date')!r}")
    time = parse_time(str(item.get("time", "")))
    if time is None:
        raise ValueError(f"invalid time {item.get('time')!r}: expected HH:MM")
    description = str(item.get("description", "")).strip()
    if not description:
        raise ValueError("description cannot be empty")
    return Event(date, time, description)


def event_to_dict(event: Event) -> dict[str, str]:
    return {
        "date": event.date_text,
        "time": event.time_text,
        "description": event.description,
    }


def load_events(path: Path) -> list[Event]:
    if not path.exists():
        return []
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise EventStoreError(f"cannot read {path}: {exc}") from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise EventStoreError(f"cannot decode {path}: {exc}") from exc
    if not isinstance(raw, dict) or not isinstance(raw.get("events", []), list):
        raise EventStoreError(f"{path}: expected an object with an 'events' list")

    events: list[Event] = []
    for item in raw.get("events", []):
        try:
            events.append(event_from_dict(item))
        except ValueError as exc:
            logger.warning("skipping invalid event %r in %s: %s", item, path, exc)
    logger.info("loaded %d events from %s", len(events), path)
    return events


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_events(path: Path, events: Iterable[Event]) -> None:
    payload = {"events": [event_to_dict(event) for event in events]}
    try:
        _write_atomic(path, json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    except OSError as exc:
        raise EventStoreError(f"cannot write {path}: {exc}") from exc
    logger.debug("saved %d events to %s", len(payload["events"]), path)


def format_event_line(event: Event) -> str:
    return LEGACY_SEPARATOR.join([event.date_text, event.time_text, event.description])


def parse_event_line(line: str) -> Event:
    """Parse one `YYYY-MM-DD|HH:MM|description` line of the old text format."""
    parts = line.split(LEGACY_SEPARATOR, 2)
    if len(parts) != 3:
        raise ValueError("invalid format: expected YYYY-MM-DD|HH:MM|description")
    date_text, time_text, description = (part.strip() for part in parts)
    return event_from_dict({"date": date_text, "time": time_text, "description": description})


def load_legacy_events(path: Path) -> list[Event]:
    if not path.exists():
        return []
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        raise EventStoreError(f"cannot read {path}: {exc}") from exc
    events: list[Event] = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            events.append(parse_event_line(line))
        except ValueError as exc:
            logger.warning("skipping malformed line %d of %s: %s (%s)", line_no, path, line, exc)
    return events


def migrate_legacy(legacy_path: Path, json_path: Path) -> int:
    events = load_legacy_events(legacy_path)
    if not events:
        return 0
    save_events(json_path, events)
    logger.info("migrated %d events from %s to %s", len(events), legacy_path, json_path)
    return len(events)


def load_events_with_migration(json_path: Path, legacy_path: Path | None) -> list[Event]:
    if json_path.exists():
        return load_events(json_path)
    if legacy_path is not None and legacy_path.exists():
        logger.info("found legacy events file %s, migrating", legacy_path)
        if migrate_legacy(legacy_path, json_path):
            return load_events(json_path)
    return []
