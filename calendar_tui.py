#!/usr/bin/env python3
"""Three-month ASCII calendar TUI with dated events."""

from __future__ import annotations

import curses
import datetime as dt
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable

from calendar_config import THEME_ELEMENTS, Config, ConfigError, load_config, parse_color
from calendar_dates import calendar_weeks, format_date, is_today, month_title, weekday_headers
from calendar_events import (
    MAX_DESCRIPTION,
    Event,
    EventIndex,
    EventNotFound,
    EventValidationError,
    make_event,
)
from calendar_keys import BACKSPACE_KEYS, ENTER_KEYS, KEY_ESC, Action, action_for_key, key_legend
from calendar_nav import CalendarContext
from calendar_store import EventStoreError, load_events_with_migration, save_events
from time_input import TimeInputValidator

logger = logging.getLogger("calendar_tui")

APP_TITLE = "ASCII Calendar"
MIN_WIDTH = 80
MIN_HEIGHT = 24
MONTH_WIDTH = 24
MONTH_SPACING = 2
CALENDAR_TOP = 1
EVENTS_TOP = 11
MAX_EVENT_LINES = 9


@dataclass
class CalendarMode:
    pass


@dataclass
class EventSelectMode:
    purpose: str  # "delete" or "edit"
    index: int = 0


@dataclass
class EventListMode:
    index: int = 0


@dataclass
class SearchMode:
    query: str
    results: list[Event] = field(default_factory=list)
    index: int = 0


Mode = CalendarMode | EventSelectMode | EventListMode | SearchMode


def truncate(text: str, width: int) -> str:
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."


def safe_addnstr(stdscr: curses.window, y: int, x: int, text: str, width: int, attr: int) -> None:
    if width <= 0:
        return
    try:
        stdscr.addnstr(y, x, text, width, attr)
    except curses.error:
        return


def init_palette(theme: dict[str, tuple[str, str]]) -> dict[str, int]:
    palette: dict[str, int] = {}
    colors = curses.has_colors()
    if colors:
        curses.start_color()
        curses.use_default_colors()
    for pair_id, element in enumerate(THEME_ELEMENTS, start=1):
        fg, fg_attrs = parse_color(theme[element][0])
        bg, _ = parse_color(theme[element][1])
        attr = fg_attrs
        if colors and pair_id < curses.COLOR_PAIRS:
            curses.init_pair(pair_id, fg, bg)
            attr |= curses.color_pair(pair_id)
        elif element.startswith("selected") or element == "input":
            attr |= curses.A_REVERSE
        palette[element] = attr
    return palette


def clamp_index(index: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


class CalendarApp:
    def __init__(self, stdscr: curses.window, config: Config, ctx: CalendarContext) -> None:
        self.stdscr = stdscr
        self.config = config
        self.ctx = ctx
        self.palette: dict[str, int] = {}
        self.mode: Mode = CalendarMode()
        self.status = ""
        self.status_error = False
        self.handlers: dict[type, Callable[[Action], bool]] = {
            CalendarMode: self.handle_calendar,
            EventSelectMode: self.handle_event_select,
            EventListMode: self.handle_event_list,
            SearchMode: self.handle_search,
        }

    # status line

    def set_status(self, message: str, error: bool = False) -> None:
        self.status = message
        self.status_error = error

    # persistence

    def commit(self, change: Callable[[EventIndex], None], success: str) -> bool:
        """Apply `change` to the index and save; roll back if either fails."""
        before = self.ctx.events.all_events()
        try:
            change(self.ctx.events)
            save_events(self.config.events_file, self.ctx.events.all_events())
        except (EventNotFound, EventValidationError) as exc:
            self.ctx.events = EventIndex(before)
            self.set_status(f"Error: {exc}", error=True)
            return False
        except EventStoreError as exc:
            logger.error("saving events failed: %s", exc)
            self.ctx.events = EventIndex(before)
            self.set_status(f"Error: {exc}", error=True)
            return False
        self.set_status(success)
        return True

    # drawing

    def draw_month(self, x: int, y: int, month: dt.date) -> None:
        stdscr = self.stdscr
        title = month_title(month)
        safe_addnstr(
            stdscr, y, x + max(0, (MONTH_WIDTH - len(title)) // 2), title, MONTH_WIDTH,
            self.palette["month_header"],
        )
        header = " ".join(f"{name:>2}" for name in weekday_headers(self.config.week_start))
        safe_addnstr(stdscr, y + 1, x + 1, header, MONTH_WIDTH, self.palette["day_header"])

        selected = self.ctx.nav.current_selection()
        today = self.ctx.today()
        for row, week in enumerate(calendar_weeks(month, self.config.week_start)):
            for col, day in enumerate(week):
                if day == 0:
                    continue
                date = month.replace(day=day)
                if date == selected and is_today(date, today):
                    attr = self.palette["selected_today"]
                elif date == selected:
                    attr = self.palette["selected"]
                elif is_today(date, today):
                    attr = self.palette["today"]
                elif self.ctx.events.has_events_for_date(date):
                    attr = self.palette["event_day"]
                else:
                    attr = self.palette["regular_day"]
                safe_addnstr(stdscr, y + 2 + row, x + 1 + col * 3, f"{day:2d}", 2, attr)

    def draw_calendar(self) -> int:
        _, w = self.stdscr.getmaxyx()
        total = 3 * MONTH_WIDTH + 2 * MONTH_SPACING
        left = max(0, (w - total) // 2)
        window = self.ctx.window
        months = (window.previous_month(), window.center_month, window.next_month())
        for idx, month in enumerate(months):
            self.draw_month(left + idx * (MONTH_WIDTH + MONTH_SPACING), CALENDAR_TOP, month)
        return left

    def event_rows(self, total: int) -> int:
        """Event lines that fit above the status line, keeping one for the overflow note."""
        h, _ = self.stdscr.getmaxyx()
        capacity = max(1, min(MAX_EVENT_LINES, h - 4 - EVENTS_TOP))
        if total > capacity:
            return max(1, capacity - 1)
        return capacity

    def draw_event_panel(self, left: int, highlight: int | None) -> None:
        selected = self.ctx.nav.current_selection()
        events = self.ctx.events.events_for_date(selected)
        title = f"Events for {selected.strftime('%A, %B %d, %Y')}"
        width = 3 * MONTH_WIDTH + 2 * MONTH_SPACING
        safe_addnstr(self.stdscr, EVENTS_TOP, left, truncate(title, width), width, self.palette["event_header"])
        if not events:
            safe_addnstr(self.stdscr, EVENTS_TOP + 1, left + 1, "No events", width, self.palette["no_events"])
            return
        rows = self.event_rows(len(events))
        offset = 0
        if highlight is not None and highlight >= rows:
            offset = highlight - rows + 1
        visible = events[offset : offset + rows]
        for row, ev in enumerate(visible):
            attr = self.palette["selected_event"] if highlight == offset + row else self.palette["event_text"]
            safe_addnstr(self.stdscr, EVENTS_TOP + 1 + row, left + 1, truncate(ev.label(), width - 1), width - 1, attr)
        hidden = len(events) - offset - len(visible)
        if hidden > 0:
            safe_addnstr(
                self.stdscr, EVENTS_TOP + 1 + len(visible), left + 1, f"... and {hidden} more",
                width - 1, self.palette["more_events"],
            )

    def draw_search_panel(self, left: int, mode: SearchMode) -> None:
        width = 3 * MONTH_WIDTH + 2 * MONTH_SPACING
        header = f"Search: {mode.query}  ({len(mode.results)} found)"
        safe_addnstr(self.stdscr, EVENTS_TOP, left, truncate(header, width), width, self.palette["event_header"])
        if not mode.results:
            safe_addnstr(self.stdscr, EVENTS_TOP + 1, left + 1, "No matching events", width, self.palette["no_events"])
            return
        offset = max(0, mode.index - MAX_EVENT_LINES + 1)
        for row, ev in enumerate(mode.results[offset : offset + MAX_EVENT_LINES]):
            idx = offset + row
            attr = self.palette["selected_event"] if idx == mode.index else self.palette["search_result"]
            label = f"{ev.date_text} {ev.label()}"
            safe_addnstr(self.stdscr, EVENTS_TOP + 1 + row, left + 1, truncate(label, width - 1), width - 1, attr)

    def draw_event_list_view(self, mode: EventListMode) -> None:
        h, w = self.stdscr.getmaxyx()
        selected = self.ctx.nav.current_selection()
        events = self.ctx.events.events_for_date(selected)
        title = f"Events for {selected.strftime('%A, %B %d, %Y')}"
        safe_addnstr(self.stdscr, 2, max(0, (w - len(title)) // 2), title, w - 1, self.palette["event_header"])
        safe_addnstr(self.stdscr, 4, 2, "-" * (w - 4), w - 4, self.palette["day_header"])
        if not events:
            safe_addnstr(self.stdscr, 6, 2, "No events for this date", w - 4, self.palette["no_events"])
            return
        rows = max(1, h - 10)
        offset = max(0, mode.index - rows + 1)
        for row, ev in enumerate(events[offset : offset + rows]):
            attr = self.palette["selected_event"] if offset + row == mode.index else self.palette["event_text"]
            safe_addnstr(self.stdscr, 6 + row, 2, truncate(ev.label(), w - 4), w - 4, attr)

    def draw_footer(self, hint: str) -> None:
        h, w = self.stdscr.getmaxyx()
        attr = self.palette["error"] if self.status_error else self.palette["success"]
        safe_addnstr(self.stdscr, h - 3, 1, " " * (w - 2), w - 2, attr)
        safe_addnstr(self.stdscr, h - 3, 1, truncate(self.status, w - 2), w - 2, attr)
        safe_addnstr(self.stdscr, h - 1, 1, truncate(hint, w - 2), w - 2, self.palette["instructions"])

    def draw(self) -> None:
        stdscr = self.stdscr
        stdscr.erase()
        h, w = stdscr.getmaxyx()
        if h < MIN_HEIGHT or w < MIN_WIDTH:
            msg = f"Terminal too small - minimum {MIN_WIDTH}x{MIN_HEIGHT} required"
            safe_addnstr(stdscr, h // 2, max(0, (w - len(msg)) // 2), msg, w - 1, self.palette["error"])
            stdscr.refresh()
            return

        mode = self.mode
        if isinstance(mode, EventListMode):
            self.draw_event_list_view(mode)
            self.draw_footer("Up/Down select  A add  D delete  E edit  Esc back")
        else:
            left = self.draw_calendar()
            if isinstance(mode, SearchMode):
                self.draw_search_panel(left, mode)
                self.draw_footer("Up/Down select  Enter go to date  Esc back")
            elif isinstance(mode, EventSelectMode):
                self.draw_event_panel(left, mode.index)
                self.draw_footer(f"Up/Down select  Enter {mode.purpose}  Esc cancel")
            else:
                self.draw_event_panel(left, None)
                self.draw_footer(key_legend())
        stdscr.refresh()

    def draw_prompt(self, label: str, text: str) -> None:
        h, w = self.stdscr.getmaxyx()
        line = f"{label} {text}"
        safe_addnstr(self.stdscr, h - 2, 1, " " * (w - 2), w - 2, self.palette["input"])
        safe_addnstr(self.stdscr, h - 2, 1, truncate(line, w - 2), w - 2, self.palette["input"])
        self.stdscr.refresh()

    # nested input loops

    def prompt_time(self, label: str, initial: str = "") -> str | None:
        """Collect HH:MM one digit at a time; None when cancelled with Esc."""
        validator = TimeInputValidator.prefilled(initial) if initial else TimeInputValidator()
        while True:
            self.draw_prompt(label, validator.display_string())
            key = self.stdscr.getch()
            if key == KEY_ESC:
                return None
            if key in ENTER_KEYS:
                if validator.is_complete():
                    return validator.value()
                continue
            if key in BACKSPACE_KEYS:
                validator.backspace()
                continue
            if 0 <= key < 256:
                validator.accept_digit(chr(key))

    def prompt_text(self, label: str, initial: str = "", max_length: int = MAX_DESCRIPTION) -> str | None:
        chars = list(initial[:max_length])
        while True:
            self.draw_prompt(label, "".join(chars) + "_")
            key = self.stdscr.getch()
            if key == KEY_ESC:
                return None
            if key in ENTER_KEYS:
                return "".join(chars).strip()
            if key in BACKSPACE_KEYS:
                if chars:
                    chars.pop()
                continue
            if 32 <= key <= 126 and len(chars) < max_length:
                chars.append(chr(key))

    def confirm(self, message: str) -> bool:
        self.draw_prompt(message, "(Enter: confirm, Esc: cancel)")
        return self.stdscr.getch() in ENTER_KEYS

    def confirm_exit(self) -> bool:
        return self.confirm(f"Exit {APP_TITLE}?")

    # event workflows

    def selected_events(self) -> list[Event]:
        return self.ctx.events.events_for_date(self.ctx.nav.current_selection())

    def add_event_flow(self) -> None:
        date = self.ctx.nav.current_selection()
        time_text = self.prompt_time(f"Time for {format_date(date)} (HH:MM):")
        if time_text is None:
            self.set_status("Add event cancelled.")
            return
        description = self.prompt_text("Description:")
        if description is None:
            self.set_status("Add event cancelled.")
            return
        try:
            event = make_event(date, time_text, description)
        except EventValidationError as exc:
            self.set_status(f"Error adding event: {exc}", error=True)
            return
        self.commit(lambda index: index.add(event), "Event added successfully!")

    def delete_event_flow(self, event: Event) -> None:
        if not self.confirm(f"Delete event: {event.time_text} - {event.description}?"):
            self.set_status("Delete cancelled.")
            return
        self.commit(lambda index: index.remove(event), "Event deleted successfully!")

    def edit_event_flow(self, event: Event) -> None:
        time_text = self.prompt_time("Time:", event.time_text)
        if time_text is None:
            self.set_status("Edit cancelled.")
            return
        description = self.prompt_text("Description:", event.description)
        if description is None:
            self.set_status("Edit cancelled.")
            return
        try:
            new_event = make_event(event.date, time_text, description or event.description)
        except EventValidationError as exc:
            self.set_status(f"Error editing event: {exc}", error=True)
            return
        self.commit(lambda index: index.replace(event, new_event), "Event edited successfully!")

    def search_flow(self) -> None:
        query = self.prompt_text("Search events:")
        if query is None:
            return
        results = self.ctx.events.search(query)
        self.mode = SearchMode(query, results)
        self.set_status(f"{len(results)} event(s) match {query!r}.")

    # per-mode key handlers; True means quit

    def handle_calendar(self, action: Action) -> bool:
        nav = self.ctx.nav
        if action in (Action.QUIT, Action.BACK):
            return self.confirm_exit()
        moves = {
            Action.MONTH_PREV: nav.shift_month_backward,
            Action.MONTH_NEXT: nav.shift_month_forward,
            Action.MOVE_LEFT: nav.move_left,
            Action.MOVE_RIGHT: nav.move_right,
            Action.MOVE_UP: nav.move_up,
            Action.MOVE_DOWN: nav.move_down,
            Action.RESET_CURRENT: nav.reset_to_current,
        }
        if action in moves:
            moves[action]()
        elif action == Action.SHOW_EVENTS:
            self.mode = EventListMode()
        elif action == Action.ADD_EVENT:
            self.add_event_flow()
        elif action in (Action.DELETE_EVENT, Action.EDIT_EVENT):
            purpose = "delete" if action == Action.DELETE_EVENT else "edit"
            if self.selected_events():
                self.mode = EventSelectMode(purpose)
            else:
                self.set_status(f"No events to {purpose} on this date", error=True)
        elif action == Action.SEARCH:
            self.search_flow()
        return False

    def handle_event_select(self, action: Action) -> bool:
        mode = self.mode
        if not isinstance(mode, EventSelectMode):
            return False
        events = self.selected_events()
        if action == Action.QUIT:
            return self.confirm_exit()
        if action == Action.MOVE_UP:
            mode.index = clamp_index(mode.index - 1, len(events))
        elif action == Action.MOVE_DOWN:
            mode.index = clamp_index(mode.index + 1, len(events))
        elif action == Action.SHOW_EVENTS:
            if events:
                target = events[clamp_index(mode.index, len(events))]
                if mode.purpose == "delete":
                    self.delete_event_flow(target)
                else:
                    self.edit_event_flow(target)
            self.mode = CalendarMode()
        elif action == Action.BACK:
            self.mode = CalendarMode()
        return False

    def handle_event_list(self, action: Action) -> bool:
        mode = self.mode
        if not isinstance(mode, EventListMode):
            return False
        events = self.selected_events()
        if action == Action.QUIT:
            return self.confirm_exit()
        if action == Action.BACK:
            self.mode = CalendarMode()
        elif action == Action.MOVE_UP:
            mode.index = clamp_index(mode.index - 1, len(events))
        elif action == Action.MOVE_DOWN:
            mode.index = clamp_index(mode.index + 1, len(events))
        elif action == Action.ADD_EVENT:
            self.add_event_flow()
        elif action in (Action.DELETE_EVENT, Action.EDIT_EVENT):
            if not events:
                self.set_status("No events on this date", error=True)
                return False
            target = events[clamp_index(mode.index, len(events))]
            if action == Action.DELETE_EVENT:
                self.delete_event_flow(target)
            else:
                self.edit_event_flow(target)
        mode.index = clamp_index(mode.index, len(self.selected_events()))
        return False

    def handle_search(self, action: Action) -> bool:
        mode = self.mode
        if not isinstance(mode, SearchMode):
            return False
        if action == Action.QUIT:
            return self.confirm_exit()
        if action == Action.BACK:
            self.mode = CalendarMode()
        elif action == Action.MOVE_UP:
            mode.index = clamp_index(mode.index - 1, len(mode.results))
        elif action == Action.MOVE_DOWN:
            mode.index = clamp_index(mode.index + 1, len(mode.results))
        elif action == Action.SHOW_EVENTS and mode.results:
            target = mode.results[mode.index]
            self.ctx.nav.jump_to_date(target.date)
            self.mode = CalendarMode()
            self.set_status(f"Jumped to {target.date_text}.")
        return False

    def run(self) -> None:
        curses.curs_set(0)
        curses.set_escdelay(25)
        self.stdscr.keypad(True)
        self.stdscr.timeout(-1)
        self.palette = init_palette(self.config.theme)
        self.set_status(f"{len(self.ctx.events)} events loaded.")
        while True:
            self.draw()
            key = self.stdscr.getch()
            if key == curses.KEY_RESIZE or key == -1:
                continue
            action = action_for_key(key)
            if action == Action.NONE:
                continue
            if self.handlers[type(self.mode)](action):
                break


def configure_logging(config: Config) -> None:
    log_file = config.resolved_log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    try:
        config = load_config(argv)
        config.events_file.parent.mkdir(parents=True, exist_ok=True)
        configure_logging(config)
    except (ConfigError, OSError) as exc:
        print(f"[ERROR] Failed to load configuration: {exc}", file=sys.stderr)
        raise SystemExit(1)

    try:
        events = load_events_with_migration(config.events_file, config.legacy_events_file)
    except EventStoreError as exc:
        logger.error("loading events failed: %s", exc)
        print(f"[ERROR] Failed to load events: {exc}", file=sys.stderr)
        raise SystemExit(1)

    ctx = CalendarContext.starting_today(EventIndex(events))
    try:
        curses.wrapper(lambda stdscr: CalendarApp(stdscr, config, ctx).run())
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return
    except curses.error:
        print("Terminal too small or unsupported for curses UI.")
        return
    print(f"{APP_TITLE} - Goodbye!")


if __name__ == "__main__":
    main()
