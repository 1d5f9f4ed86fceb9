#!/usr/bin/env python3
"""Key bindings of the ASCII calendar, mapped to abstract actions."""

from __future__ import annotations

import curses
from enum import Enum

KEY_ESC = 27
KEY_CTRL_C = 3
ENTER_KEYS = (10, 13, curses.KEY_ENTER)
BACKSPACE_KEYS = (8, 127, curses.KEY_BACKSPACE)


class Action(Enum):
    NONE = "none"
    QUIT = "quit"
    MONTH_PREV = "month_prev"
    MONTH_NEXT = "month_next"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SHOW_EVENTS = "show_events"
    ADD_EVENT = "add_event"
    DELETE_EVENT = "delete_event"
    EDIT_EVENT = "edit_event"
    BACK = "back"
    RESET_CURRENT = "reset_current"
    SEARCH = "search"


SPECIAL_KEYS = {
    KEY_ESC: Action.BACK,
    KEY_CTRL_C: Action.QUIT,
    curses.KEY_LEFT: Action.MOVE_LEFT,
    curses.KEY_RIGHT: Action.MOVE_RIGHT,
    curses.KEY_UP: Action.MOVE_UP,
    curses.KEY_DOWN: Action.MOVE_DOWN,
    **{key: Action.SHOW_EVENTS for key in ENTER_KEYS},
}

LETTER_KEYS = {
    "q": Action.QUIT,
    "b": Action.MONTH_PREV,
    "n": Action.MONTH_NEXT,
    "h": Action.MOVE_LEFT,
    "l": Action.MOVE_RIGHT,
    "k": Action.MOVE_UP,
    "j": Action.MOVE_DOWN,
    "a": Action.ADD_EVENT,
    "d": Action.DELETE_EVENT,
    "e": Action.EDIT_EVENT,
    "c": Action.RESET_CURRENT,
    "f": Action.SEARCH,
}

DESCRIPTIONS = {
    Action.QUIT: "Quit",
    Action.MONTH_PREV: "Previous month",
    Action.MONTH_NEXT: "Next month",
    Action.MOVE_LEFT: "Move left",
    Action.MOVE_RIGHT: "Move right",
    Action.MOVE_UP: "Move up",
    Action.MOVE_DOWN: "Move down",
    Action.SHOW_EVENTS: "Show events",
    Action.ADD_EVENT: "Add event",
    Action.DELETE_EVENT: "Delete event",
    Action.EDIT_EVENT: "Edit event",
    Action.BACK: "Back",
    Action.RESET_CURRENT: "Today",
    Action.SEARCH: "Find",
}


def action_for_key(key: int) -> Action:
    if key in SPECIAL_KEYS:
        return SPECIAL_KEYS[key]
    if 0 <= key < 256:
        return LETTER_KEYS.get(chr(key).lower(), Action.NONE)
    return Action.NONE


def describe(action: Action) -> str:
    return DESCRIPTIONS.get(action, "Unknown action")


def key_legend() -> str:
    return (
        "B/N month  H/J/K/L move  Enter events  A add  D delete  E edit  "
        "C today  F find  Q quit"
    )
