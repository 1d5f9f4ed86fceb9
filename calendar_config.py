#!/usr/bin/env python3
"""Settings for the ASCII calendar: files, week start, colours."""

from __future__ import annotations

import argparse
import curses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from calendar_dates import MONDAY, SUNDAY

APP_DIR_NAME = ".ascii-calendar"
EVENTS_FILE_NAME = "events.json"
CONFIG_FILE_NAME = "configuration.json"
LOG_FILE_NAME = "calendar.log"
LEGACY_EVENTS_FILE = Path("events.txt")

THEME_ELEMENTS = (
    "month_header",
    "day_header",
    "regular_day",
    "today",
    "selected",
    "selected_today",
    "event_day",
    "event_header",
    "event_text",
    "selected_event",
    "no_events",
    "more_events",
    "error",
    "success",
    "input",
    "search_result",
    "instructions",
)

COLORS = {
    "default": -1,
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}

ATTRIBUTES = {
    "bold": curses.A_BOLD,
    "underline": curses.A_UNDERLINE,
    "reverse": curses.A_REVERSE,
}


def _theme(**pairs: tuple[str, str]) -> dict[str, tuple[str, str]]:
    return {name: pairs[name] for name in THEME_ELEMENTS}


DEFAULT_THEME = _theme(
    month_header=("magenta|bold", "default"),
    day_header=("cyan", "default"),
    regular_day=("default", "default"),
    today=("yellow|bold", "default"),
    selected=("white|bold", "blue"),
    selected_today=("white|bold", "cyan"),
    event_day=("green", "default"),
    event_header=("yellow|bold", "default"),
    event_text=("white", "default"),
    selected_event=("black|bold", "yellow"),
    no_events=("white", "default"),
    more_events=("magenta", "default"),
    error=("red", "default"),
    success=("green", "default"),
    input=("black|bold", "yellow"),
    search_result=("white", "default"),
    instructions=("cyan", "default"),
)

DARK_THEME = _theme(
    month_header=("bright_magenta|bold", "default"),
    day_header=("bright_cyan", "default"),
    regular_day=("white", "default"),
    today=("bright_yellow|bold", "default"),
    selected=("black|bold", "bright_blue"),
    selected_today=("black|bold", "bright_cyan"),
    event_day=("bright_green", "default"),
    event_header=("bright_yellow|bold", "default"),
    event_text=("bright_white", "default"),
    selected_event=("black|bold", "bright_yellow"),
    no_events=("bright_white", "default"),
    more_events=("bright_magenta", "default"),
    error=("bright_red", "default"),
    success=("bright_green", "default"),
    input=("black|bold", "bright_yellow"),
    search_result=("bright_white", "default"),
    instructions=("bright_cyan", "default"),
)

LIGHT_THEME = _theme(
    month_header=("blue|bold", "default"),
    day_header=("blue", "default"),
    regular_day=("black", "default"),
    today=("red|bold", "default"),
    selected=("white|bold", "blue"),
    selected_today=("white|bold", "red"),
    event_day=("green|bold", "default"),
    event_header=("blue|bold", "default"),
    event_text=("black", "default"),
    selected_event=("white|bold", "blue"),
    no_events=("black", "default"),
    more_events=("blue", "default"),
    error=("red|bold", "default"),
    success=("green|bold", "default"),
    input=("black|bold", "white"),
    search_result=("black", "default"),
    instructions=("blue", "default"),
)

THEMES = {"default": DEFAULT_THEME, "dark": DARK_THEME, "light": LIGHT_THEME}


class ConfigError(ValueError):
    pass


def parse_color(text: str) -> tuple[int, int]:
    """Turn "name" or "name|attr|attr" into a curses colour and attribute mask."""
    parts = [part.strip() for part in text.split("|")] if text else ["default"]
    name = parts[0] or "default"
    attrs = 0
    if name.startswith("bright_"):
        name = name[len("bright_") :]
        attrs |= curses.A_BOLD
    if name not in COLORS:
        raise ConfigError(f"unknown color: {parts[0]}")
    for attr in parts[1:]:
        if attr not in ATTRIBUTES:
            raise ConfigError(f"unknown attribute: {attr}")
        attrs |= ATTRIBUTES[attr]
    return COLORS[name], attrs


def validate_theme(theme: dict[str, tuple[str, str]]) -> None:
    for element, (fg, bg) in theme.items():
        for text in (fg, bg):
            try:
                parse_color(text)
            except ConfigError as exc:
                raise ConfigError(f"invalid color {text!r} for {element}: {exc}") from exc


def default_app_dir() -> Path:
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(".")
    return home / APP_DIR_NAME


@dataclass
class Config:
    events_file: Path = field(default_factory=lambda: default_app_dir() / EVENTS_FILE_NAME)
    config_file: Path = field(default_factory=lambda: default_app_dir() / CONFIG_FILE_NAME)
    log_file: Path | None = None
    legacy_events_file: Path | None = LEGACY_EVENTS_FILE
    week_start: int = SUNDAY
    theme: dict[str, tuple[str, str]] = field(default_factory=lambda: dict(DEFAULT_THEME))
    debug: bool = False

    @property
    def resolved_log_file(self) -> Path:
        if self.log_file is not None:
            return self.log_file
        return self.events_file.parent / LOG_FILE_NAME

    def apply(self, data: dict[str, Any]) -> None:
        """Overlay values from a decoded configuration file."""
        if "events_file_path" in data:
            self.events_file = Path(str(data["events_file_path"])).expanduser()
        if "log_file" in data:
            self.log_file = Path(str(data["log_file"])).expanduser()
        if "week_start_day" in data:
            week_start = data["week_start_day"]
            if week_start not in (SUNDAY, MONDAY):
                raise ConfigError(f"week_start_day must be 0 (Sunday) or 1 (Monday), got {week_start!r}")
            self.week_start = week_start
        if "theme" in data:
            name = str(data["theme"]).lower()
            if name not in THEMES:
                raise ConfigError(f"unknown theme: {data['theme']}")
            self.theme = dict(THEMES[name])
        overrides = data.get("ui_theme", {})
        if not isinstance(overrides, dict):
            raise ConfigError("ui_theme must be an object")
        for key, value in overrides.items():
            element, _, side = key.rpartition("_")
            if element not in self.theme or side not in ("fg", "bg"):
                raise ConfigError(f"unknown ui_theme key: {key}")
            fg, bg = self.theme[element]
            self.theme[element] = (str(value), bg) if side == "fg" else (fg, str(value))
        validate_theme(self.theme)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "events_file_path": str(self.events_file),
            "week_start_day": self.week_start,
            "ui_theme": {
                f"{element}_{side}": value
                for element, pair in self.theme.items()
                for side, value in zip(("fg", "bg"), pair)
            },
        }
        if self.log_file is not None:
            data["log_file"] = str(self.log_file)
        return data

    def save(self) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascii-calendar",
        description="Three-month terminal calendar with dated events.",
    )
    parser.add_argument("-c", "--config", type=Path, help="path to configuration file")
    parser.add_argument("-f", "--events", type=Path, help="path to events file")
    parser.add_argument("--log-file", type=Path, help="write the application log here")
    parser.add_argument("--debug", action="store_true", help="log at debug level")
    return parser


def load_config(argv: list[str] | None = None) -> Config:
    args = build_arg_parser().parse_args(argv)
    config = Config()
    if args.config is not None:
        config.config_file = args.config.expanduser()

    if config.config_file.exists():
        try:
            data = json.loads(config.config_file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ConfigError(f"failed to load configuration file {config.config_file}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{config.config_file}: expected a JSON object")
        config.apply(data)

    # command line wins over the file
    if args.events is not None:
        config.events_file = args.events.expanduser()
    if args.log_file is not None:
        config.log_file = args.log_file.expanduser()
    config.debug = args.debug
    return config
