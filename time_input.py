#!/usr/bin/env python3
"""Digit-by-digit HH:MM entry that never holds an invalid 24-hour time."""

from __future__ import annotations

from calendar_dates import is_valid_time_string

MAX_DIGITS = 4


class TimeInputValidator:
    """Four-slot buffer (HH then MM) filled one keystroke at a time.

    Each digit is checked against its slot before it is accepted, so a full
    buffer is always a valid time and rejected digits leave the buffer as is.
    """

    def __init__(self) -> None:
        self._digits: list[str] = []

    @classmethod
    def prefilled(cls, value: str) -> TimeInputValidator:
        """Seed the buffer from an existing "HH:MM" value, e.g. when editing."""
        validator = cls()
        if is_valid_time_string(value) and len(value) == 5:
            validator._digits = list(value[:2] + value[3:])
        return validator

    def __len__(self) -> int:
        return len(self._digits)

    def accepts(self, digit: str) -> bool:
        if len(digit) != 1 or not digit.isdigit():
            return False
        position = len(self._digits)
        if position == 0:
            return digit in "12"
        if position == 1:
            if self._digits[0] == "1":
                return True
            return "0" <= digit <= "3"
        if position == 2:
            return "0" <= digit <= "5"
        return position == 3

    def accept_digit(self, digit: str) -> bool:
        if not self.accepts(digit):
            return False
        self._digits.append(digit)
        return True

    def backspace(self) -> None:
        if self._digits:
            self._digits.pop()

    def clear(self) -> None:
        self._digits.clear()

    def display_string(self) -> str:
        text = "".join(self._digits)
        if not text:
            return ""
        if len(text) == 1:
            return text + "_"
        padded = text.ljust(MAX_DIGITS, "_")
        return f"{padded[:2]}:{padded[2:]}"

    def is_complete(self) -> bool:
        return len(self._digits) == MAX_DIGITS

    def value(self) -> str:
        if not self.is_complete():
            raise ValueError(f"time input incomplete: {self.display_string()!r}")
        return self.display_string()
