from __future__ import annotations

import unittest

from time_input import TimeInputValidator


def typed(*digits: str) -> TimeInputValidator:
    validator = TimeInputValidator()
    for digit in digits:
        validator.accept_digit(digit)
    return validator


class TestTimeInputValidator(unittest.TestCase):
    def test_first_digit_must_be_one_or_two(self) -> None:
        for digit in "0345678 9x":
            with self.subTest(digit=digit):
                self.assertFalse(TimeInputValidator().accept_digit(digit))
        self.assertTrue(TimeInputValidator().accept_digit("1"))
        self.assertTrue(TimeInputValidator().accept_digit("2"))

    def test_hours_after_two_stop_at_twenty_three(self) -> None:
        validator = typed("2")
        self.assertFalse(validator.accept_digit("5"))
        self.assertEqual(validator.display_string(), "2_")
        self.assertTrue(validator.accept_digit("3"))
        self.assertEqual(validator.display_string(), "23:__")

    def test_hours_after_one_allow_any_digit(self) -> None:
        validator = typed("1", "9")
        self.assertEqual(len(validator), 2)
        self.assertEqual(validator.display_string(), "19:__")

    def test_first_minute_digit_is_zero_to_five(self) -> None:
        validator = typed("1", "4")
        self.assertFalse(validator.accept_digit("6"))
        self.assertTrue(validator.accept_digit("5"))
        self.assertEqual(validator.display_string(), "14:5_")

    def test_full_buffer_rejects_more_digits(self) -> None:
        validator = typed("1", "4", "3", "0")
        self.assertEqual(validator.display_string(), "14:30")
        self.assertTrue(validator.is_complete())
        self.assertEqual(validator.value(), "14:30")
        self.assertFalse(validator.accept_digit("0"))
        self.assertEqual(validator.value(), "14:30")

    def test_display_for_each_length(self) -> None:
        validator = TimeInputValidator()
        self.assertEqual(validator.display_string(), "")
        shown = []
        for digit in "2359":
            validator.accept_digit(digit)
            shown.append(validator.display_string())
        self.assertEqual(shown, ["2_", "23:__", "23:5_", "23:59"])

    def test_backspace(self) -> None:
        validator = typed("2", "1", "4")
        validator.backspace()
        self.assertEqual(validator.display_string(), "21:__")
        validator.backspace()
        validator.backspace()
        validator.backspace()
        self.assertEqual(validator.display_string(), "")
        self.assertFalse(validator.is_complete())

    def test_value_requires_complete_buffer(self) -> None:
        with self.assertRaises(ValueError):
            typed("1", "2", "3").value()

    def test_prefilled(self) -> None:
        validator = TimeInputValidator.prefilled("09:30")
        self.assertTrue(validator.is_complete())
        self.assertEqual(validator.value(), "09:30")
        validator.backspace()
        self.assertEqual(validator.display_string(), "09:3_")
        self.assertEqual(len(TimeInputValidator.prefilled("25:00")), 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
