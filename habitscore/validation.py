"""Boundary validation — checks caller input before it reaches the store or engine.

Every parser either returns a clean value or raises ValidationError naming
the offending field.
"""

import re
from datetime import date

from habitscore.config import HABIT_NAME_MAX_LENGTH

_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ValidationError(ValueError):
    """Invalid caller input. `field` is the name of the bad input."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def parse_day_stamp(value, field: str = "day") -> date:
    """`YYYY-MM-DD` that is also a real calendar date."""
    if not isinstance(value, str) or not _DAY_RE.match(value):
        raise ValidationError(field, f"{field} must be a YYYY-MM-DD date.")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(field, f"{field} is not a real calendar date.") from None


def parse_pass_percentage(value) -> int:
    """Integer 0-100. Accepts ints and integer-looking strings."""
    if isinstance(value, bool):
        raise ValidationError("pass_percentage", "Pass percentage must be 0-100.")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError("pass_percentage", "Pass percentage must be 0-100.") from None
    if not isinstance(value, int) or not 0 <= value <= 100:
        raise ValidationError("pass_percentage", "Pass percentage must be 0-100.")
    return value


def parse_habit_name(value, field: str = "name") -> str:
    name = value.strip() if isinstance(value, str) else ""
    if not name or len(name) > HABIT_NAME_MAX_LENGTH:
        raise ValidationError(
            field, f"Habit name is required (1-{HABIT_NAME_MAX_LENGTH} characters)."
        )
    return name


def parse_template_selection(values) -> list[str]:
    if not isinstance(values, (list, tuple)):
        raise ValidationError("selected", "Invalid template selection.")
    try:
        return [parse_habit_name(v, field="selected") for v in values]
    except ValidationError:
        raise ValidationError("selected", "Invalid template selection.") from None


def parse_habit_id(value) -> int:
    if isinstance(value, bool):
        raise ValidationError("habit_id", "Invalid habit id.")
    try:
        hid = int(value)
    except (TypeError, ValueError):
        raise ValidationError("habit_id", "Invalid habit id.") from None
    if hid <= 0:
        raise ValidationError("habit_id", "Invalid habit id.")
    return hid


def parse_completion(habit_id, day, completed) -> tuple[int, date, bool]:
    """Validate a check/uncheck payload -> (habit_id, day, completed)."""
    if not isinstance(completed, bool):
        raise ValidationError("completed", "Invalid completion payload.")
    return parse_habit_id(habit_id), parse_day_stamp(day), completed

