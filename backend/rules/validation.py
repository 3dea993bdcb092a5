from __future__ import annotations

from typing import Iterable


class ValidationError(ValueError):
    pass


class RangeError(ValidationError):
    pass


class FormatError(ValidationError):
    pass


def require_text(value: str | None, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} cannot be empty.")
    return value


def require_int(value: int, label: str) -> int:
    # bool is an int subclass but never a valid score.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be a whole number, got {value!r}.")
    return value


def require_range(value: int, *, low: int, high: int, label: str) -> int:
    require_int(value, label)
    if not low <= value <= high:
        raise RangeError(f"{label} must be between {low} and {high}, got {value}.")
    return value


def require_choice(value: int, allowed: Iterable[int], label: str) -> int:
    require_int(value, label)
    options = sorted(allowed)
    if value not in options:
        formatted = ", ".join(str(option) for option in options)
        raise RangeError(f"{label} must be one of {formatted}, got {value}.")
    return value
