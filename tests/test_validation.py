import pytest

from rules.validation import (
    FormatError,
    RangeError,
    ValidationError,
    require_choice,
    require_range,
    require_text,
)


def test_error_hierarchy() -> None:
    assert issubclass(RangeError, ValidationError)
    assert issubclass(FormatError, ValidationError)
    assert issubclass(ValidationError, ValueError)


def test_require_text() -> None:
    assert require_text("Stealth", "Ability name") == "Stealth"
    with pytest.raises(ValidationError) as excinfo:
        require_text(" \t", "Ability name")
    assert "Ability name" in str(excinfo.value)


def test_require_range_is_inclusive() -> None:
    assert require_range(1, low=1, high=20, label="Roll") == 1
    assert require_range(20, low=1, high=20, label="Roll") == 20
    with pytest.raises(RangeError):
        require_range(21, low=1, high=20, label="Roll")


def test_require_choice_lists_options() -> None:
    with pytest.raises(RangeError) as excinfo:
        require_choice(7, {10, -5, 5, -10}, "Modifier value")
    assert "-10, -5, 5, 10" in str(excinfo.value)
