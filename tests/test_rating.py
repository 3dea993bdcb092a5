import pytest

from rules.rating import (
    Rating,
    TargetNumber,
    format_rating,
    format_target_number,
    parse_rating,
)
from rules.validation import FormatError, RangeError, ValidationError


@pytest.mark.parametrize(
    "notation, base, masteries",
    [("15", 15, 0), ("5M", 5, 1), ("6M2", 6, 2), ("6m2", 6, 2), ("20m", 20, 1)],
)
def test_parse_rating(notation: str, base: int, masteries: int) -> None:
    assert parse_rating(notation) == Rating(base=base, masteries=masteries)


@pytest.mark.parametrize("notation", ["", "M", "5X", "-3", "5M-1", "5 M", "abc"])
def test_parse_rating_rejects_bad_notation(notation: str) -> None:
    with pytest.raises(FormatError):
        parse_rating(notation)


def test_parse_rating_checks_base_range() -> None:
    with pytest.raises(RangeError):
        parse_rating("21M")


def test_format_rating() -> None:
    assert format_rating(Rating(15)) == "15"
    assert format_rating(Rating(5, 1)) == "5M"
    assert format_rating(Rating(6, 2)) == "6M2"
    assert str(Rating(6, 2)) == "6M2"


@pytest.mark.parametrize("base", range(1, 21))
def test_every_base_on_the_die_is_valid(base: int) -> None:
    rating = Rating(base, masteries=base % 3)
    assert parse_rating(format_rating(rating)) == rating


@pytest.mark.parametrize("base", [0, 21])
def test_rating_base_out_of_range(base: int) -> None:
    with pytest.raises(RangeError):
        Rating(base)


def test_negative_masteries_rejected() -> None:
    with pytest.raises(RangeError):
        Rating(10, masteries=-1)


def test_range_errors_are_validation_errors() -> None:
    with pytest.raises(ValidationError):
        Rating(0)


def test_target_number_from_rating_keeps_masteries() -> None:
    target = TargetNumber.from_rating(Rating(12, 2), modifier=-5)
    assert target.base == 12
    assert target.masteries == 2
    assert target.modifier == -5
    assert target.effective_base == 7


def test_effective_base_is_clamped() -> None:
    assert TargetNumber(base=18, modifier=5).effective_base == 20
    assert TargetNumber(base=3, modifier=-10).effective_base == 1
    assert TargetNumber(base=18, masteries=2, modifier=40).masteries == 2


def test_target_number_notation_ignores_modifier() -> None:
    target = TargetNumber(base=14, masteries=1, modifier=10)
    assert format_target_number(target) == "14M"
    assert str(TargetNumber(base=14)) == "14"


@pytest.mark.parametrize("notation", ["15\n", "15 ", "5M\n", "\n15"])
def test_parse_rating_rejects_surrounding_whitespace(notation: str) -> None:
    with pytest.raises(FormatError):
        parse_rating(notation)


@pytest.mark.parametrize("notation", ["1" * 5000, "5M" + "9" * 5000, "1" * 30])
def test_parse_rating_huge_numbers_are_out_of_range(notation: str) -> None:
    with pytest.raises(RangeError):
        parse_rating(notation)


@pytest.mark.parametrize("base", [10.5, 10.0, True])
def test_rating_base_must_be_whole_number(base) -> None:
    with pytest.raises(ValidationError):
        Rating(base)


def test_rating_masteries_must_be_whole_number() -> None:
    with pytest.raises(ValidationError):
        Rating(10, masteries=1.5)


def test_target_number_rejects_non_integers() -> None:
    with pytest.raises(ValidationError):
        TargetNumber(base=10.5)
    with pytest.raises(ValidationError):
        TargetNumber(base=10, modifier=False)
