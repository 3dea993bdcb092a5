from __future__ import annotations

import re
from dataclasses import dataclass

from rules.validation import FormatError, RangeError, require_int, require_range

RATING_PATTERN = re.compile(r"(\d+)(M(\d*))?", re.IGNORECASE)

MIN_BASE = 1
MAX_BASE = 20


@dataclass(frozen=True)
class Rating:
    """An ability rating such as ``15``, ``5M`` or ``6M2``.

    Each mastery stands for another 20 points of ability and is scored as one
    automatic success instead of raising the base past 20.
    """

    base: int
    masteries: int = 0

    def __post_init__(self) -> None:
        require_range(self.base, low=MIN_BASE, high=MAX_BASE, label="Rating base")
        require_int(self.masteries, "Masteries")
        if self.masteries < 0:
            raise RangeError(f"Masteries cannot be negative, got {self.masteries}.")

    def __str__(self) -> str:
        return format_rating(self)


@dataclass(frozen=True)
class TargetNumber:
    base: int
    masteries: int = 0
    modifier: int = 0

    def __post_init__(self) -> None:
        require_int(self.base, "Target number base")
        require_int(self.masteries, "Target number masteries")
        require_int(self.modifier, "Target number modifier")

    @classmethod
    def from_rating(cls, rating: Rating, modifier: int = 0) -> TargetNumber:
        return cls(base=rating.base, masteries=rating.masteries, modifier=modifier)

    @property
    def effective_base(self) -> int:
        return max(MIN_BASE, min(MAX_BASE, self.base + self.modifier))

    def __str__(self) -> str:
        return format_target_number(self)


def _notation(base: int, masteries: int) -> str:
    if masteries == 0:
        return str(base)
    if masteries == 1:
        return f"{base}M"
    return f"{base}M{masteries}"


def parse_rating(notation: str) -> Rating:
    match = RATING_PATTERN.fullmatch(notation or "")
    if not match:
        raise FormatError(f"Invalid rating notation: {notation!r}")

    base_text, mastery_marker, mastery_text = match.groups()
    try:
        base = int(base_text)
        if mastery_marker is None:
            masteries = 0
        elif mastery_text:
            masteries = int(mastery_text)
        else:
            masteries = 1
    except ValueError as exc:
        # Digit strings past the interpreter's int conversion limit.
        raise RangeError(f"Rating notation is out of range: {notation[:20]}...") from exc
    return Rating(base=base, masteries=masteries)


def format_rating(rating: Rating) -> str:
    return _notation(rating.base, rating.masteries)


def format_target_number(target: TargetNumber) -> str:
    # The modifier is shown separately by callers, never folded into the notation.
    return _notation(target.base, target.masteries)
