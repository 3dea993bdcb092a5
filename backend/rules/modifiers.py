from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rules.validation import ValidationError, require_choice

ALLOWED_MODIFIER_VALUES = frozenset({-10, -5, 5, 10})


class ModifierType(str, Enum):
    STRETCH = "Stretch"
    SITUATIONAL = "Situational"
    AUGMENT = "Augment"
    HINDRANCE = "Hindrance"
    BENEFIT_CONSEQUENCE = "BenefitConsequence"

    @classmethod
    def parse(cls, text: str) -> ModifierType:
        cleaned = (text or "").strip().replace("_", "").replace(" ", "").lower()
        for member in cls:
            if cleaned in {member.value.lower(), member.name.replace("_", "").lower()}:
                return member
        raise ValidationError(f"Invalid modifier type: {text}")


@dataclass(frozen=True)
class Modifier:
    type: ModifierType
    value: int

    def __post_init__(self) -> None:
        try:
            modifier_type = ModifierType(self.type)
        except ValueError as exc:
            raise ValidationError(f"Invalid modifier type: {self.type!r}") from exc
        object.__setattr__(self, "type", modifier_type)
        require_choice(self.value, ALLOWED_MODIFIER_VALUES, "Modifier value")
        # A stretch only ever penalises an ability that does not quite fit.
        if self.type is ModifierType.STRETCH and self.value > 0:
            raise ValidationError("Stretch modifiers must be negative.")
