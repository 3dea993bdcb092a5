from __future__ import annotations

from rules.modifiers import Modifier
from rules.rating import Rating, TargetNumber
from rules.validation import require_text


class ContestFrame:
    """A framed contest: the prize at stake and the resistance to overcome.

    The frame has a single owner. The player's ability is submitted once (a
    later submission replaces it) and modifiers are appended in the order the
    GM applies them. The player's target number is derived on read.
    """

    def __init__(self, prize: str, resistance: TargetNumber) -> None:
        self._prize = require_text(prize, "Prize")
        self._resistance = resistance
        self.player_ability_name: str | None = None
        self.player_rating: Rating | None = None
        self._modifiers: list[Modifier] = []

    @property
    def prize(self) -> str:
        return self._prize

    @property
    def resistance(self) -> TargetNumber:
        return self._resistance

    @property
    def modifiers(self) -> tuple[Modifier, ...]:
        return tuple(self._modifiers)

    @property
    def is_ready_for_resolution(self) -> bool:
        return (
            bool(self._prize)
            and self.player_ability_name is not None
            and self.player_rating is not None
        )

    def set_player_ability(self, name: str, rating: Rating) -> None:
        self.player_ability_name = require_text(name, "Ability name")
        self.player_rating = rating

    def apply_modifier(self, modifier: Modifier) -> None:
        self._modifiers.append(modifier)

    def total_modifier(self) -> int:
        return sum(modifier.value for modifier in self._modifiers)

    def player_target_number(self) -> TargetNumber | None:
        if self.player_rating is None:
            return None
        return TargetNumber.from_rating(self.player_rating, self.total_modifier())

    def to_dict(self) -> dict:
        player_tn = self.player_target_number()
        return {
            "prize": self._prize,
            "resistance": str(self._resistance),
            "player_ability_name": self.player_ability_name,
            "player_rating": str(self.player_rating) if self.player_rating else None,
            "modifiers": [
                {"type": modifier.type.value, "value": modifier.value}
                for modifier in self._modifiers
            ],
            "player_target_number": (
                {
                    "base": player_tn.base,
                    "masteries": player_tn.masteries,
                    "modifier": player_tn.modifier,
                    "effective_base": player_tn.effective_base,
                }
                if player_tn
                else None
            ),
            "is_ready_for_resolution": self.is_ready_for_resolution,
        }
