from __future__ import annotations

from dataclasses import dataclass

from rules.framing import ContestFrame
from rules.rating import format_rating, format_target_number
from rules.resolution import ContestWinner, ResolutionResult, StateError

BENEFIT_MODIFIERS = (5, 10, 15, 20)
CONSEQUENCE_MODIFIERS = (-5, -10, -15, -20)
MAX_DEGREE_INDEX = len(BENEFIT_MODIFIERS) - 1


@dataclass(frozen=True)
class ContestOutcome:
    prize: str
    player_ability_name: str
    player_rating: str
    resistance_target_number: str
    player_roll: int
    resistance_roll: int
    player_successes: int
    resistance_successes: int
    winner: ContestWinner
    degree: int
    # None on a tie: neither a benefit nor a consequence applies.
    benefit_consequence_modifier: int | None

    @property
    def is_player_victory(self) -> bool:
        return self.winner is ContestWinner.PLAYER

    @property
    def summary(self) -> str:
        return summarize(self.winner, self.degree)

    def to_dict(self) -> dict:
        return {
            "prize": self.prize,
            "player_ability_name": self.player_ability_name,
            "player_rating": self.player_rating,
            "resistance_target_number": self.resistance_target_number,
            "player_roll": self.player_roll,
            "resistance_roll": self.resistance_roll,
            "player_successes": self.player_successes,
            "resistance_successes": self.resistance_successes,
            "winner": self.winner.value,
            "degree": self.degree,
            "is_player_victory": self.is_player_victory,
            "benefit_consequence_modifier": self.benefit_consequence_modifier,
            "summary": self.summary,
        }


def summarize(winner: ContestWinner, degree: int) -> str:
    if winner is ContestWinner.PLAYER:
        return f"{degree} Degrees of Victory for the player!"
    if winner is ContestWinner.RESISTANCE:
        return f"{degree} Degrees of Defeat for the player."
    if winner is ContestWinner.TIE:
        return "The contest is a tie."
    raise ValueError(f"Unknown contest winner: {winner!r}")


def benefit_consequence_modifier(winner: ContestWinner, degree: int) -> int | None:
    index = max(0, min(MAX_DEGREE_INDEX, degree))
    if winner is ContestWinner.PLAYER:
        return BENEFIT_MODIFIERS[index]
    if winner is ContestWinner.RESISTANCE:
        return CONSEQUENCE_MODIFIERS[index]
    if winner is ContestWinner.TIE:
        return None
    raise ValueError(f"Unknown contest winner: {winner!r}")


def interpret_outcome(result: ResolutionResult, frame: ContestFrame) -> ContestOutcome:
    if frame.player_ability_name is None or frame.player_rating is None:
        raise StateError("Contest frame has no player ability to report")

    return ContestOutcome(
        prize=frame.prize,
        player_ability_name=frame.player_ability_name,
        player_rating=format_rating(frame.player_rating),
        resistance_target_number=format_target_number(frame.resistance),
        player_roll=result.player_roll,
        resistance_roll=result.resistance_roll,
        player_successes=result.player_successes,
        resistance_successes=result.resistance_successes,
        winner=result.winner,
        degree=result.degree,
        benefit_consequence_modifier=benefit_consequence_modifier(
            result.winner, result.degree
        ),
    )
