from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from rules.core import DiceRoller, DiceRolls, roll_contest_dice
from rules.framing import ContestFrame
from rules.rating import TargetNumber

logger = logging.getLogger(__name__)

BIG_SUCCESS = 2
SUCCESS = 1
FAILURE = 0


class StateError(RuntimeError):
    pass


class ContestWinner(str, Enum):
    PLAYER = "Player"
    RESISTANCE = "Resistance"
    TIE = "Tie"


@dataclass(frozen=True)
class Adjudication:
    winner: ContestWinner
    degree: int
    player_successes: int
    resistance_successes: int


@dataclass(frozen=True)
class ResolutionResult:
    player_roll: int
    resistance_roll: int
    player_successes: int
    resistance_successes: int
    winner: ContestWinner
    degree: int

    def to_dict(self) -> dict:
        return {
            "player_roll": self.player_roll,
            "resistance_roll": self.resistance_roll,
            "player_successes": self.player_successes,
            "resistance_successes": self.resistance_successes,
            "winner": self.winner.value,
            "degree": self.degree,
        }


def count_successes(roll: int, target: TargetNumber) -> int:
    """Successes scored by ``roll`` against ``target``.

    Rolling exactly the effective base is a big success (2), rolling under it
    is a success (1) and rolling over it scores nothing. Every mastery adds one
    success whatever the roll.
    """
    effective = target.effective_base
    if roll == effective:
        base_successes = BIG_SUCCESS
    elif roll < effective:
        base_successes = SUCCESS
    else:
        base_successes = FAILURE
    return base_successes + target.masteries


def adjudicate(
    player_roll: int,
    resistance_roll: int,
    player_tn: TargetNumber,
    resistance_tn: TargetNumber,
) -> Adjudication:
    player_successes = count_successes(player_roll, player_tn)
    resistance_successes = count_successes(resistance_roll, resistance_tn)

    if player_successes != resistance_successes:
        winner = (
            ContestWinner.PLAYER
            if player_successes > resistance_successes
            else ContestWinner.RESISTANCE
        )
        degree = abs(player_successes - resistance_successes)
    elif player_roll > resistance_roll:
        # Tied successes go to the higher roll, with no degrees.
        winner, degree = ContestWinner.PLAYER, 0
    elif resistance_roll > player_roll:
        winner, degree = ContestWinner.RESISTANCE, 0
    else:
        winner, degree = ContestWinner.TIE, 0

    return Adjudication(
        winner=winner,
        degree=degree,
        player_successes=player_successes,
        resistance_successes=resistance_successes,
    )


class ContestResolver:
    """Resolves a ready contest frame into a :class:`ResolutionResult`.

    ``resolve(frame, rolls)`` is deterministic. Omitting ``rolls`` draws a
    fresh pair from the injected dice roller first.
    """

    def __init__(self, dice: DiceRoller | None = None) -> None:
        self.dice = dice if dice is not None else DiceRoller()

    def resolve(
        self, frame: ContestFrame, rolls: DiceRolls | None = None
    ) -> ResolutionResult:
        if not frame.is_ready_for_resolution:
            raise StateError("Contest frame is not ready for resolution")

        if rolls is None:
            rolls = roll_contest_dice(self.dice)
            logger.debug(
                "Drew contest dice player=%s resistance=%s",
                rolls.player_roll,
                rolls.resistance_roll,
            )

        player_tn = frame.player_target_number()
        adjudication = adjudicate(
            rolls.player_roll, rolls.resistance_roll, player_tn, frame.resistance
        )
        logger.info(
            "Resolved contest for %r: %s wins by %s",
            frame.prize,
            adjudication.winner.value,
            adjudication.degree,
        )
        return ResolutionResult(
            player_roll=rolls.player_roll,
            resistance_roll=rolls.resistance_roll,
            player_successes=adjudication.player_successes,
            resistance_successes=adjudication.resistance_successes,
            winner=adjudication.winner,
            degree=adjudication.degree,
        )
