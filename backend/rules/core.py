from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field

from rules.validation import require_range

D20_SIDES = 20
ROLL_LOG_LIMIT = 100


@dataclass(frozen=True)
class DiceRolls:
    player_roll: int
    resistance_roll: int

    def __post_init__(self) -> None:
        require_range(self.player_roll, low=1, high=D20_SIDES, label="Player roll")
        require_range(
            self.resistance_roll, low=1, high=D20_SIDES, label="Resistance roll"
        )


@dataclass
class DiceRoller:
    """Seeded d20 source. Keeps only the most recent draws in ``roll_log``."""

    seed: int | None = None
    log_limit: int = ROLL_LOG_LIMIT
    roll_log: deque = field(init=False)
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)
        self.roll_log = deque(maxlen=self.log_limit)


def roll_d20(roller: DiceRoller, *, label: str | None = None) -> int:
    result = roller.rng.randint(1, D20_SIDES)
    roller.roll_log.append({"label": label, "result": result})
    return result


def roll_contest_dice(roller: DiceRoller) -> DiceRolls:
    # Independent draws, player first.
    player_roll = roll_d20(roller, label="player")
    resistance_roll = roll_d20(roller, label="resistance")
    return DiceRolls(player_roll=player_roll, resistance_roll=resistance_roll)
