import math
import random
from typing import Sequence, TypeVar

from dicemult.models import Action, DamageType, DiceConfig, HitType, RollOutcome

T = TypeVar("T")

# ============================================================
# RULES ENGINE
# ============================================================

SCALE_BASE = 0.5        # scale at roll 1
SCALE_STEP = 0.3        # added per pip above 1


class RulesEngine:
    """
    Dice rolls and the formulas built on them.
    Every random draw goes through self.rng.random() so a seeded or scripted
    Random makes the whole layer deterministic.
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def roll_die(self, sides: int) -> int:
        """Uniform integer in 1..sides."""
        if sides < 2:
            raise ValueError(f"A die needs at least 2 sides, got {sides}")
        return math.floor(self.rng.random() * sides) + 1

    @staticmethod
    def scale(roll: int) -> float:
        """
        Roll -> multiplier: 0.5 + (roll - 1) * 0.3
        e.g., 1 -> 0.5, 4 -> 1.4, 6 -> 2.0
        """
        return SCALE_BASE + (roll - 1) * SCALE_STEP

    def roll_outcome(self, config: DiceConfig, source: str = "") -> RollOutcome:
        """Roll once with a resolved config."""
        roll = self.roll_die(config.sides)
        return RollOutcome(
            source=source,
            sides=config.sides,
            roll=roll,
            scale=self.scale(roll),
            multiplier=config.multiplier,
        )

    @staticmethod
    def scaled_value(base: float, dice_scale: float) -> int:
        """floor(base * dice_scale), never below 0."""
        return max(0, math.floor(base * dice_scale))

    @staticmethod
    def base_stat(action: Action) -> int:
        """
        ATK for physical skills/items, MAT for magical or HP-recover ones.
        Certain-hit damage falls back to ATK.
        """
        item = action.item
        if item.hit_type == HitType.PHYSICAL:
            return action.subject.atk
        if item.hit_type == HitType.MAGICAL or item.damage.type == DamageType.HP_RECOVER:
            return action.subject.mat
        return action.subject.atk

    def chance(self, probability: float) -> bool:
        """True with the given probability. >= 1 always hits, <= 0 never does."""
        return self.rng.random() < probability

    def pick(self, candidates: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence."""
        if not candidates:
            raise ValueError("Cannot pick from an empty sequence")
        return candidates[math.floor(self.rng.random() * len(candidates))]
