from typing import List

from pydantic import BaseModel, Field, computed_field

from dicemult.models.battler import Battler
from dicemult.models.definitions import UsableItem
from dicemult.models.schemas import OutcomeKind

# ============================================================
# DICE CONFIGURATION: parsed once from note tags when an Action is built.
# ============================================================
class DiceConfig(BaseModel):
    sides: int = Field(ge=2)                # Faces on the die
    multiplier: float = Field(ge=0)         # Scalar applied on top of the roll scale
class StateRange(BaseModel):
    """<Dice_state> candidate id range. max_id=None means "last defined state"."""
    min_id: int
    max_id: int | None = None
    explicit: bool = False                  # Came from a <Dice_state:X-Y> tag
class DiceTags(BaseModel):
    enabled: bool                           # <Dice_mult> present
    config: DiceConfig
    state_range: StateRange | None = None   # <Dice_state> present
# ============================================================
# ROLL STRUCTURES
# ============================================================
class RollOutcome(BaseModel):
    """A single die throw and the scale derived from it"""
    source: str                             # Name of the skill/item that rolled
    sides: int
    roll: int                               # 1..sides
    scale: float                            # 0.5 + (roll - 1) * 0.3
    multiplier: float

    @computed_field
    @property
    def dice_scale(self) -> float:
        return self.multiplier * self.scale
class Outcome(BaseModel):
    """Result of one resolver call. roll is None when the host formula produced it."""
    kind: OutcomeKind
    value: int = 0                          # Damage/recovery amount
    state_id: int | None = None             # State touched, if any
    applied: bool = False                   # Did the state stick?
    roll: RollOutcome | None = None
# ============================================================
# ACTION & RESOLUTION
# ============================================================
class Action(BaseModel):
    """One use of a skill or item, waiting to be applied to its targets"""
    subject: Battler                        # Who's doing this
    item: UsableItem
    target_ids: List[str] = []
    tags: DiceTags
    priority: int = 0                       # Higher = acts first in the turn

class Resolution(BaseModel):
    """Everything that happened when an Action hit one target"""
    action_name: str
    subject_id: str
    target_id: str
    outcomes: List[Outcome] = []
    success: bool = False

    # Mechanical narration, one line per outcome
    narration_fragments: List[str] = []

    @property
    def rolls(self) -> List[RollOutcome]:
        return [o.roll for o in self.outcomes if o.roll is not None]
