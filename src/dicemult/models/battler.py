from typing import ClassVar, List

from pydantic import BaseModel, Field, model_validator


class ActionResult(BaseModel):
    """What happened to a battler during the last action applied to it"""
    used: bool = False
    success: bool = False
    critical: bool = False
    hp_damage: int = 0                      # Positive = HP lost, negative = HP gained
    mp_damage: int = 0
    tp_gain: int = 0
    added_states: List[int] = []
    removed_states: List[int] = []

    def clear(self) -> None:
        self.used = False
        self.success = False
        self.critical = False
        self.hp_damage = 0
        self.mp_damage = 0
        self.tp_gain = 0
        self.added_states = []
        self.removed_states = []


class Battler(BaseModel):
    """
    Runtime participant in a battle (actor or enemy).
    Mutated in place by resolvers through the gain_*/add_state/remove_state helpers.
    """
    id: str
    name: str
    team: str = "party"

    mhp: int = Field(gt=0)
    mmp: int = Field(default=0, ge=0)
    hp: int
    mp: int = 0
    tp: int = 0

    atk: int = 0
    mat: int = 0
    agi: int = 0
    cri: float = 0.0                        # Critical rate, 0..1

    states: List[int] = []
    result: ActionResult = Field(default_factory=ActionResult)

    MAX_TP: ClassVar[int] = 100

    @model_validator(mode="after")
    def _clamp_resources(self) -> "Battler":
        self.hp = max(0, min(self.hp, self.mhp))
        self.mp = max(0, min(self.mp, self.mmp))
        self.tp = max(0, min(self.tp, self.MAX_TP))
        return self

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def is_state_affected(self, state_id: int) -> bool:
        return state_id in self.states

    def gain_hp(self, value: int) -> int:
        """Add (or with a negative value, remove) HP. Returns the actual change."""
        before = self.hp
        self.hp = max(0, min(self.mhp, self.hp + value))
        self.result.hp_damage -= self.hp - before
        return self.hp - before

    def gain_mp(self, value: int) -> int:
        before = self.mp
        self.mp = max(0, min(self.mmp, self.mp + value))
        self.result.mp_damage -= self.mp - before
        return self.mp - before

    def gain_tp(self, value: int) -> int:
        before = self.tp
        self.tp = max(0, min(self.MAX_TP, self.tp + value))
        self.result.tp_gain += self.tp - before
        return self.tp - before

    def add_state(self, state_id: int) -> bool:
        if self.is_state_affected(state_id):
            return False
        self.states.append(state_id)
        self.result.added_states.append(state_id)
        return True

    def remove_state(self, state_id: int) -> bool:
        if not self.is_state_affected(state_id):
            return False
        self.states.remove(state_id)
        self.result.removed_states.append(state_id)
        return True
