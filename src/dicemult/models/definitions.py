from typing import Dict, List

from pydantic import BaseModel, Field, model_validator

from dicemult.models.schemas import DamageType, EffectCode, HitType, UsableKind
from dicemult.utils.notes import extract_metadata

# ========================================================================================
# DATABASE DEFINITIONS: static skill/item/state data. Never mutated during a battle.
# ========================================================================================
class Damage(BaseModel):
    type: DamageType = DamageType.NONE
    power: int = 0                          # Flat value used by the host's default formula
    critical: bool = False                  # Can this damage crit?
class Effect(BaseModel):
    """One line of a skill/item effect list"""
    code: EffectCode
    data_id: int = 0                        # State id for ADD_STATE / REMOVE_STATE
    value1: float = 0.0                     # Fraction of max (recover) or chance (states)
    value2: float = 0.0                     # Flat amount (recover)
class UsableItem(BaseModel):
    """A skill or item definition"""
    id: int
    name: str
    kind: UsableKind = UsableKind.SKILL
    hit_type: HitType = HitType.PHYSICAL
    damage: Damage = Field(default_factory=Damage)
    effects: List[Effect] = []
    speed: int = 0
    note: str = ""

    # Parsed note tags; filled from `note` when not given explicitly
    meta: Dict[str, str | bool] = {}

    @model_validator(mode="after")
    def _extract_meta(self) -> "UsableItem":
        if not self.meta and self.note:
            self.meta = extract_metadata(self.note)
        return self
class StateDefinition(BaseModel):
    id: int
    name: str
    note: str = ""
