from .schemas import (
    UsableKind,
    HitType,
    DamageType,
    EffectCode,
    OutcomeKind,
    DICE_MULT_TAG,
    DICE_SIDES_TAG,
    DICE_STATE_TAG,
)

from .definitions import (
    Damage,
    Effect,
    UsableItem,
    StateDefinition,
)

from .battler import (
    ActionResult,
    Battler,
)

from .actions import (
    DiceConfig,
    StateRange,
    DiceTags,
    RollOutcome,
    Outcome,
    Action,
    Resolution,
)

from .state import (
    GameVariables,
    BattleLog,
    GameState,
)

__all__ = [
    # Schemas
    "UsableKind",
    "HitType",
    "DamageType",
    "EffectCode",
    "OutcomeKind",
    "DICE_MULT_TAG",
    "DICE_SIDES_TAG",
    "DICE_STATE_TAG",

    # Definitions
    "Damage",
    "Effect",
    "UsableItem",
    "StateDefinition",

    # Battlers
    "ActionResult",
    "Battler",

    # Actions
    "DiceConfig",
    "StateRange",
    "DiceTags",
    "RollOutcome",
    "Outcome",
    "Action",
    "Resolution",

    # State
    "GameVariables",
    "BattleLog",
    "GameState",
]
