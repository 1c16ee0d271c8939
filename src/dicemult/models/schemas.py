from enum import Enum, IntEnum


# Enum Classes
class UsableKind(str, Enum):        # Where a usable definition comes from
    SKILL = "skill"
    ITEM = "item"
class HitType(IntEnum):             # How the skill/item connects
    CERTAIN = 0
    PHYSICAL = 1                        # --Uses ATK
    MAGICAL = 2                         # --Uses MAT
class DamageType(IntEnum):          # What the damage block does to the target
    NONE = 0
    HP_DAMAGE = 1
    MP_DAMAGE = 2
    HP_RECOVER = 3
    MP_RECOVER = 4
    HP_DRAIN = 5
    MP_DRAIN = 6
class EffectCode(IntEnum):          # Effect list entries on a skill/item
    RECOVER_HP = 11
    RECOVER_MP = 12
    GAIN_TP = 13
    ADD_STATE = 21
    REMOVE_STATE = 22
class OutcomeKind(str, Enum):       # What a single resolver call produced
    DAMAGE = "damage"
    RECOVER_HP = "recover_hp"
    RECOVER_MP = "recover_mp"
    GAIN_TP = "gain_tp"
    ADD_STATE = "add_state"
    REMOVE_STATE = "remove_state"
    RANDOM_STATE = "random_state"       # --<Dice_state> post-apply pass


# Meta tag names read from skill/item notes
DICE_MULT_TAG = "Dice_mult"
DICE_SIDES_TAG = "Dice_sides"
DICE_STATE_TAG = "Dice_state"
