"""
Sample battle content for trying the dice layer end to end.
"""
from dicemult.models import (
    Battler,
    Damage,
    DamageType,
    Effect,
    EffectCode,
    GameState,
    HitType,
    StateDefinition,
    UsableItem,
    UsableKind,
)


def create_state_database() -> list[StateDefinition | None]:
    """Ids 1-2 are the engine's Knockout/Guard; the dice pool starts at 3."""
    names = ["Knockout", "Guard", "Immortal", "Poison", "Blind", "Silence", "Rage", "Confusion", "Fascination", "Sleep"]
    return [None] + [StateDefinition(id=i, name=name) for i, name in enumerate(names, start=1)]


def create_skills() -> dict[str, UsableItem]:
    """Skills and items keyed by a short handle."""
    return {
        # ==================== SKILLS ====================
        "attack": UsableItem(
            id=1,
            name="Attack",
            hit_type=HitType.PHYSICAL,
            damage=Damage(type=DamageType.HP_DAMAGE, power=30, critical=True),
        ),
        "lucky_slash": UsableItem(
            id=10,
            name="Lucky Slash",
            hit_type=HitType.PHYSICAL,
            damage=Damage(type=DamageType.HP_DAMAGE),
            note="<Dice_mult>\n<Dice_sides:8>",
        ),
        "chaos_bolt": UsableItem(
            id=11,
            name="Chaos Bolt",
            hit_type=HitType.MAGICAL,
            damage=Damage(type=DamageType.HP_DAMAGE),
            note="<Dice_mult:0.8>\n<Dice_state:4-10>",
        ),
        "gamble_heal": UsableItem(
            id=12,
            name="Gamble Heal",
            hit_type=HitType.CERTAIN,
            damage=Damage(type=DamageType.HP_RECOVER),
            note="<Dice_mult>",
        ),
        "hex": UsableItem(
            id=13,
            name="Hex",
            hit_type=HitType.MAGICAL,
            effects=[Effect(code=EffectCode.ADD_STATE, data_id=4, value1=1.0)],
            note="<Dice_mult:0.5>",
        ),
        # ==================== ITEMS ====================
        "lucky_potion": UsableItem(
            id=101,
            name="Lucky Potion",
            kind=UsableKind.ITEM,
            hit_type=HitType.CERTAIN,
            effects=[Effect(code=EffectCode.RECOVER_HP, value1=0.25, value2=20)],
            note="<Dice_mult>",
        ),
        "ether": UsableItem(
            id=102,
            name="Ether",
            kind=UsableKind.ITEM,
            hit_type=HitType.CERTAIN,
            effects=[Effect(code=EffectCode.RECOVER_MP, value1=0.0, value2=30)],
        ),
    }


def create_sample_battle() -> GameState:
    """
    Two heroes against an ogre and a goblin shaman.

    Returns:
        GameState: battlers + state database, not yet in battle
    """
    # ==================== PARTY ====================
    knight = Battler(id="hero_knight", name="Knight", team="party", mhp=420, hp=420, mmp=40, mp=40, atk=62, mat=18, agi=30, cri=0.05)
    mage = Battler(id="hero_mage", name="Mage", team="party", mhp=260, hp=260, mmp=120, mp=120, atk=20, mat=70, agi=38)

    # ==================== ENEMIES ====================
    ogre = Battler(id="enemy_ogre", name="Ogre", team="enemies", mhp=600, hp=600, atk=55, mat=10, agi=20)
    shaman = Battler(id="enemy_shaman", name="Goblin Shaman", team="enemies", mhp=240, hp=240, mmp=80, mp=80, atk=25, mat=48, agi=34)

    return GameState(
        battlers=[knight, mage, ogre, shaman],
        states=create_state_database(),
    )
