import pytest

from dicemult.conftest import ScriptedRandom, roll_value
from dicemult.core import initialize_battle
from dicemult.models import (
    Battler,
    Damage,
    DamageType,
    Effect,
    EffectCode,
    GameState,
    HitType,
    OutcomeKind,
    StateDefinition,
    UsableItem,
    UsableKind,
)


def _slash(note: str = "<Dice_mult>", hit_type: HitType = HitType.PHYSICAL, **damage) -> UsableItem:
    damage.setdefault("type", DamageType.HP_DAMAGE)
    return UsableItem(id=10, name="Lucky Slash", hit_type=hit_type, damage=Damage(**damage), note=note)


def _potion(*effects: Effect, note: str = "<Dice_mult>") -> UsableItem:
    return UsableItem(id=101, name="Lucky Potion", kind=UsableKind.ITEM, hit_type=HitType.CERTAIN,
                      effects=list(effects), note=note)


# --- Damage ---------------------------------------------------------------

def test_dice_damage_scenario(make_controller, slime):
    controller, rng = make_controller(roll_value(4, 6))
    action = controller.make_action("hero", _slash(), ["slime"])

    [resolution] = controller.engine.execute_action(action)

    [outcome] = resolution.outcomes
    assert outcome.kind == OutcomeKind.DAMAGE
    assert outcome.value == 140
    assert outcome.roll.roll == 4
    assert outcome.roll.scale == pytest.approx(1.4)
    assert slime.hp == 500 - 140
    assert resolution.success is True

    variables = controller.state.variables
    assert variables.value(4) == 4
    assert variables.value(5) == 140
    assert controller.state.battle_log.lines == ["Lucky Slash rolled a 4! Multiplier: 1.4, Result: 140"]
    assert rng.remaining == 0


def test_magical_damage_uses_mat(make_controller, slime):
    controller, _ = make_controller(roll_value(1, 6))
    action = controller.make_action("hero", _slash(hit_type=HitType.MAGICAL), ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].value == 30  # floor(60 * 0.5)
    assert slime.hp == 470


def test_damage_coefficient_setting(make_controller):
    controller, _ = make_controller(roll_value(1, 6), damage_coefficient=4.0)
    action = controller.make_action("hero", _slash(), ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].value == 200  # floor(4 * 100 * 0.5)


def test_dice_damage_ignores_critical(make_controller, hero):
    hero.cri = 1.0
    controller, _ = make_controller(0.0, roll_value(1, 6))  # crit check, then the die
    action = controller.make_action("hero", _slash(critical=True), ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].value == 50


def test_dice_heal_skill_recovers_target(make_controller, hero):
    controller, _ = make_controller(roll_value(2, 6))
    heal = _slash(hit_type=HitType.CERTAIN, type=DamageType.HP_RECOVER)
    action = controller.make_action("hero", heal, ["hero"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].value == 48  # floor(60 * 0.8)
    assert hero.hp == 148


def test_hp_drain_returns_hp_to_subject(make_controller, hero, slime):
    controller, _ = make_controller(roll_value(1, 6))
    drain = _slash(type=DamageType.HP_DRAIN)
    action = controller.make_action("hero", drain, ["slime"])

    controller.engine.execute_action(action)

    assert slime.hp == 450
    assert hero.hp == 150


# --- Recovery effects -----------------------------------------------------

def test_dice_hp_recovery_scenario(make_controller, hero):
    controller, _ = make_controller(roll_value(1, 6))
    potion = _potion(Effect(code=EffectCode.RECOVER_HP, value1=0.5, value2=10))
    action = controller.make_action("hero", potion, ["hero"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].kind == OutcomeKind.RECOVER_HP
    assert resolution.outcomes[0].value == 55
    assert hero.hp == 155
    assert hero.result.hp_damage == -55
    assert controller.state.variables.value(5) == 55


def test_dice_mp_recovery(make_controller, hero):
    controller, _ = make_controller(roll_value(6, 6))
    ether = _potion(Effect(code=EffectCode.RECOVER_MP, value1=0.2, value2=5))
    action = controller.make_action("hero", ether, ["hero"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].value == 50  # floor(25 * 2.0)
    assert hero.mp == 50
    assert controller.state.variables.value(4) == 6


def test_negative_recovery_is_clamped_to_zero(make_controller, hero):
    controller, _ = make_controller(roll_value(3, 6))
    cursed = _potion(Effect(code=EffectCode.RECOVER_HP, value1=0.0, value2=-40))
    action = controller.make_action("hero", cursed, ["hero"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].value == 0
    assert hero.hp == 100


# --- Delegation -----------------------------------------------------------

def test_untagged_action_matches_host_engine(make_controller, slime, state_db):
    item = _slash(note="", power=30)
    controller, rng = make_controller()
    action = controller.make_action("hero", item, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    other_slime = Battler(id="slime", name="Slime", team="enemies", mhp=500, hp=500)
    other_hero = Battler(id="hero", name="Hero", mhp=200, hp=100, atk=100)
    host_only = initialize_battle(GameState(battlers=[other_hero, other_slime], states=state_db), rng=ScriptedRandom())
    [expected] = host_only.engine.execute_action(host_only.make_action("hero", item, ["slime"]))

    assert resolution.outcomes == expected.outcomes
    assert resolution.outcomes[0].roll is None
    assert slime.hp == other_slime.hp == 470
    assert controller.state.variables.value(4) == 0
    assert controller.state.battle_log.lines == []
    assert rng.remaining == 0


def test_uncovered_effect_codes_are_delegated_without_rolling(make_controller, hero):
    controller, rng = make_controller()  # no draws allowed
    item = _potion(Effect(code=EffectCode.GAIN_TP, value1=25))
    action = controller.make_action("hero", item, ["hero"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].kind == OutcomeKind.GAIN_TP
    assert resolution.outcomes[0].roll is None
    assert hero.tp == 25
    assert controller.state.battle_log.lines == []


# --- Add State effects ----------------------------------------------------

def test_dice_add_state_lands_below_dice_scale(make_controller, slime):
    controller, _ = make_controller(roll_value(1, 6), 0.1)
    hex_ = _potion(Effect(code=EffectCode.ADD_STATE, data_id=4, value1=1.0), note="<Dice_mult:0.5>")
    action = controller.make_action("hero", hex_, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    outcome = resolution.outcomes[0]
    assert outcome.roll.dice_scale == pytest.approx(0.25)
    assert outcome.applied is True
    assert slime.is_state_affected(4)
    assert controller.state.variables.value(5) == 4
    assert controller.state.battle_log.lines[-1].endswith("Result: State 4")


def test_dice_add_state_misses_above_dice_scale(make_controller, slime):
    controller, _ = make_controller(roll_value(1, 6), 0.3)
    hex_ = _potion(Effect(code=EffectCode.ADD_STATE, data_id=4, value1=1.0), note="<Dice_mult:0.5>")
    action = controller.make_action("hero", hex_, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].applied is False
    assert not slime.is_state_affected(4)
    assert resolution.success is False
    assert controller.state.variables.value(5) == 0


def test_dice_scale_above_one_always_lands(make_controller, slime):
    controller, _ = make_controller(roll_value(6, 6), 0.999)
    hex_ = _potion(Effect(code=EffectCode.ADD_STATE, data_id=4, value1=0.0))
    action = controller.make_action("hero", hex_, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].applied is True


def test_folded_state_effects_can_be_switched_off(make_controller, slime):
    controller, _ = make_controller(0.5, dice_state_effects=False)  # host chance draw only
    hex_ = _potion(Effect(code=EffectCode.ADD_STATE, data_id=4, value1=0.6))
    action = controller.make_action("hero", hex_, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].roll is None
    assert resolution.outcomes[0].applied is True


# --- Random state pass ----------------------------------------------------

def test_random_state_pass_scenario(make_controller, slime):
    slime.states = [5, 7]
    controller, _ = make_controller(0.0)
    chaos = UsableItem(id=11, name="Chaos", note="<Dice_state:10-5>")
    action = controller.make_action("hero", chaos, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    [outcome] = resolution.outcomes
    assert outcome.kind == OutcomeKind.RANDOM_STATE
    assert outcome.state_id == 6
    assert slime.states == [5, 7, 6]
    assert resolution.success is True
    assert controller.state.variables.value(5) == 6
    assert controller.state.battle_log.lines == ["State applied: State 6"]


def test_random_state_pass_runs_after_dice_damage(make_controller, slime):
    controller, _ = make_controller(roll_value(2, 6), 0.99)
    bolt = _slash(note="<Dice_mult><Dice_state:3-4>", hit_type=HitType.MAGICAL)
    action = controller.make_action("hero", bolt, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert [o.kind for o in resolution.outcomes] == [OutcomeKind.DAMAGE, OutcomeKind.RANDOM_STATE]
    assert resolution.outcomes[1].state_id == 4
    assert [r.roll for r in resolution.rolls] == [2]  # state pick is not a die roll
    assert controller.state.variables.value(4) == 2
    assert controller.state.variables.value(5) == 4  # state write comes last


def test_empty_candidate_set_is_a_silent_no_op(make_controller, slime):
    slime.states = [5, 6, 7, 8, 9, 10]
    controller, rng = make_controller()
    controller.state.variables.set_value(5, 99)
    chaos = UsableItem(id=11, name="Chaos", note="<Dice_state:5-10>")
    action = controller.make_action("hero", chaos, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes == []
    assert resolution.success is False
    assert slime.states == [5, 6, 7, 8, 9, 10]
    assert controller.state.variables.value(5) == 99
    assert controller.state.battle_log.lines == []


def test_default_range_past_last_defined_state_is_a_silent_no_op(hero, slime, base_settings):
    states = [None, StateDefinition(id=1, name="Knockout"), StateDefinition(id=2, name="Guard")]
    controller = initialize_battle(GameState(battlers=[hero, slime], states=states),
                                   settings=base_settings, rng=ScriptedRandom())
    controller.start_battle()
    controller.state.variables.set_value(5, 99)
    chaos = UsableItem(id=11, name="Chaos", note="<Dice_state>")
    action = controller.make_action("hero", chaos, ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes == []
    assert slime.states == []
    assert controller.state.variables.value(5) == 99
    assert not any(line.startswith("State applied") for line in controller.state.battle_log.lines)


# --- Publishing -----------------------------------------------------------

def test_menu_usage_is_silent_but_still_writes_variables(make_controller, hero):
    controller, _ = make_controller(roll_value(1, 6), 0.0, in_battle=False)
    potion = _potion(Effect(code=EffectCode.RECOVER_HP, value1=0.5, value2=10), note="<Dice_mult><Dice_state>")
    action = controller.make_action("hero", potion, ["hero"])

    [resolution] = controller.use_outside_battle(action)

    assert hero.hp == 155
    assert resolution.outcomes[-1].state_id == 3
    assert controller.state.battle_log is None
    assert controller.state.variables.value(4) == 1
    assert controller.state.variables.value(5) == 3


def test_legacy_variables_can_be_disabled(make_controller):
    controller, _ = make_controller(roll_value(4, 6), legacy_variables=False)
    action = controller.make_action("hero", _slash(), ["slime"])

    [resolution] = controller.engine.execute_action(action)

    assert resolution.outcomes[0].value == 140
    assert controller.state.variables.value(4) == 0
    assert controller.state.variables.value(5) == 0
