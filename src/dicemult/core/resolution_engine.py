import logging
import math
from typing import Callable, List, Protocol

from dicemult.core.publisher import ResultPublisher
from dicemult.core.rules_engine import RulesEngine
from dicemult.core.state_manager import StateManager
from dicemult.core.state_selector import select_state
from dicemult.models import (
    Action,
    Battler,
    DamageType,
    Effect,
    EffectCode,
    Outcome,
    OutcomeKind,
    Resolution,
    StateDefinition,
)

logger = logging.getLogger(__name__)

DamageFormula = Callable[[Action, Battler], float]

CRITICAL_MULTIPLIER = 3


def power_formula(action: Action, target: Battler) -> float:
    """Host default: the skill/item's flat damage power."""
    return action.item.damage.power


# ============================================================
# RESOLVERS
# ============================================================

class ActionResolver(Protocol):
    """
    Computes what one Action does to one target. ResolutionEngine calls these
    three hooks in order for every target.
    """

    def make_damage_value(self, action: Action, target: Battler, critical: bool) -> Outcome: ...

    def apply_item_effect(self, action: Action, target: Battler, effect: Effect) -> Outcome: ...

    def apply_extra(self, action: Action, target: Battler) -> Outcome | None: ...


class HostActionResolver:
    """
    The engine's own computation, with no dice involved.
    Everything the dice resolver does not handle ends up here.
    """

    def __init__(self, rules: RulesEngine, formula: DamageFormula = power_formula):
        self.rules = rules
        self.formula = formula

    def make_damage_value(self, action: Action, target: Battler, critical: bool) -> Outcome:
        value = self.formula(action, target)
        if critical:
            value *= CRITICAL_MULTIPLIER
        return Outcome(kind=OutcomeKind.DAMAGE, value=max(0, math.floor(value)))

    def apply_item_effect(self, action: Action, target: Battler, effect: Effect) -> Outcome:
        match effect.code:
            case EffectCode.RECOVER_HP:
                value = math.floor(target.mhp * effect.value1 + effect.value2)
                target.gain_hp(value)
                target.result.success = True
                return Outcome(kind=OutcomeKind.RECOVER_HP, value=value)

            case EffectCode.RECOVER_MP:
                value = math.floor(target.mmp * effect.value1 + effect.value2)
                target.gain_mp(value)
                target.result.success = True
                return Outcome(kind=OutcomeKind.RECOVER_MP, value=value)

            case EffectCode.GAIN_TP:
                value = math.floor(effect.value1)
                target.gain_tp(value)
                target.result.success = True
                return Outcome(kind=OutcomeKind.GAIN_TP, value=value)

            case EffectCode.ADD_STATE:
                applied = self.rules.chance(effect.value1) and target.add_state(effect.data_id)
                if applied:
                    target.result.success = True
                return Outcome(kind=OutcomeKind.ADD_STATE, state_id=effect.data_id, applied=applied)

            case EffectCode.REMOVE_STATE:
                applied = self.rules.chance(effect.value1) and target.remove_state(effect.data_id)
                if applied:
                    target.result.success = True
                return Outcome(kind=OutcomeKind.REMOVE_STATE, state_id=effect.data_id, applied=applied)

            case _:
                raise ValueError(f"Unknown effect code: {effect.code!r}")

    def apply_extra(self, action: Action, target: Battler) -> Outcome | None:
        return None


class DiceActionResolver:
    """
    Wraps another resolver and swaps in the dice formula for skills/items
    tagged <Dice_mult> (damage, HP/MP recovery, Add State) and <Dice_state>
    (random state after the normal effects). Untagged actions and effect codes
    it does not cover go to the wrapped resolver untouched.
    """

    def __init__(
        self,
        base: ActionResolver,
        rules: RulesEngine,
        state_manager: StateManager,
        publisher: ResultPublisher,
        *,
        damage_coefficient: float = 1.0,
        dice_state_effects: bool = True,
    ):
        self.base = base
        self.rules = rules
        self.state = state_manager
        self.publisher = publisher
        self.damage_coefficient = damage_coefficient
        self.dice_state_effects = dice_state_effects

    def make_damage_value(self, action: Action, target: Battler, critical: bool) -> Outcome:
        if not action.tags.enabled:
            return self.base.make_damage_value(action, target, critical)

        roll = self.rules.roll_outcome(action.tags.config, source=action.item.name)
        base_stat = self.damage_coefficient * self.rules.base_stat(action)
        value = self.rules.scaled_value(base_stat, roll.dice_scale)

        self.publisher.publish_roll(roll, value)
        return Outcome(kind=OutcomeKind.DAMAGE, value=value, roll=roll)

    def apply_item_effect(self, action: Action, target: Battler, effect: Effect) -> Outcome:
        if not action.tags.enabled:
            return self.base.apply_item_effect(action, target, effect)

        match effect.code:
            case EffectCode.RECOVER_HP:
                roll = self.rules.roll_outcome(action.tags.config, source=action.item.name)
                value = self.rules.scaled_value(target.mhp * effect.value1 + effect.value2, roll.dice_scale)
                target.gain_hp(value)
                target.result.success = True
                self.publisher.publish_roll(roll, value)
                return Outcome(kind=OutcomeKind.RECOVER_HP, value=value, roll=roll)

            case EffectCode.RECOVER_MP:
                roll = self.rules.roll_outcome(action.tags.config, source=action.item.name)
                value = self.rules.scaled_value(target.mmp * effect.value1 + effect.value2, roll.dice_scale)
                target.gain_mp(value)
                target.result.success = True
                self.publisher.publish_roll(roll, value)
                return Outcome(kind=OutcomeKind.RECOVER_MP, value=value, roll=roll)

            case EffectCode.ADD_STATE if self.dice_state_effects:
                return self._roll_state_effect(action, target, effect)

            case _:
                logger.debug("%s: effect %s handled by %s", action.item.name, effect.code.name, type(self.base).__name__)
                return self.base.apply_item_effect(action, target, effect)

    def _roll_state_effect(self, action: Action, target: Battler, effect: Effect) -> Outcome:
        """Add State where the dice scale is the chance to land."""
        roll = self.rules.roll_outcome(action.tags.config, source=action.item.name)
        applied = self.rules.chance(roll.dice_scale) and target.add_state(effect.data_id)
        if applied:
            target.result.success = True

        label = None
        state = self._state_definition(effect.data_id)
        if state is not None:
            label = state.name if applied else f"{state.name} resisted"
        self.publisher.publish_roll(roll, effect.data_id if applied else 0, label=label)
        return Outcome(kind=OutcomeKind.ADD_STATE, state_id=effect.data_id, applied=applied, roll=roll)

    def _state_definition(self, state_id: int) -> StateDefinition | None:
        states = self.state.states
        if 0 <= state_id < len(states):
            return states[state_id]
        return None

    def apply_extra(self, action: Action, target: Battler) -> Outcome | None:
        extra = self.base.apply_extra(action, target)
        state_range = action.tags.state_range
        if state_range is None:
            return extra

        state = select_state(target, state_range, self.state.states, self.rules)
        if state is None:
            logger.debug("%s: no state left to add to %s", action.item.name, target.name)
            return extra

        target.add_state(state.id)
        target.result.success = True
        self.publisher.publish_state(state)
        return Outcome(kind=OutcomeKind.RANDOM_STATE, state_id=state.id, applied=True)


# ============================================================
# RESOLUTION ENGINE
# ============================================================

class ResolutionEngine:
    """
    Applies Actions to their targets: damage, then each effect, then the
    post-apply hook. Which formula runs is up to the resolver it was built with.
    """

    def __init__(self, resolver: ActionResolver, rules: RulesEngine, state_manager: StateManager):
        self.resolver = resolver
        self.rules = rules
        self.state = state_manager

    def execute_action(self, action: Action) -> List[Resolution]:
        """Apply an action to every target that exists. Returns one Resolution per target."""
        resolutions = []
        for target_id in action.target_ids:
            target = self.state.get_battler(target_id)
            if target is None:
                logger.warning("%s: target %s not found, skipping", action.item.name, target_id)
                continue
            resolutions.append(self.apply(action, target))
        return resolutions

    def apply(self, action: Action, target: Battler) -> Resolution:
        target.result.clear()
        target.result.used = True
        outcomes: List[Outcome] = []

        damage_type = action.item.damage.type
        if damage_type != DamageType.NONE:
            critical = action.item.damage.critical and self.rules.chance(action.subject.cri)
            target.result.critical = critical
            outcome = self.resolver.make_damage_value(action, target, critical)
            self._execute_damage(action, target, outcome.value)
            outcomes.append(outcome)

        for effect in action.item.effects:
            outcomes.append(self.resolver.apply_item_effect(action, target, effect))

        extra = self.resolver.apply_extra(action, target)
        if extra is not None:
            outcomes.append(extra)

        return Resolution(
            action_name=action.item.name,
            subject_id=action.subject.id,
            target_id=target.id,
            outcomes=outcomes,
            success=target.result.success,
            narration_fragments=[self._narrate(action, target, o) for o in outcomes],
        )

    def _execute_damage(self, action: Action, target: Battler, value: int) -> None:
        """Turn a non-negative damage value into HP/MP changes according to the damage type."""
        subject = action.subject
        match action.item.damage.type:
            case DamageType.HP_DAMAGE:
                target.gain_hp(-value)
            case DamageType.MP_DAMAGE:
                target.gain_mp(-value)
            case DamageType.HP_RECOVER:
                target.gain_hp(value)
            case DamageType.MP_RECOVER:
                target.gain_mp(value)
            case DamageType.HP_DRAIN:
                subject.gain_hp(-target.gain_hp(-value))
            case DamageType.MP_DRAIN:
                subject.gain_mp(-target.gain_mp(-value))
        target.result.success = True

    def _narrate(self, action: Action, target: Battler, outcome: Outcome) -> str:
        """Mechanical one-liner per outcome; presentation layers can do better"""
        prefix = f"[d{outcome.roll.sides}: {outcome.roll.roll}] " if outcome.roll else ""
        match outcome.kind:
            case OutcomeKind.DAMAGE:
                return f"{prefix}{action.item.name} -> {target.name}: {outcome.value} ({action.item.damage.type.name})"
            case OutcomeKind.RECOVER_HP | OutcomeKind.RECOVER_MP | OutcomeKind.GAIN_TP:
                return f"{prefix}{target.name} {outcome.kind.value}: {outcome.value}"
            case _:
                verb = "applied" if outcome.applied else "missed"
                return f"{prefix}{target.name} state {outcome.state_id} {verb}"
