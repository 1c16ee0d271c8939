import random

from dicemult.config.settings import Settings, settings as default_settings
from dicemult.core.action_queue import ActionQueue
from dicemult.core.battle_controller import BattleController
from dicemult.core.exceptions import BattleNotActiveError, BattlerNotFoundError, DiceMultError
from dicemult.core.notetags import build_action, parse_dice_config, parse_dice_tags, parse_state_range
from dicemult.core.publisher import ResultPublisher
from dicemult.core.resolution_engine import (
    ActionResolver,
    DamageFormula,
    DiceActionResolver,
    HostActionResolver,
    ResolutionEngine,
    power_formula,
)
from dicemult.core.rules_engine import RulesEngine
from dicemult.core.state_manager import StateManager
from dicemult.core.state_selector import candidate_states, select_state
from dicemult.models import GameState


def initialize_battle(
    initial_state: GameState,
    settings: Settings = default_settings,
    rng: random.Random | None = None,
    formula: DamageFormula = power_formula,
) -> BattleController:
    """Instantiate all battle components and return the BattleController.

    The resolver chain is fixed here: the dice resolver wraps the host
    resolver and falls through to it for anything untagged.
    """
    rules_engine = RulesEngine(rng=rng, seed=settings.seed)
    state_manager = StateManager(initial_state=initial_state)
    publisher = ResultPublisher(
        state_manager,
        legacy_variables=settings.legacy_variables,
        roll_variable_id=settings.roll_variable_id,
        result_variable_id=settings.result_variable_id,
    )

    host_resolver = HostActionResolver(rules_engine, formula=formula)
    dice_resolver = DiceActionResolver(
        host_resolver,
        rules_engine,
        state_manager,
        publisher,
        damage_coefficient=settings.damage_coefficient,
        dice_state_effects=settings.dice_state_effects,
    )
    resolution_engine = ResolutionEngine(dice_resolver, rules_engine, state_manager)

    return BattleController(resolution_engine, state_manager, settings=settings)


__all__ = [
    'ActionQueue',
    'ActionResolver',
    'BattleController',
    'BattleNotActiveError',
    'BattlerNotFoundError',
    'DiceActionResolver',
    'DiceMultError',
    'HostActionResolver',
    'ResolutionEngine',
    'ResultPublisher',
    'RulesEngine',
    'StateManager',
    'build_action',
    'candidate_states',
    'initialize_battle',
    'parse_dice_config',
    'parse_dice_tags',
    'parse_state_range',
    'power_formula',
    'select_state',
]
