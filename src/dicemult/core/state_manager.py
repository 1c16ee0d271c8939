# src/dicemult/core/state_manager.py

import logging
from typing import List

from dicemult.models import BattleLog, Battler, GameState, GameVariables, StateDefinition

logger = logging.getLogger(__name__)


class StateManager:
    """
    Central access point for the process-wide battle state.
    Resolvers read battlers, the state database, the game variables and the
    battle log through here instead of touching GameState directly.
    """
    def __init__(self, initial_state: GameState):
        self._state = initial_state

    def get_battler(self, battler_id: str) -> Battler | None:
        for battler in self._state.battlers:
            if battler.id == battler_id:
                return battler
        return None

    def get_alive_battlers(self, team: str | None = None) -> List[Battler]:
        """Living battlers, optionally only those on one team."""
        return [
            b for b in self._state.battlers
            if b.alive and (team is None or b.team == team)
        ]

    def alive_teams(self) -> set[str]:
        return {b.team for b in self._state.battlers if b.alive}

    @property
    def states(self) -> List[StateDefinition | None]:
        return self._state.states

    @property
    def variables(self) -> GameVariables:
        return self._state.variables

    @property
    def in_battle(self) -> bool:
        return self._state.in_battle

    @property
    def battle_log(self) -> BattleLog | None:
        """The active log window, None outside of battle."""
        return self._state.battle_log

    def start_battle(self) -> BattleLog:
        self._state.in_battle = True
        self._state.battle_log = BattleLog()
        for battler in self._state.battlers:
            battler.result.clear()
        logger.info("Battle started with %d battlers", len(self._state.battlers))
        return self._state.battle_log

    def end_battle(self) -> None:
        self._state.in_battle = False
        self._state.battle_log = None
        logger.info("Battle ended")
