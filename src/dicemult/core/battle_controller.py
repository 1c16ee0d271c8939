import logging
from typing import List, Sequence

from dicemult.config.settings import Settings, settings as default_settings
from dicemult.core.action_queue import ActionQueue
from dicemult.core.exceptions import BattleNotActiveError, BattlerNotFoundError
from dicemult.core.notetags import build_action
from dicemult.core.resolution_engine import ResolutionEngine
from dicemult.core.state_manager import StateManager
from dicemult.models import Action, BattleLog, Resolution, UsableItem

logger = logging.getLogger(__name__)


class BattleController:
    """
    Turn loop coordinator.
    Builds actions, orders them by speed and hands each one to the
    ResolutionEngine. Knows nothing about dice; that lives in the resolver.
    """

    def __init__(
        self,
        resolution_engine: ResolutionEngine,
        state_manager: StateManager,
        settings: Settings = default_settings,
    ):
        self.engine = resolution_engine
        self.state = state_manager
        self.settings = settings
        self.action_queue = ActionQueue()
        self.turn_count = 0

    # --- Battle lifecycle -------------------------------------------------

    def start_battle(self) -> BattleLog:
        self.action_queue.clear()
        self.turn_count = 0
        return self.state.start_battle()

    def end_battle(self) -> None:
        self.action_queue.clear()
        self.state.end_battle()

    def is_battle_over(self) -> bool:
        """Over once at most one team has anyone standing."""
        return len(self.state.alive_teams()) <= 1

    # --- Actions ----------------------------------------------------------

    def make_action(self, subject_id: str, item: UsableItem, target_ids: Sequence[str]) -> Action:
        subject = self.state.get_battler(subject_id)
        if subject is None:
            raise BattlerNotFoundError(f"No battler with id {subject_id!r}")
        return build_action(subject, item, target_ids, self.settings)

    def queue(self, action: Action) -> None:
        self.action_queue.enqueue(action)

    def run_turn(self) -> List[Resolution]:
        """Resolve every queued action in priority order."""
        if not self.state.in_battle:
            raise BattleNotActiveError("run_turn() called outside of a battle")

        self.turn_count += 1
        resolutions: List[Resolution] = []

        while not self.action_queue.is_empty():
            action = self.action_queue.dequeue()
            if not action.subject.alive:
                logger.warning("Turn %d: %s is down, skipping %s", self.turn_count, action.subject.name, action.item.name)
                continue

            live_targets = [tid for tid in action.target_ids if self._is_alive(tid)]
            if not live_targets:
                logger.warning("Turn %d: %s has no living targets", self.turn_count, action.item.name)
                continue

            resolutions.extend(self.engine.execute_action(action.model_copy(update={"target_ids": live_targets})))

        return resolutions

    def use_outside_battle(self, action: Action) -> List[Resolution]:
        """Menu usage: resolves immediately, never writes to a battle log."""
        if self.state.in_battle:
            logger.warning("use_outside_battle() called during a battle; use queue() instead")
        return self.engine.execute_action(action)

    def _is_alive(self, battler_id: str) -> bool:
        battler = self.state.get_battler(battler_id)
        if battler is None:
            logger.warning("Unknown target %s", battler_id)
            return False
        return battler.alive
