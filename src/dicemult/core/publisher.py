import logging

from dicemult.core.state_manager import StateManager
from dicemult.models import RollOutcome, StateDefinition

logger = logging.getLogger(__name__)


class ResultPublisher:
    """
    Writes roll results where the rest of the game can see them:
      - the legacy game variables (roll / result slots), if enabled
      - the battle log window, if one is open
    Callers still get the outcome back as a return value; this is only the
    outward-facing copy.
    """

    def __init__(
        self,
        state_manager: StateManager,
        *,
        legacy_variables: bool = True,
        roll_variable_id: int = 4,
        result_variable_id: int = 5,
    ):
        self.state = state_manager
        self.legacy_variables = legacy_variables
        self.roll_variable_id = roll_variable_id
        self.result_variable_id = result_variable_id

    def publish_roll(self, outcome: RollOutcome, result: int, label: str | None = None) -> None:
        """
        Store roll + numeric result and log "<name> rolled a <roll>! ..." when
        a battle log is open. label replaces the number in the log line only.
        """
        if self.legacy_variables:
            self.state.variables.set_value(self.roll_variable_id, outcome.roll)
            self.state.variables.set_value(self.result_variable_id, result)

        shown = label if label is not None else result
        logger.debug(
            "%s rolled %d on d%d (scale %.2f x %.2f) -> %s",
            outcome.source, outcome.roll, outcome.sides, outcome.scale, outcome.multiplier, shown,
        )

        log = self.state.battle_log
        if log is not None:
            log.add_text(
                f"{outcome.source} rolled a {outcome.roll}! "
                f"Multiplier: {round(outcome.dice_scale, 2):g}, Result: {shown}"
            )

    def publish_state(self, state: StateDefinition) -> None:
        """Store the applied state id and log it, only when in battle."""
        if self.legacy_variables:
            self.state.variables.set_value(self.result_variable_id, state.id)

        logger.debug("Random state applied: %s (%d)", state.name, state.id)

        log = self.state.battle_log
        if self.state.in_battle and log is not None:
            log.add_text(f"State applied: {state.name}")
