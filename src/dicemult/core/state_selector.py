from typing import List, Sequence

from dicemult.core.rules_engine import RulesEngine
from dicemult.models import Battler, StateDefinition, StateRange


def last_state_id(states: Sequence[StateDefinition | None]) -> int:
    """Highest defined state id (0 when the database is empty)."""
    return max((s.id for s in states if s is not None), default=0)


def resolve_bounds(state_range: StateRange, states: Sequence[StateDefinition | None]) -> tuple[int, int]:
    """
    Concrete (min, max) for a range, filling in the open upper bound.
    Bounds are used as given; an inverted range matches nothing.
    """
    high = state_range.max_id if state_range.max_id is not None else last_state_id(states)
    return state_range.min_id, high


def candidate_states(
    target: Battler,
    state_range: StateRange,
    states: Sequence[StateDefinition | None],
) -> List[StateDefinition]:
    """Defined states inside the range that the target does not already have, in id order."""
    low, high = resolve_bounds(state_range, states)
    return [
        s for s in states
        if s is not None and low <= s.id <= high and not target.is_state_affected(s.id)
    ]


def select_state(
    target: Battler,
    state_range: StateRange,
    states: Sequence[StateDefinition | None],
    rules: RulesEngine,
) -> StateDefinition | None:
    """Pick one candidate uniformly, or None if there is nothing left to add."""
    candidates = candidate_states(target, state_range, states)
    if not candidates:
        return None
    return rules.pick(candidates)
