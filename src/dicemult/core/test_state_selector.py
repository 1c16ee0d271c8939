import random

from dicemult.conftest import ScriptedRandom
from dicemult.core.notetags import parse_state_range
from dicemult.core.rules_engine import RulesEngine
from dicemult.core.state_selector import candidate_states, last_state_id, resolve_bounds, select_state
from dicemult.models import Battler, StateDefinition, StateRange


def _target(*states: int) -> Battler:
    return Battler(id="t", name="Target", mhp=100, hp=100, states=list(states))


def test_candidates_exclude_held_states(state_db):
    target = _target(5, 7)
    state_range = StateRange(min_id=5, max_id=10, explicit=True)

    assert [s.id for s in candidate_states(target, state_range, state_db)] == [6, 8, 9, 10]


def test_selection_only_draws_from_candidates(state_db):
    target = _target(5, 7)
    state_range = StateRange(min_id=5, max_id=10, explicit=True)
    rules = RulesEngine(seed=42)

    picked = {select_state(target, state_range, state_db, rules).id for _ in range(400)}

    assert picked == {6, 8, 9, 10}
    assert target.states == [5, 7]  # selection alone does not apply anything


def test_selection_never_leaves_range_or_repeats_held_state(state_db):
    rng = random.Random(7)
    rules = RulesEngine(seed=99)
    for _ in range(300):
        low, high = rng.randint(1, 10), rng.randint(1, 10)
        held = rng.sample(range(1, 11), rng.randint(0, 6))
        target = _target(*held)
        state_range = parse_state_range({"Dice_state": f"{low}-{high}"}, 3)

        state = select_state(target, state_range, state_db, rules)

        lo, hi = min(low, high), max(low, high)
        if state is None:
            assert all(i in held for i in range(lo, hi + 1))
        else:
            assert lo <= state.id <= hi
            assert state.id not in held


def test_empty_candidate_set_returns_none(state_db):
    target = _target(5, 6, 7, 8, 9, 10)
    state_range = StateRange(min_id=5, max_id=10, explicit=True)
    rules = RulesEngine(rng=ScriptedRandom())  # any draw would fail

    assert select_state(target, state_range, state_db, rules) is None
    assert target.states == [5, 6, 7, 8, 9, 10]


def test_default_range_runs_to_last_defined_state():
    states = [None, StateDefinition(id=1, name="Knockout"), None, StateDefinition(id=3, name="Poison"),
              None, StateDefinition(id=5, name="Sleep")]
    state_range = StateRange(min_id=3)

    assert last_state_id(states) == 5
    assert resolve_bounds(state_range, states) == (3, 5)
    assert [s.id for s in candidate_states(_target(), state_range, states)] == [3, 5]


def test_last_state_id_of_empty_database():
    assert last_state_id([]) == 0
    assert last_state_id([None]) == 0


def test_inverted_range_has_no_candidates(state_db):
    state_range = StateRange(min_id=10, max_id=5)

    assert resolve_bounds(state_range, state_db) == (10, 5)
    assert candidate_states(_target(), state_range, state_db) == []


def test_default_range_above_last_defined_state_is_empty():
    states = [None, StateDefinition(id=1, name="Knockout"), StateDefinition(id=2, name="Guard")]
    state_range = parse_state_range({"Dice_state": True}, 3)
    rules = RulesEngine(rng=ScriptedRandom())

    assert resolve_bounds(state_range, states) == (3, 2)
    assert candidate_states(_target(), state_range, states) == []
    assert select_state(_target(), state_range, states, rules) is None


def test_selection_is_uniform_index(state_db):
    target = _target(5, 7)
    state_range = StateRange(min_id=5, max_id=10, explicit=True)
    rules = RulesEngine(rng=ScriptedRandom([0.0, 0.26, 0.5, 0.99]))

    ids = [select_state(target, state_range, state_db, rules).id for _ in range(4)]

    assert ids == [6, 8, 9, 10]
