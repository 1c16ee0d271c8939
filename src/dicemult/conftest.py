"""Shared pytest fixtures for the dicemult test modules."""

import random
from typing import Callable, Iterable

import pytest

from dicemult.config.settings import Settings
from dicemult.core import BattleController, initialize_battle
from dicemult.models import Battler, GameState, StateDefinition


class ScriptedRandom(random.Random):
    """Random whose random() returns queued values, then fails loudly."""

    def __init__(self, values: Iterable[float] = ()):
        super().__init__(0)
        self._values = list(values)

    def queue(self, *values: float) -> None:
        self._values.extend(values)

    def random(self) -> float:
        if not self._values:
            raise AssertionError("unexpected random draw")
        return self._values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._values)


def roll_value(roll: int, sides: int) -> float:
    """random() value that makes a die with `sides` faces land on `roll`."""
    return (roll - 0.5) / sides


@pytest.fixture
def state_db() -> list[StateDefinition | None]:
    return [None] + [StateDefinition(id=i, name=f"State {i}") for i in range(1, 11)]


@pytest.fixture
def base_settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def hero() -> Battler:
    return Battler(id="hero", name="Hero", team="party", mhp=200, hp=100, mmp=100, mp=0, atk=100, mat=60, agi=10)


@pytest.fixture
def slime() -> Battler:
    return Battler(id="slime", name="Slime", team="enemies", mhp=500, hp=500, mmp=50, mp=50, atk=20, mat=5, agi=5)


@pytest.fixture
def make_controller(
    hero: Battler, slime: Battler, state_db, base_settings
) -> Callable[..., tuple[BattleController, ScriptedRandom]]:
    """
    Build a controller over hero + slime with a scripted RNG.
    Keyword arguments override Settings fields.
    """
    def _make(*values: float, in_battle: bool = True, **overrides) -> tuple[BattleController, ScriptedRandom]:
        rng = ScriptedRandom(values)
        settings = base_settings.model_copy(update=overrides)
        controller = initialize_battle(GameState(battlers=[hero, slime], states=state_db), settings=settings, rng=rng)
        if in_battle:
            controller.start_battle()
        return controller, rng

    return _make
