"""Dice-roll damage, healing and random state resolution for turn-based battles."""

from dicemult.core import BattleController, initialize_battle

__version__ = "0.1.0"

__all__ = ["BattleController", "initialize_battle", "__version__"]
