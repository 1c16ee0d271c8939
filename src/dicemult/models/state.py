from dataclasses import dataclass, field
from typing import Dict, List

from dicemult.models.battler import Battler
from dicemult.models.definitions import StateDefinition


@dataclass
class GameVariables:
    """
    Numbered game variables shared with event scripts.
    Unset variables read as 0. Last write wins.
    """
    _data: Dict[int, int] = field(default_factory=dict)

    def value(self, variable_id: int) -> int:
        return self._data.get(variable_id, 0)

    def set_value(self, variable_id: int, value: int) -> None:
        self._data[variable_id] = int(value)


@dataclass
class BattleLog:
    """Append-only text lines shown by the battle log window."""
    lines: List[str] = field(default_factory=list)

    def add_text(self, text: str) -> None:
        self.lines.append(text)


@dataclass
class GameState:
    """Aggregate root - everything the resolution layer reads or writes outside an Action"""
    battlers: List[Battler]

    # State database indexed by id; index 0 and gaps are None
    states: List[StateDefinition | None] = field(default_factory=list)

    variables: GameVariables = field(default_factory=GameVariables)
    in_battle: bool = False
    battle_log: BattleLog | None = None
