# ============================================================
# BATTLE EXCEPTIONS
# ============================================================

class DiceMultError(Exception):
    """Base exception for the resolution layer"""
    pass


class BattlerNotFoundError(DiceMultError):
    """An action referenced a battler id that is not in the game state"""
    pass


class BattleNotActiveError(DiceMultError):
    """A battle-only operation was called outside of a battle"""
    pass
