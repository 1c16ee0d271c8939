from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Dice defaults (used when a skill/item has no override tag)
    default_dice_sides: int = Field(default=6, ge=2)
    default_multiplier: float = Field(default=1.0, ge=0)
    default_state_min: int = Field(default=3, ge=1)     # <Dice_state> with no range starts here

    # Formula
    damage_coefficient: float = Field(default=1.0, ge=0)  # 4.0 gives the old "4 * stat * mult" damage
    dice_state_effects: bool = True                       # roll Add State effects on <Dice_mult> skills

    # Legacy game variables written after every roll
    legacy_variables: bool = True
    roll_variable_id: int = 4
    result_variable_id: int = 5

    # Randomness
    seed: int | None = None

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None
    enable_color: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DICE_")


settings = Settings()
