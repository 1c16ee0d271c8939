"""
Turns skill/item note tags into typed dice configuration.

Recognised tags:
    <Dice_mult>        enable dice scaling with the default multiplier
    <Dice_mult:X>      enable dice scaling with multiplier X
    <Dice_sides:X>     roll an X-sided die instead of the default
    <Dice_state>       add a random state (default_state_min .. last state)
    <Dice_state:X-Y>   add a random state with id in X..Y

Nothing here raises on bad tag values; they fall back to the configured defaults.
"""

import logging
import math
import re
from typing import Mapping, Sequence, Tuple

from dicemult.config.settings import Settings, settings as default_settings
from dicemult.models import (
    DICE_MULT_TAG,
    DICE_SIDES_TAG,
    DICE_STATE_TAG,
    Action,
    Battler,
    DiceConfig,
    DiceTags,
    StateRange,
    UsableItem,
)

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"(\d+)\s*-\s*(\d+)")


def _to_number(raw: str | bool | None) -> float | None:
    """Numeric value of a tag, or None for presence-only/empty/garbage values."""
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_dice_config(
    meta: Mapping[str, str | bool],
    default_sides: int,
    default_multiplier: float,
) -> Tuple[DiceConfig, bool]:
    """
    Resolve sides + multiplier for a skill/item.

    Returns (config, opted_in). Opt-in only needs the <Dice_mult> tag to exist;
    its value, if any, is the multiplier.
    """
    opted_in = DICE_MULT_TAG in meta

    multiplier = _to_number(meta.get(DICE_MULT_TAG))
    if multiplier is None or multiplier < 0:
        multiplier = default_multiplier

    sides_value = _to_number(meta.get(DICE_SIDES_TAG))
    sides = int(sides_value) if sides_value is not None else default_sides
    if sides < 2:
        logger.debug("Ignoring <%s:%s>, falling back to d%s", DICE_SIDES_TAG, meta.get(DICE_SIDES_TAG), default_sides)
        sides = default_sides

    return DiceConfig(sides=sides, multiplier=multiplier), opted_in


def parse_state_range(meta: Mapping[str, str | bool], default_min: int) -> StateRange | None:
    """
    Resolve the <Dice_state> range, or None when the tag is absent.
    Reversed bounds ("10-5") are swapped. Anything without an "N-M" pattern
    gets the default range.
    """
    if DICE_STATE_TAG not in meta:
        return None

    match = _RANGE_RE.search(str(meta[DICE_STATE_TAG]))
    if not match:
        return StateRange(min_id=default_min)

    low, high = int(match.group(1)), int(match.group(2))
    if low > high:
        low, high = high, low
    return StateRange(min_id=low, max_id=high, explicit=True)


def parse_dice_tags(item: UsableItem, settings: Settings = default_settings) -> DiceTags:
    config, enabled = parse_dice_config(item.meta, settings.default_dice_sides, settings.default_multiplier)
    return DiceTags(
        enabled=enabled,
        config=config,
        state_range=parse_state_range(item.meta, settings.default_state_min),
    )


def build_action(
    subject: Battler,
    item: UsableItem,
    target_ids: Sequence[str],
    settings: Settings = default_settings,
) -> Action:
    """Create an Action with its dice tags parsed up front."""
    return Action(
        subject=subject,
        item=item,
        target_ids=list(target_ids),
        tags=parse_dice_tags(item, settings),
        priority=subject.agi + item.speed,
    )
