"""Entry point: runs the sample battle and prints the battle log."""

import logging

from dicemult.config.settings import settings
from dicemult.core import BattleController, initialize_battle
from dicemult.scenarios import create_sample_battle, create_skills
from dicemult.utils.logging import setup_logging

logger = logging.getLogger("dicemult")

MAX_TURNS = 20

# Which skill each battler uses, cycling turn by turn
ROTATIONS = {
    "hero_knight": ["lucky_slash", "attack"],
    "hero_mage": ["chaos_bolt", "hex", "gamble_heal"],
    "enemy_ogre": ["attack"],
    "enemy_shaman": ["chaos_bolt", "attack"],
}
SUPPORT_SKILLS = {"gamble_heal"}


# ─────────────────────────────────────────────────────────────────────────────
# Battle Loop
# ─────────────────────────────────────────────────────────────────────────────
def queue_turn(controller: BattleController, turn: int) -> None:
    """Queue one action per living battler."""
    skills = create_skills()
    state = controller.state
    for battler in state.get_alive_battlers():
        rotation = ROTATIONS.get(battler.id, ["attack"])
        key = rotation[(turn - 1) % len(rotation)]
        skill = skills[key]

        if key in SUPPORT_SKILLS:
            allies = state.get_alive_battlers(battler.team)
            target = min(allies, key=lambda b: b.hp / b.mhp)
        else:
            foes = [b for b in state.get_alive_battlers() if b.team != battler.team]
            if not foes:
                continue
            target = foes[0]

        controller.queue(controller.make_action(battler.id, skill, [target.id]))


def battle_loop(controller: BattleController) -> None:
    log = controller.start_battle()
    printed = 0

    for turn in range(1, MAX_TURNS + 1):
        print(f"\n--- Turn {turn} ---")
        queue_turn(controller, turn)
        for resolution in controller.run_turn():
            for fragment in resolution.narration_fragments:
                logger.debug(fragment)
            for roll in resolution.rolls:
                logger.debug(f"{resolution.action_name}: d{roll.sides} -> {roll.roll} (x{roll.dice_scale:g})")

        for line in log.lines[printed:]:
            print(line)
        printed = len(log.lines)

        if controller.is_battle_over():
            break

    variables = controller.state.variables
    winners = controller.state.alive_teams()
    print(f"\nBattle over after {controller.turn_count} turns. Standing: {', '.join(sorted(winners)) or 'nobody'}")
    print(f"Last roll (var {settings.roll_variable_id}): {variables.value(settings.roll_variable_id)}")
    print(f"Last result (var {settings.result_variable_id}): {variables.value(settings.result_variable_id)}")
    controller.end_battle()


def main() -> None:
    """Main entry point."""
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        enable_color=settings.enable_color,
    )

    logger.info("Starting sample battle")
    logger.debug(f"Configuration: {settings}")

    controller = initialize_battle(create_sample_battle(), settings=settings)
    battle_loop(controller)


if __name__ == "__main__":
    main()
