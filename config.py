"""Simulation-wide configuration constants for the battle sim."""

import os

ENGAGEMENT_RANGE = float(os.environ.get("ENGAGEMENT_RANGE", "100.0"))  # Attack when closer than this
STEP_SIZE = float(os.environ.get("STEP_SIZE", "1.0"))          # Units moved per move sub-action
ACTIONS_PER_TURN = int(os.environ.get("ACTIONS_PER_TURN", "3"))  # Sub-actions in one turn-block
MAX_TICKS = int(os.environ.get("MAX_TICKS", "10000"))          # Upper bound for run-to-completion
START_DISTANCE = float(os.environ.get("START_DISTANCE", "300.0"))  # Gap between agents at start
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
SIM_NAME = "Pathfinder 2e Battle Sim"


def battle_seed() -> int | None:
    """Read the RNG seed from the environment, if one is set."""
    raw = os.environ.get("BATTLE_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"BATTLE_SEED must be an integer, got {raw!r}") from None
