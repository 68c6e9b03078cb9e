"""Distance, range and movement on the open battle plane."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from config import ENGAGEMENT_RANGE, STEP_SIZE

if TYPE_CHECKING:
    from models.agents import Agent, Position

logger = logging.getLogger(__name__)


def distance(pos1: Position, pos2: Position) -> float:
    """Euclidean distance between two positions."""
    return math.hypot(pos2.x - pos1.x, pos2.y - pos1.y)


def in_range(a: Agent, b: Agent, threshold: float = ENGAGEMENT_RANGE) -> bool:
    """Check if two agents are close enough to attack each other.

    Args:
        a: First agent.
        b: Second agent.
        threshold: Engagement distance; agents must be strictly closer.

    Returns:
        True if the distance between them is below the threshold.
    """
    return distance(a.position, b.position) < threshold


def move_towards(mover: Agent, target: Agent, step_size: float = STEP_SIZE) -> None:
    """Move an agent a fixed step straight toward another agent.

    The step is not clamped to the remaining gap, so a mover closer than
    one step passes through the target. Agents on the same spot do not move.

    Args:
        mover: The agent moving (mutated in place).
        target: The agent being approached.
        step_size: Distance covered by one move.
    """
    dx = target.position.x - mover.position.x
    dy = target.position.y - mover.position.y
    length = math.hypot(dx, dy)
    if length == 0:
        logger.debug("%s shares a position with %s; not moving", mover.name, target.name)
        return

    mover.position.x += dx / length * step_size
    mover.position.y += dy / length * step_size
    logger.debug(
        "%s moves to (%.2f, %.2f)", mover.name, mover.position.x, mover.position.y
    )
