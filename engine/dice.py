"""Dice rolling utilities for the battle sim."""

import random

from models.stats import Bonus, Damage, Die, DieType


def roll_die(die: Die, rng: random.Random | None = None) -> int:
    """Roll every die in a Die and sum the results.

    Args:
        die: The dice to roll (e.g. 2d6).
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        The sum of ``die.count`` uniform draws in [1, faces]; 0 for no dice.
    """
    rng = rng or random.Random()
    return sum(rng.randint(1, int(die.faces)) for _ in range(die.count))


def roll(item: Die | Bonus | Damage, rng: random.Random | None = None) -> int:
    """Roll a Die, a Bonus or a Damage formula.

    A Bonus rolls to its own value; a Damage rolls its die plus its bonus.

    Args:
        item: What to roll.
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        The rolled total.
    """
    if isinstance(item, Die):
        return roll_die(item, rng)
    if isinstance(item, Bonus):
        return item.value
    if isinstance(item, Damage):
        return roll_die(item.die, rng) + item.bonus.value
    raise TypeError(f"Cannot roll {type(item).__name__}")


def roll_d20(rng: random.Random | None = None) -> int:
    """Roll a single d20."""
    return roll_die(Die(faces=DieType.D20, count=1), rng)
