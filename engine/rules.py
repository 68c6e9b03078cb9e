"""Attack resolution, damage and death rules for the battle sim."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from pydantic import BaseModel

from engine.dice import roll
from models.stats import AttackOrdinal, AttackSlot, Bonus, Damage, Die, DieType

if TYPE_CHECKING:
    from models.agents import Agent
    from models.stats import Stats

logger = logging.getLogger(__name__)


class AttackOutcome(BaseModel):
    """The result of one attack."""
    hit: bool
    ordinal: AttackOrdinal
    attack_roll: int                # Natural d20
    attack_total: int
    damage: int = 0
    target_hp_remaining: int
    description: str


def select_attack_slot(stats: Stats, attack_index: int) -> AttackSlot:
    """Pick the attack slot for an index, saturating at the last slot.

    Args:
        stats: The attacker's profile.
        attack_index: Attacks already made this round.

    Returns:
        The slot to use.
    """
    return stats.attacks[min(attack_index, len(stats.attacks) - 1)]


def attack_formula(slot: AttackSlot) -> Damage:
    """The roll to hit for a slot: one d20 plus the slot modifier."""
    return Damage(die=Die(faces=DieType.D20, count=1), bonus=Bonus(value=slot.modifier))


def resolve_attack(
    attacker: Agent,
    defender: Agent,
    rng: random.Random | None = None,
) -> AttackOutcome:
    """Resolve an attack: roll to hit, roll damage if hit, apply damage.

    The attacker's attack index always advances, hit or miss.

    Args:
        attacker: The attacking agent.
        defender: The defending agent.
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        AttackOutcome with full details.
    """
    slot = select_attack_slot(attacker.stats, attacker.attack_index)
    to_hit = attack_formula(slot)

    attack_roll = roll(to_hit.die, rng)
    attack_total = attack_roll + roll(to_hit.bonus, rng)
    armor_class = defender.stats.armor_class
    attacker.attack_index += 1

    if attack_total >= armor_class:
        damage = roll(attacker.stats.damage, rng)
        apply_damage(defender, damage)
        description = (
            f"{attacker.name} makes their {slot.ordinal.value} attack on {defender.name}! "
            f"Roll: {attack_roll}{slot.modifier:+d}={attack_total} vs AC {armor_class}: HIT! "
            f"Damage: {damage}. {defender.name} has {defender.hp} HP remaining."
        )
        logger.info(
            "%s hits %s with %s attack for %d damage",
            attacker.name, defender.name, slot.ordinal.value, damage,
        )
        return AttackOutcome(
            hit=True,
            ordinal=slot.ordinal,
            attack_roll=attack_roll,
            attack_total=attack_total,
            damage=damage,
            target_hp_remaining=defender.hp,
            description=description,
        )

    description = (
        f"{attacker.name} makes their {slot.ordinal.value} attack on {defender.name}! "
        f"Roll: {attack_roll}{slot.modifier:+d}={attack_total} vs AC {armor_class}: MISS!"
    )
    logger.info(
        "%s misses %s with %s attack", attacker.name, defender.name, slot.ordinal.value
    )
    return AttackOutcome(
        hit=False,
        ordinal=slot.ordinal,
        attack_roll=attack_roll,
        attack_total=attack_total,
        target_hp_remaining=defender.hp,
        description=description,
    )


def apply_damage(agent: Agent, damage: int) -> Agent:
    """Subtract damage from an agent's hp. hp is not clamped at zero."""
    agent.hp -= damage
    return agent


def check_death(agent: Agent) -> bool:
    """Check if an agent is dead (hp at or below 0)."""
    return agent.hp <= 0


def reset_attacks(agent: Agent) -> Agent:
    """Start a new round for an agent: the next attack is the first slot."""
    agent.attack_index = 0
    return agent
