"""Dice, damage and combat profile models for the battle sim."""

import re
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, field_validator


class DieType(IntEnum):
    """Supported die sizes, valued by their face count."""
    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20


class AttackOrdinal(str, Enum):
    """Position of an attack within a round."""
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"


ORDINALS = [AttackOrdinal.FIRST, AttackOrdinal.SECOND, AttackOrdinal.THIRD]


class Die(BaseModel):
    """A number of identical dice, e.g. 2d6."""
    model_config = ConfigDict(frozen=True)

    faces: DieType
    count: int = 1

    @field_validator("count")
    @classmethod
    def _count_not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"Die count must be >= 0, got {value}")
        return value

    def __str__(self) -> str:
        return f"{self.count}d{int(self.faces)}"


class Bonus(BaseModel):
    """A flat modifier. Rolls to its own value."""
    model_config = ConfigDict(frozen=True)

    value: int = 0


class Damage(BaseModel):
    """A die plus a flat bonus, e.g. 1d6+1."""
    model_config = ConfigDict(frozen=True)

    die: Die
    bonus: Bonus = Bonus()

    def __str__(self) -> str:
        if self.bonus.value == 0:
            return str(self.die)
        return f"{self.die}{self.bonus.value:+d}"


class AttackSlot(BaseModel):
    """One of the three attacks an agent makes each round."""
    model_config = ConfigDict(frozen=True)

    ordinal: AttackOrdinal
    modifier: int = 0


class Stats(BaseModel):
    """Read-only combat profile shared by all attacks of an agent."""
    model_config = ConfigDict(frozen=True)

    attacks: tuple[AttackSlot, AttackSlot, AttackSlot]
    damage: Damage
    armor_class: int

    @field_validator("attacks")
    @classmethod
    def _attacks_in_order(cls, value: tuple[AttackSlot, ...]) -> tuple[AttackSlot, ...]:
        ordinals = [slot.ordinal for slot in value]
        if ordinals != ORDINALS:
            raise ValueError(
                "Attack slots must be ordered first, second, third; "
                f"got {[o.value for o in ordinals]}"
            )
        return value


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

_DAMAGE_PATTERN = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$")


def d4(count: int = 1) -> Die:
    return Die(faces=DieType.D4, count=count)


def d6(count: int = 1) -> Die:
    return Die(faces=DieType.D6, count=count)


def d8(count: int = 1) -> Die:
    return Die(faces=DieType.D8, count=count)


def d10(count: int = 1) -> Die:
    return Die(faces=DieType.D10, count=count)


def d12(count: int = 1) -> Die:
    return Die(faces=DieType.D12, count=count)


def d20(count: int = 1) -> Die:
    return Die(faces=DieType.D20, count=count)


def parse_damage(notation: str) -> Damage:
    """Build a Damage from dice notation like '1d6+1', '2d8', '1d4-1'.

    Args:
        notation: Dice notation string.

    Returns:
        The matching Damage.

    Raises:
        ValueError: If the notation is malformed or names an unsupported die.
    """
    cleaned = notation.strip().lower().replace(" ", "")
    match = _DAMAGE_PATTERN.match(cleaned)
    if not match:
        raise ValueError(f"Invalid dice notation: {notation}")

    count = int(match.group(1))
    faces = int(match.group(2))
    bonus = int(match.group(3)) if match.group(3) else 0

    try:
        die_type = DieType(faces)
    except ValueError:
        raise ValueError(f"Unsupported die size: d{faces}") from None

    return Damage(die=Die(faces=die_type, count=count), bonus=Bonus(value=bonus))


def make_stats(
    attack_modifiers: list[int] | tuple[int, ...],
    damage: Damage | str,
    armor_class: int,
) -> Stats:
    """Build Stats from three attack modifiers, a damage formula and an AC.

    Args:
        attack_modifiers: Modifiers for the first, second and third attack.
        damage: A Damage or its dice notation.
        armor_class: Defence threshold.

    Raises:
        ValueError: If there are not exactly three modifiers.
    """
    if len(attack_modifiers) != len(ORDINALS):
        raise ValueError(
            f"Expected {len(ORDINALS)} attack modifiers, got {len(attack_modifiers)}"
        )
    if isinstance(damage, str):
        damage = parse_damage(damage)
    slots = tuple(
        AttackSlot(ordinal=ordinal, modifier=modifier)
        for ordinal, modifier in zip(ORDINALS, attack_modifiers)
    )
    return Stats(attacks=slots, damage=damage, armor_class=armor_class)
