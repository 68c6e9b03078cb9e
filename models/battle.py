"""Battle state, cadence and event models for the battle sim."""

from enum import Enum

from pydantic import BaseModel, field_validator

from config import ACTIONS_PER_TURN, ENGAGEMENT_RANGE, STEP_SIZE
from models.agents import Agent, AgentView
from models.stats import AttackOrdinal


class BattleStatus(str, Enum):
    """Possible states for a battle."""
    ACTIVE = "active"               # Rounds still being fought
    CONCLUDED = "concluded"         # Fewer than two agents remain


class EventKind(str, Enum):
    """Kinds of logged battle events."""
    HIT = "hit"
    MISS = "miss"
    DEATH = "death"
    CONCLUDED = "concluded"


class SimulationConfig(BaseModel):
    """Cadence of the round loop."""
    actions_per_turn: int = ACTIONS_PER_TURN
    step_size: float = STEP_SIZE
    engagement_range: float = ENGAGEMENT_RANGE

    @field_validator("actions_per_turn")
    @classmethod
    def _positive_actions(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"actions_per_turn must be >= 1, got {value}")
        return value

    @field_validator("step_size", "engagement_range")
    @classmethod
    def _positive_distance(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"Distances must be positive, got {value}")
        return value


class BattleEvent(BaseModel):
    """A logged event from the battle."""
    tick: int
    kind: EventKind
    actor: str | None = None
    target: str | None = None
    ordinal: AttackOrdinal | None = None
    attack_roll: int | None = None  # Natural d20
    attack_total: int | None = None
    damage: int | None = None
    description: str


class BattleState(BaseModel):
    """The full state of a battle. Agents are referenced by roster index."""
    agents: list[Agent]
    config: SimulationConfig = SimulationConfig()
    tick: int = 0
    status: BattleStatus = BattleStatus.ACTIVE
    winner: str | None = None       # None while active, or on a draw
    event_log: list[BattleEvent] = []


class BattleSummary(BaseModel):
    """What a host needs to draw the battle."""
    tick: int
    status: BattleStatus
    winner: str | None
    agents: list[AgentView]
