"""Agent and position models for the battle sim."""

from pydantic import BaseModel, Field, field_validator

from models.stats import Stats


class Position(BaseModel):
    """A point on the unbounded battle plane."""
    x: float = 0.0
    y: float = 0.0


class Agent(BaseModel):
    """A combatant on the battle plane."""
    name: str
    position: Position = Field(default_factory=Position)
    stats: Stats
    hp: int                         # May go negative; <= 0 is dead
    attack_index: int = 0           # Next attack slot within the round

    @field_validator("hp")
    @classmethod
    def _starts_alive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"Starting hp must be positive, got {value}")
        return value

    @property
    def is_alive(self) -> bool:
        return self.hp > 0


class AgentView(BaseModel):
    """Read-only snapshot of an agent for drawing and queries."""
    name: str
    x: float
    y: float
    hp: int
    armor_class: int
    attack_index: int
