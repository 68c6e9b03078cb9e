"""Combat orchestration: battle creation, turn-blocks, rounds, win conditions."""

from __future__ import annotations

import logging
import random

from config import MAX_TICKS, START_DISTANCE
from engine.movement import in_range, move_towards
from engine.rules import check_death, reset_attacks, resolve_attack
from models.agents import Agent, AgentView, Position
from models.battle import (
    BattleEvent,
    BattleState,
    BattleStatus,
    BattleSummary,
    EventKind,
    SimulationConfig,
)
from models.stats import make_stats

logger = logging.getLogger(__name__)


def create_battle(
    agents: list[Agent],
    config: SimulationConfig | None = None,
) -> BattleState:
    """Initialize a new battle between two agents.

    Args:
        agents: The two combatants, in acting order.
        config: Cadence overrides; defaults come from config.py.

    Returns:
        A fresh, active BattleState.

    Raises:
        ValueError: If the roster is not exactly two distinct agents.
    """
    if len(agents) != 2:
        raise ValueError(f"A battle needs exactly 2 agents, got {len(agents)}")
    if agents[0] is agents[1]:
        raise ValueError("An agent cannot fight itself")
    return BattleState(agents=list(agents), config=config or SimulationConfig())


def default_battle(config: SimulationConfig | None = None) -> BattleState:
    """Build the reference duel: Agent A against Agent B, far apart."""
    half = START_DISTANCE / 2
    agent_a = Agent(
        name="Agent A",
        position=Position(x=-half, y=0.0),
        stats=make_stats([0, -5, -10], "1d6+1", armor_class=10),
        hp=50,
    )
    agent_b = Agent(
        name="Agent B",
        position=Position(x=half, y=0.0),
        stats=make_stats([0, -4, -8], "1d4+1", armor_class=14),
        hp=30,
    )
    return create_battle([agent_a, agent_b], config)


def opponent_index(battle: BattleState, actor_index: int) -> int:
    """Roster index of the agent an actor fights: the next one along."""
    return (actor_index + 1) % len(battle.agents)


def take_turn(
    battle: BattleState,
    actor_index: int,
    rng: random.Random | None = None,
) -> list[BattleEvent]:
    """Run one agent's turn-block against its opponent.

    Each sub-action is a single move toward the opponent when out of range,
    otherwise the next attack of the round.

    Args:
        battle: Current battle state (mutated in place).
        actor_index: Roster index of the acting agent.
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        The attack events produced.
    """
    actor = battle.agents[actor_index]
    target = battle.agents[opponent_index(battle, actor_index)]
    cfg = battle.config
    events: list[BattleEvent] = []

    for _ in range(cfg.actions_per_turn):
        if not in_range(actor, target, cfg.engagement_range):
            move_towards(actor, target, cfg.step_size)
            continue

        outcome = resolve_attack(actor, target, rng)
        events.append(
            _log_event(
                battle,
                kind=EventKind.HIT if outcome.hit else EventKind.MISS,
                actor=actor.name,
                target=target.name,
                ordinal=outcome.ordinal,
                attack_roll=outcome.attack_roll,
                attack_total=outcome.attack_total,
                damage=outcome.damage if outcome.hit else None,
                description=outcome.description,
            )
        )

    return events


def remove_dead_agents(battle: BattleState) -> list[Agent]:
    """Remove every agent at or below 0 hp from the roster.

    Scans from the back so removals do not shift indices still to be checked.
    Survivors keep their relative order.

    Args:
        battle: Current battle state (mutated in place).

    Returns:
        The removed agents, in roster order.
    """
    removed: list[Agent] = []
    for index in range(len(battle.agents) - 1, -1, -1):
        agent = battle.agents[index]
        if check_death(agent):
            del battle.agents[index]
            removed.insert(0, agent)

    for agent in removed:
        _log_event(
            battle,
            kind=EventKind.DEATH,
            actor=agent.name,
            description=f"{agent.name} has been slain! ({agent.hp} HP)",
        )
    return removed


def reset_round(battle: BattleState) -> None:
    """Point every surviving agent back at its first attack slot."""
    for agent in battle.agents:
        reset_attacks(agent)


def check_win_condition(battle: BattleState) -> bool:
    """Conclude the battle once fewer than two agents remain.

    Args:
        battle: Current battle state (mutated in place).

    Returns:
        True if the battle is over.
    """
    if battle.status == BattleStatus.CONCLUDED:
        return True
    if len(battle.agents) >= 2:
        return False

    battle.status = BattleStatus.CONCLUDED
    if battle.agents:
        battle.winner = battle.agents[0].name
        description = f"{battle.winner} wins the battle with {battle.agents[0].hp} HP left."
    else:
        battle.winner = None
        description = "The battle ends in a draw; nobody is left standing."
    _log_event(battle, kind=EventKind.CONCLUDED, actor=battle.winner, description=description)
    return True


def step(battle: BattleState, rng: random.Random | None = None) -> list[BattleEvent]:
    """Advance the battle by one tick (one full round).

    Every agent takes its turn-block in roster order. The dead are removed
    after each turn-block, and survivors start the next round on their
    first attack. Stepping a concluded battle does nothing.

    Args:
        battle: Current battle state (mutated in place).
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        Events logged during this tick.
    """
    if battle.status == BattleStatus.CONCLUDED:
        return []

    first_event = len(battle.event_log)
    if check_win_condition(battle):
        return battle.event_log[first_event:]

    battle.tick += 1
    index = 0
    while index < len(battle.agents) and not check_win_condition(battle):
        actor = battle.agents[index]
        take_turn(battle, index, rng)
        remove_dead_agents(battle)
        index = _next_actor_index(battle, actor, index)

    reset_round(battle)
    check_win_condition(battle)
    return battle.event_log[first_event:]


def run_battle(
    battle: BattleState,
    rng: random.Random | None = None,
    max_ticks: int = MAX_TICKS,
) -> BattleState:
    """Step a battle until it concludes or ``max_ticks`` ticks have run.

    Args:
        battle: Current battle state (mutated in place).
        rng: Optional Random instance for seeded/testing rolls.
        max_ticks: Most ticks to run in this call.

    Returns:
        The battle state.
    """
    rng = rng or random.Random()
    for _ in range(max_ticks):
        if battle.status == BattleStatus.CONCLUDED:
            break
        step(battle, rng)
    else:
        if battle.status != BattleStatus.CONCLUDED:
            logger.warning("Battle still active after %d ticks", max_ticks)
    return battle


def battle_summary(battle: BattleState) -> BattleSummary:
    """Read-only snapshot of the battle for drawing and queries."""
    return BattleSummary(
        tick=battle.tick,
        status=battle.status,
        winner=battle.winner,
        agents=[
            AgentView(
                name=agent.name,
                x=agent.position.x,
                y=agent.position.y,
                hp=agent.hp,
                armor_class=agent.stats.armor_class,
                attack_index=agent.attack_index,
            )
            for agent in battle.agents
        ],
    )


def _next_actor_index(battle: BattleState, actor: Agent, index: int) -> int:
    """Roster index of the agent acting after ``actor``, once the dead are gone."""
    for position, agent in enumerate(battle.agents):
        if agent is actor:
            return position + 1
    return index


def _log_event(battle: BattleState, **fields) -> BattleEvent:
    """Append an event to the battle log and return it."""
    event = BattleEvent(tick=battle.tick, **fields)
    battle.event_log.append(event)
    if event.kind in (EventKind.DEATH, EventKind.CONCLUDED):
        logger.info(event.description)
    return event
