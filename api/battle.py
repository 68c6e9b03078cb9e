"""Battle stepping, state retrieval, reset and log endpoints."""

import random
import threading

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ValidationError

from config import MAX_TICKS
from engine.combat import battle_summary, default_battle, run_battle, step
from models.battle import BattleEvent, BattleState, BattleSummary, SimulationConfig

router = APIRouter()

# Sync handlers run in a threadpool; one request touches the battle at a time
_battle_lock = threading.Lock()


class ResetRequest(BaseModel):
    """Request body for starting a fresh battle."""
    seed: int | None = None
    actions_per_turn: int | None = None
    step_size: float | None = None
    engagement_range: float | None = None


class StepResponse(BaseModel):
    """Response after advancing the battle."""
    events: list[BattleEvent]
    state: BattleSummary


def _get_battle(request: Request) -> BattleState:
    """Get the singleton battle from app state."""
    return request.app.state.battle


def _get_rng(request: Request) -> random.Random:
    """Get the battle's random source from app state."""
    return request.app.state.rng


@router.get("/state", response_model=BattleSummary)
def get_battle_state(request: Request) -> BattleSummary:
    """Get positions, hp and status of the current battle."""
    with _battle_lock:
        return battle_summary(_get_battle(request))


@router.post("/step", response_model=StepResponse)
def step_battle(request: Request) -> StepResponse:
    """Advance the battle by one tick.

    Stepping a concluded battle returns no events.
    """
    with _battle_lock:
        battle = _get_battle(request)
        events = step(battle, _get_rng(request))
        return StepResponse(events=events, state=battle_summary(battle))


@router.post("/run", response_model=StepResponse)
def run_to_completion(request: Request) -> StepResponse:
    """Step the battle until it concludes (bounded by MAX_TICKS)."""
    with _battle_lock:
        battle = _get_battle(request)
        first_event = len(battle.event_log)
        run_battle(battle, _get_rng(request), max_ticks=MAX_TICKS)
        return StepResponse(
            events=battle.event_log[first_event:],
            state=battle_summary(battle),
        )


@router.post("/reset", response_model=BattleSummary)
def reset_battle(request: Request, body: ResetRequest | None = None) -> BattleSummary:
    """Start a new reference battle, optionally seeded and with a new cadence."""
    body = body or ResetRequest()
    overrides = body.model_dump(exclude_none=True, exclude={"seed"})
    try:
        config = SimulationConfig(**overrides)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    with _battle_lock:
        request.app.state.battle = default_battle(config)
        if body.seed is not None:
            request.app.state.rng = random.Random(body.seed)
        return battle_summary(request.app.state.battle)


@router.get("/log")
def get_battle_log(request: Request) -> list[dict]:
    """Get the event log for the current battle."""
    with _battle_lock:
        battle = _get_battle(request)
        return [event.model_dump(mode="json") for event in battle.event_log]
